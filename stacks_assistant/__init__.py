"""Stacks Chat Assistant backend."""

__version__ = "0.1.0"
