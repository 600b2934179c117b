"""Pattern helpers for Stacks addresses, STX amounts and network names."""

from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

ADDRESS_BODY_LENGTH = 39

_ADDRESS_PREFIXES = {"ST": "testnet", "SP": "mainnet"}
KNOWN_NETWORKS = frozenset(_ADDRESS_PREFIXES.values())

# Format check only: prefix plus 39 alphanumerics, no c32 checksum.
_ADDRESS_RE = re.compile(r"(?:ST|SP)[a-zA-Z0-9]{%d}" % ADDRESS_BODY_LENGTH)

# A number that is not glued to other alphanumerics, so digits inside an
# address never read as an amount.
_AMOUNT_RE = re.compile(
    r"(?:^|[^A-Z0-9])(\d+(?:\.\d+)?|\.\d+)\s*(?:stx)?(?:[^A-Z0-9]|$)",
    re.IGNORECASE,
)

_STANDALONE_AMOUNT_RE = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)\s*(?:stx)?$", re.IGNORECASE)

_NETWORK_ALIASES = {
    "test": "testnet",
    "testnet": "testnet",
    "stacks-testnet": "testnet",
    "main": "mainnet",
    "mainnet": "mainnet",
    "stacks-mainnet": "mainnet",
}


def extract_amount(text: str | None) -> Optional[float]:
    """Return the first standalone number in ``text``, if any."""

    if not text:
        return None
    match = _AMOUNT_RE.search(text)
    if not match:
        return None
    return parse_amount(match.group(1))


def extract_address(text: str | None) -> Optional[str]:
    """Return the first address-shaped token in ``text``, if any."""

    if not text:
        return None
    match = _ADDRESS_RE.search(text)
    return match.group(0) if match else None


def is_valid_stacks_address(value: str | None) -> bool:
    if not value:
        return False
    return bool(_ADDRESS_RE.fullmatch(value))


def standalone_address(text: str | None) -> Optional[str]:
    """Return the address when the whole message is nothing but one."""

    candidate = (text or "").strip()
    return candidate if is_valid_stacks_address(candidate) else None


def standalone_amount(text: str | None) -> Optional[float]:
    """Return the amount when the whole message is a bare number (``0.5``, ``2 stx``)."""

    match = _STANDALONE_AMOUNT_RE.match((text or "").strip())
    return parse_amount(match.group(1)) if match else None


def address_network(address: str) -> Optional[str]:
    if not is_valid_stacks_address(address):
        return None
    return _ADDRESS_PREFIXES[address[:2]]


def normalize_network(name: str | None, default: str = "testnet") -> str:
    """Collapse user-provided network names into ``testnet``/``mainnet``."""

    if not name:
        return default
    key = name.lower().strip()
    return _NETWORK_ALIASES.get(key, key)


def format_amount(value: float) -> str:
    """Render an amount the way a user typed it: ``5`` rather than ``5.0``."""

    try:
        normalized = Decimal(str(value)).normalize()
    except InvalidOperation:
        return str(value)
    return format(normalized, "f")


def parse_amount(raw: str) -> Optional[float]:
    """Parse a matched number; None when it is not a finite float."""

    try:
        value = float(raw)
    except ValueError:
        return None
    # a long enough digit run overflows to inf
    return value if math.isfinite(value) else None


__all__ = [
    "ADDRESS_BODY_LENGTH",
    "KNOWN_NETWORKS",
    "extract_amount",
    "parse_amount",
    "extract_address",
    "is_valid_stacks_address",
    "standalone_address",
    "standalone_amount",
    "address_network",
    "normalize_network",
    "format_amount",
]
