"""
Structured logging for the assistant API and CLI.

One stdout handler renders both structlog and stdlib records. The OpenRouter
key is masked in every rendered event, including exception text that echoes
request headers back.
"""

import logging
import sys
from typing import Iterable, Optional

import structlog

from .config import settings

REDACTED = "***"

_NOISY_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def redact_secrets(secrets: Iterable[str]) -> structlog.types.Processor:
    """Build a processor that masks each non-empty secret in string values."""

    values = tuple(secret for secret in secrets if secret)

    def processor(logger, method_name, event_dict):
        if not values:
            return event_dict
        for key, value in event_dict.items():
            if isinstance(value, str):
                for secret in values:
                    value = value.replace(secret, REDACTED)
                event_dict[key] = value
        return event_dict

    return processor


def select_renderer(level: int, log_format: str) -> structlog.types.Processor:
    fmt = (log_format or "auto").lower()
    if fmt == "console" or (fmt == "auto" and level == logging.DEBUG):
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Override ``settings.log_level``
        log_format: Override ``settings.log_format``
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)
    renderer = select_renderer(level, log_format or settings.log_format)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if isinstance(renderer, structlog.processors.JSONRenderer):
        shared_processors.append(structlog.processors.format_exc_info)
    shared_processors += [
        structlog.processors.UnicodeDecoder(),
        redact_secrets([settings.openrouter_api_key]),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request line at INFO
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
