"""Logger factories handed to SDK components through the options."""

from __future__ import annotations

import logging
from typing import Protocol

_NULL_LOGGER = logging.getLogger("featbit.null")
_NULL_LOGGER.addHandler(logging.NullHandler())
_NULL_LOGGER.propagate = False
_NULL_LOGGER.disabled = True


class LoggerFactory(Protocol):
    def get_logger(self, name: str) -> logging.Logger:  # pragma: no cover - interface
        ...


class NullLoggerFactory:
    """Hands out loggers that discard everything."""

    def get_logger(self, name: str) -> logging.Logger:
        return _NULL_LOGGER


class StdLoggerFactory:
    def __init__(self, prefix: str = "featbit") -> None:
        self.prefix = prefix

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(f"{self.prefix}.{name}")


__all__ = ["LoggerFactory", "NullLoggerFactory", "StdLoggerFactory"]
