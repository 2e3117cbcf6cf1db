"""Errors raised by the FeatBit server SDK."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when options fail validation at build time."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"invalid option '{field}': {reason}")
        self.field = field
        self.reason = reason


__all__ = ["ConfigurationError"]
