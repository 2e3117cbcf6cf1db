"""Cyclic reconnect backoff over ``FbOptions.reconnect_retry_delays``."""

from __future__ import annotations

from datetime import timedelta
from typing import Sequence

from .options import FbOptions


class BackoffSchedule:
    def __init__(self, delays: Sequence[timedelta]) -> None:
        if not delays:
            raise ValueError("backoff schedule needs at least one delay")
        self._delays = delays
        self._attempts = 0

    @classmethod
    def from_options(cls, options: FbOptions) -> "BackoffSchedule":
        return cls(options.reconnect_retry_delays)

    @property
    def attempts(self) -> int:
        return self._attempts

    def next_delay(self) -> timedelta:
        """Delay before the next attempt; wraps to the first delay after the last."""
        delay = self._delays[self._attempts % len(self._delays)]
        self._attempts += 1
        return delay

    def reset(self) -> None:
        self._attempts = 0


__all__ = ["BackoffSchedule"]
