"""FeatBit Python server SDK options."""

from .backoff import BackoffSchedule
from .bootstrapping import JsonBootstrapProvider, NullBootstrapProvider
from .errors import ConfigurationError
from .logging import NullLoggerFactory, StdLoggerFactory
from .options import FbOptions, default
from .options_builder import FbOptionsBuilder

__all__ = [
    "BackoffSchedule",
    "ConfigurationError",
    "FbOptions",
    "FbOptionsBuilder",
    "JsonBootstrapProvider",
    "NullBootstrapProvider",
    "NullLoggerFactory",
    "StdLoggerFactory",
    "default",
]
