"""Shared exceptions, JSON helpers and settings."""

from ._config import Settings, settings
from ._exceptions import DataError, FormatError, UnresolvedFeatureError
from ._json import dumps, loads
from ._types import JSONScalar, JSONValue

__all__ = [
    "Settings",
    "settings",
    "DataError",
    "FormatError",
    "UnresolvedFeatureError",
    "dumps",
    "loads",
    "JSONScalar",
    "JSONValue",
]
