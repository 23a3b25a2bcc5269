"""JSON encoding and decoding through orjson."""

from __future__ import annotations

import orjson

from ._config import settings
from ._exceptions import FormatError
from ._types import JSONValue


def dumps(obj: object) -> bytes:
    """Serialize ``obj`` to JSON bytes.

    Numpy scalars and arrays are accepted, so thresholds kept as numpy types
    serialize without conversion.
    """
    option = orjson.OPT_SERIALIZE_NUMPY
    if settings.PRETTY_JSON:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, option=option)


def loads(data: bytes | bytearray | memoryview | str) -> JSONValue:
    """Parse JSON ``data``.

    Raises:
        FormatError: If ``data`` is not valid JSON.
    """
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON document: {e}") from e
