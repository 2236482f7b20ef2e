from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from reqcheck.core.errors import ConversionError, UnsupportedTypeError
from reqcheck.schemas.annotation import FieldType

_INT_RE = re.compile(r"[+-]?[0-9]+")

# same spellings strconv.ParseBool accepts
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


class ValueKind(Enum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    COMPOSITE = "composite"
    NULL = "null"


def kind_of(value: Any) -> ValueKind:
    """
    Classify a decoded value (from JSON or from URL parsing).
    bool is checked before int since bool subclasses int.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (dict, list, tuple)):
        return ValueKind.COMPOSITE
    raise UnsupportedTypeError(f"{type(value).__name__} values are not supported")


def stringify(field_type: FieldType, value: Any) -> str | None:
    """
    Render a decoded value as the text the parsers consume.

    Floats bound for an int field keep zero decimals, every other target
    keeps two. The rendering rounds, so 3.7 -> "4" for int.
    """
    kind = kind_of(value)

    if kind is ValueKind.NULL:
        return None
    if kind is ValueKind.INTEGER:
        return str(value)
    if kind is ValueKind.BOOL:
        return "true" if value else "false"
    if kind is ValueKind.FLOAT:
        if field_type is FieldType.INT:
            return f"{value:.0f}"
        return f"{value:.2f}"
    if kind is ValueKind.STRING:
        return value

    # composite
    if field_type is not FieldType.MAP:
        raise UnsupportedTypeError(f"composite value is not supported for {field_type.value}")
    try:
        return json.dumps(value, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError):
        raise UnsupportedTypeError("can't parse map type")


def _parse_int(s: str) -> int:
    if not _INT_RE.fullmatch(s):
        raise ConversionError(s, FieldType.INT.value)
    try:
        return int(s)
    except ValueError:
        # over the interpreter's digit limit
        raise ConversionError(s, FieldType.INT.value)


def _parse_float(s: str) -> float:
    # float() tolerates padding and digit separators, the wire format doesn't
    if s != s.strip() or "_" in s:
        raise ConversionError(s, FieldType.FLOAT.value)
    try:
        return float(s)
    except ValueError:
        raise ConversionError(s, FieldType.FLOAT.value)


def _parse_bool(s: str) -> bool:
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ConversionError(s, FieldType.BOOL.value)


def coerce(field_type: FieldType | str, value: Any) -> Any:
    """
    Convert `value` into the declared type.

    Returns None for a null input. Raises ConversionError when the text
    can't be parsed and UnsupportedTypeError for an unknown type name or
    a composite value outside a map field. No value is returned on error.
    """
    if not isinstance(field_type, FieldType):
        field_type = FieldType.parse(field_type)

    s = stringify(field_type, value)
    if s is None:
        return None

    if field_type is FieldType.INT:
        return _parse_int(s)
    if field_type is FieldType.FLOAT:
        return _parse_float(s)
    if field_type is FieldType.BOOL:
        return _parse_bool(s)
    # string, map and empty pass through; map contents aren't inspected
    return s
