from __future__ import annotations

import json

from reqcheck.core.errors import PayloadDecodeError, UnsupportedContentTypeError
from reqcheck.core.query import CaseInsensitiveLookup

JSON_MEDIA_TYPE = "application/json"


def media_type(content_type: str | None) -> str:
    """
    Supports:
      application/json
      Application/JSON; charset=utf-8
    """
    return (content_type or "").split(";", 1)[0].strip().lower()


def ensure_json(content_type: str | None) -> None:
    mt = media_type(content_type)
    if mt != JSON_MEDIA_TYPE:
        shown = (content_type or "").split(";", 1)[0].strip() or "empty content type"
        raise UnsupportedContentTypeError(f"{shown} is not supported by this API")


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise PayloadDecodeError(f"payload is not valid JSON: invalid literal {name}")


def decode_payload(body: bytes) -> CaseInsensitiveLookup:
    """Decode a JSON object body into a flat key -> value lookup"""
    try:
        data = json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError:
        raise PayloadDecodeError("payload is not valid UTF-8")
    except json.JSONDecodeError as e:
        raise PayloadDecodeError(f"payload is not valid JSON: {e.msg}")
    except ValueError:
        # e.g. an integer literal over the interpreter's digit limit
        raise PayloadDecodeError("payload is not valid JSON: number out of range")

    if not isinstance(data, dict):
        raise PayloadDecodeError("payload must be a JSON object")

    return CaseInsensitiveLookup(data)
