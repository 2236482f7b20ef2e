from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any
from urllib.parse import unquote_plus


class CaseInsensitiveLookup(Mapping):
    """
    Read-only mapping with lower-cased keys.

    Built fresh for every request; nothing is shared between calls.
    """

    def __init__(self, items: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = {}
        for k, v in (items or {}).items():
            self._data[k.lower()] = v

    def __getitem__(self, key: str) -> Any:
        return self._data[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"CaseInsensitiveLookup({self._data!r})"

    def lookup(self, key: str) -> Any:
        """Value for key, or "" when the key wasn't supplied"""
        return self._data.get(key.lower(), "")


def parse_params(path_params: Mapping[str, str] | None) -> CaseInsensitiveLookup:
    # router already extracted them, nothing to split
    return CaseInsensitiveLookup(path_params or {})


def split_query_string(url: str) -> str:
    """Everything after the first "?", without any fragment"""
    _, sep, rest = url.partition("?")
    if not sep:
        return ""
    return rest.split("#", 1)[0]


def parse_query(url: str, *, valueless_as_key: bool = True) -> CaseInsensitiveLookup:
    """
    Parse the query string of a full URL.

    Supports:
      /items?a=1&b=two      -> {"a": "1", "b": "two"}
      /items?Flag           -> {"flag": "Flag"} (or {"flag": ""} with valueless_as_key=False)
      /items                -> {}

    Keys are lower-cased, values keep their case. The last duplicate wins.
    """
    raw = split_query_string(url)
    out: dict[str, str] = {}
    if not raw:
        return CaseInsensitiveLookup(out)

    for pair in raw.split("&"):
        if not pair:
            continue
        k, sep, v = pair.partition("=")
        key = unquote_plus(k)
        if sep:
            out[key.lower()] = unquote_plus(v)
        else:
            out[key.lower()] = key if valueless_as_key else ""

    return CaseInsensitiveLookup(out)
