from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from fastapi import status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from reqcheck.core.coercion import coerce
from reqcheck.core.config import settings
from reqcheck.core.errors import CheckError, MissingRequiredFieldError
from reqcheck.core.logging import get_logger
from reqcheck.core.payload import decode_payload, ensure_json
from reqcheck.core.query import CaseInsensitiveLookup, parse_params, parse_query
from reqcheck.schemas.annotation import FieldSpec, RouteSchema

logger = get_logger(__name__)


class CheckRequest(BaseModel):
    """What the checker needs from an incoming HTTP request"""
    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    read_body: Callable[[], bytes] | None = None

    @field_validator("headers")
    @classmethod
    def _lower_header_names(cls, v: dict[str, str]) -> dict[str, str]:
        return {k.lower(): val for k, val in v.items()}

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class CheckResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: int = status.HTTP_200_OK
    params: dict[str, Any] = Field(default_factory=dict)
    queries: dict[str, Any] = Field(default_factory=dict)
    payload: dict[str, Any] = Field(default_factory=dict)
    error: CheckError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def error_detail(self) -> dict | None:
        return self.error.to_detail() if self.error else None


def _mutating(method: str, mutating_methods: Iterable[str] | None) -> bool:
    if mutating_methods is None:
        allowed = settings.mutating_methods_set
    else:
        allowed = {m.upper() for m in mutating_methods}
    return method.upper() in allowed


def needs_body(
    method: str,
    schema: RouteSchema,
    *,
    mutating_methods: Iterable[str] | None = None,
) -> bool:
    """
    True when the payload stage will run for this method and schema.
    Async callers use it to decide whether to await the body at all.
    """
    return bool(schema.payload) and _mutating(method, mutating_methods)


def _coerce_field(spec: FieldSpec, value: Any) -> Any:
    try:
        return coerce(spec.field_type, value)
    except CheckError as e:
        e.field = spec.key
        raise


def _check_params(specs: list[FieldSpec], raw: CaseInsensitiveLookup, out: dict[str, Any]) -> None:
    for spec in specs:
        if spec.key not in raw:
            out[spec.key] = None
            continue
        out[spec.key] = _coerce_field(spec, raw[spec.key])


def _check_queries(specs: list[FieldSpec], raw: CaseInsensitiveLookup, out: dict[str, Any]) -> None:
    for spec in specs:
        value = raw.lookup(spec.key)
        if value == "":
            if not spec.nullable:
                raise MissingRequiredFieldError(f"{spec.key}'s queries can't be empty", field=spec.key)
            out[spec.key] = None
            continue
        out[spec.key] = _coerce_field(spec, value)


def _check_payload(specs: list[FieldSpec], raw: CaseInsensitiveLookup, out: dict[str, Any]) -> None:
    for spec in specs:
        value = raw.get(spec.key)
        if value is None or value == "":
            if not spec.nullable:
                raise MissingRequiredFieldError(f"{spec.key}'s key is required in payload", field=spec.key)
            out[spec.key] = None
            continue
        out[spec.key] = _coerce_field(spec, value)


def check(
    request: CheckRequest,
    schema: RouteSchema,
    path_params: Mapping[str, str] | None = None,
    *,
    mutating_methods: Iterable[str] | None = None,
    valueless_query_as_key: bool | None = None,
) -> CheckResult:
    """
    Validate and coerce one request against its route schema.

    Stages run in order params -> queries -> payload; the first failing
    stage stops the check and the result carries a 400 status and the
    error. The payload stage only runs for mutating methods with at least
    one declared payload field; the Content-Type is verified before the
    body is read.
    """
    res = CheckResult()
    if valueless_query_as_key is None:
        valueless_query_as_key = settings.VALUELESS_QUERY_AS_KEY

    stage = "params"
    try:
        _check_params(schema.params, parse_params(path_params), res.params)

        stage = "queries"
        raw_queries = parse_query(request.url, valueless_as_key=valueless_query_as_key)
        _check_queries(schema.queries, raw_queries, res.queries)

        if needs_body(request.method, schema, mutating_methods=mutating_methods):
            stage = "payload"
            ensure_json(request.header("Content-Type"))
            body = request.read_body() if request.read_body else b""
            _check_payload(schema.payload, decode_payload(body), res.payload)
    except CheckError as e:
        logger.info(
            "request check failed: stage=%s code=%s field=%s method=%s",
            stage, e.code, e.field, request.method,
        )
        res.status = status.HTTP_400_BAD_REQUEST
        res.error = e
        return res

    logger.debug("request check passed: method=%s route=%s", request.method, schema.route)
    return res
