import json

from reqcheck.core.checker import CheckRequest
from reqcheck.schemas.annotation import FieldSpec, RouteSchema


def field(key: str, type: str = "string", nullable: bool = False) -> FieldSpec:
    return FieldSpec(key=key, type=type, nullable=nullable)


def make_schema(
    *,
    params: list[dict] | None = None,
    queries: list[dict] | None = None,
    payload: list[dict] | None = None,
) -> RouteSchema:
    """
    fields example:
      queries=[{"key": "page", "type": "int", "nullable": True}]
    """
    return RouteSchema(
        params=[FieldSpec(**f) for f in params or []],
        queries=[FieldSpec(**f) for f in queries or []],
        payload=[FieldSpec(**f) for f in payload or []],
    )


class BodySpy:
    """Body reader that records how often it was called"""

    def __init__(self, body: bytes):
        self.body = body
        self.calls = 0

    def __call__(self) -> bytes:
        self.calls += 1
        return self.body


def make_request(
    method: str = "GET",
    url: str = "/",
    *,
    json_body=None,
    raw_body: bytes | None = None,
    content_type: str | None = "application/json",
) -> tuple[CheckRequest, BodySpy]:
    if raw_body is None:
        raw_body = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
    spy = BodySpy(raw_body)
    headers = {"Content-Type": content_type} if content_type is not None else {}
    return CheckRequest(method=method, url=url, headers=headers, read_body=spy), spy
