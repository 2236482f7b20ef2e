from __future__ import annotations

from collections.abc import Iterable

from fastapi import HTTPException, Request, status

from reqcheck.core.checker import CheckRequest, CheckResult, check, needs_body
from reqcheck.core.payload import JSON_MEDIA_TYPE, media_type
from reqcheck.schemas.annotation import RouteSchema


async def build_check_request(
    request: Request,
    schema: RouteSchema,
    *,
    mutating_methods: Iterable[str] | None = None,
) -> CheckRequest:
    """
    Snapshot a Starlette request. The body is awaited only when the
    payload stage will run, and then read whole into memory.
    """
    body: bytes | None = None
    if needs_body(request.method, schema, mutating_methods=mutating_methods):
        if media_type(request.headers.get("content-type")) == JSON_MEDIA_TYPE:
            body = await request.body()

    return CheckRequest(
        method=request.method,
        url=str(request.url),
        # repeated header names are folded the way HTTP allows
        headers={k: ", ".join(request.headers.getlist(k)) for k in request.headers.keys()},
        read_body=(lambda: body) if body is not None else None,
    )


def checked(schema: RouteSchema, *, mutating_methods: Iterable[str] | None = None):
    """
    Route dependency:

      @router.post("/items/{item_id}")
      def create(res: CheckResult = Depends(checked(ITEM_SCHEMA))):
          ...

    Raises 400 with {"message", "code", "field"} when the request doesn't
    match the schema.
    """

    async def _dependency(request: Request) -> CheckResult:
        req = await build_check_request(request, schema, mutating_methods=mutating_methods)
        res = check(req, schema, request.path_params, mutating_methods=mutating_methods)
        if not res.ok:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=res.error_detail(),
            )
        return res

    return _dependency
