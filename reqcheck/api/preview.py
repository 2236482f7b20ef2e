from fastapi import APIRouter

from reqcheck.core.checker import CheckRequest, check
from reqcheck.schemas.validation import (
    ValidationError,
    ValidationPreviewRequest,
    ValidationPreviewResponse,
)

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("/preview", response_model=ValidationPreviewResponse)
def preview_validation(payload: ValidationPreviewRequest):
    """
    Dry-run a request against a schema. Always 200; the verdict is in
    the body.
    """
    body = payload.body.encode("utf-8") if payload.body is not None else None
    req = CheckRequest(
        method=payload.method,
        url=payload.url,
        headers=payload.headers,
        read_body=(lambda: body) if body is not None else None,
    )
    res = check(req, payload.schema_, payload.params)

    errors = []
    if res.error is not None:
        errors.append(
            ValidationError(field=res.error.field, code=res.error.code, message=res.error.message)
        )

    return ValidationPreviewResponse(
        valid=res.ok,
        status=res.status,
        params=res.params,
        queries=res.queries,
        payload=res.payload,
        errors=errors,
    )
