from typing import Any

from pydantic import BaseModel, Field

from reqcheck.schemas.annotation import RouteSchema


class ValidationError(BaseModel):
    """Individual validation error"""
    field: str | None
    code: str  # required, type, unsupported_type, unsupported_content_type, payload_decode
    message: str


class ValidationPreviewRequest(BaseModel):
    """A request to validate against a schema without routing it"""
    schema_: RouteSchema = Field(alias="schema")
    method: str = "GET"
    url: str = "/"
    params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    body: str | None = None  # raw body text, so malformed JSON can be previewed


class ValidationPreviewResponse(BaseModel):
    """Response from validation preview endpoint"""
    valid: bool
    status: int
    params: dict[str, Any]
    queries: dict[str, Any]
    payload: dict[str, Any]
    errors: list[ValidationError]
