from __future__ import annotations


class CheckError(Exception):
    """
    Base class for every request validation failure.

    All subclasses stem from client input, so the HTTP boundary maps
    them uniformly to 400.
    """

    code = "invalid"

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_detail(self) -> dict:
        return {"message": self.message, "code": self.code, "field": self.field}


class MissingRequiredFieldError(CheckError):
    code = "required"


class ConversionError(CheckError):
    code = "type"

    def __init__(self, value: str, type_name: str, *, field: str | None = None):
        super().__init__(f"cannot convert {value} to {type_name}", field=field)
        self.value = value
        self.type_name = type_name


class UnsupportedTypeError(CheckError):
    code = "unsupported_type"


class UnsupportedContentTypeError(CheckError):
    code = "unsupported_content_type"


class PayloadDecodeError(CheckError):
    code = "payload_decode"
