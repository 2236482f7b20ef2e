from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from reqcheck.core.errors import UnsupportedTypeError


class FieldType(str, Enum):
    INT = "int"
    FLOAT = "float64"
    BOOL = "bool"
    STRING = "string"
    MAP = "map"
    EMPTY = "empty"

    @classmethod
    def parse(cls, name: str) -> "FieldType":
        """
        Case-insensitive lookup of a schema type name.
        "float" is accepted as an alias of "float64".
        """
        s = (name or "").strip().lower()
        if s == "float":
            return cls.FLOAT
        try:
            return cls(s)
        except ValueError:
            raise UnsupportedTypeError(f"{name}'s type is not supported")


class FieldSpec(BaseModel):
    """One declared param/query/payload key"""
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1)
    type: str  # int|float64|bool|string|map|empty
    nullable: bool = False

    @property
    def field_type(self) -> FieldType:
        return FieldType.parse(self.type)


class RouteSchema(BaseModel):
    """Declared fields of one API route, in declaration order"""
    model_config = ConfigDict(frozen=True)

    method: str | None = None
    route: str | None = None
    params: list[FieldSpec] = Field(default_factory=list)
    queries: list[FieldSpec] = Field(default_factory=list)
    payload: list[FieldSpec] = Field(default_factory=list)
