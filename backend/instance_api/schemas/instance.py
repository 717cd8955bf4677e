"""Instance Schemas — Pydantic models for the instance endpoints.

Invariants:
    - id is a non-empty string of decimal digits (max 16); JSON numbers are coerced to str
    - password and content are opaque strings: no stripping, empty allowed
    - Success responses always carry success=True, a message and a data object

Design Decisions:
    - Separate request models per endpoint shape (create / save / access) over one
      model with optional fields: missing fields fail validation at the boundary
    - Coercing numeric ids keeps clients that send `"id": 482913` working
"""

from pydantic import BaseModel, Field, field_validator


def _coerce_id(v: object) -> object:
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class InstanceCreate(BaseModel):
    """Create request — the id is allocated server-side."""
    password: str
    content: str


class InstanceAccess(BaseModel):
    """Pull / destroy request."""
    id: str = Field(pattern=r"^[0-9]{1,16}$")
    password: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, v: object) -> object:
        return _coerce_id(v)


class InstanceSave(InstanceAccess):
    """Save request — overwrites content."""
    content: str


class InstanceData(BaseModel):
    """Payload of a successful operation. content only for pull."""
    id: str
    content: str | None = None


class InstanceResponse(BaseModel):
    """Success envelope."""
    success: bool = True
    message: str
    data: InstanceData
