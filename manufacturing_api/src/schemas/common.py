from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.db.models.enums import LookupIntEnum


def _to_naive_utc(value: datetime) -> datetime:
    """Normalize aware datetimes to naive UTC; naive values are taken as UTC already."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


# Datetime stored as naive UTC regardless of the offset supplied by the client.
UtcDateTime = Annotated[datetime, AfterValidator(_to_naive_utc)]


# PUBLIC_INTERFACE
def lookup_enum(enum_class: type[LookupIntEnum]):
    """Annotated enum type accepting the integer value or the member name."""
    return Annotated[enum_class, BeforeValidator(enum_class.parse)]


class APIModel(BaseModel):
    """Base schema: camelCase JSON aliases, field names accepted on input, ORM reads."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(APIModel):
    """Standard message response."""
    message: str = Field(..., description="Human readable message")
    details: Optional[dict] = Field(default=None, description="Optional extra data")


class ErrorInfo(BaseModel):
    """Structured error description."""
    type: str = Field(..., description="Machine-readable error type code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(default=None, description="Optional error details (e.g., validation issues)")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Standardized API error envelope returned by exception handlers."""
    status: int = Field(..., description="HTTP status code")
    error: ErrorInfo = Field(..., description="Error details")
    correlation_id: Optional[str] = Field(default=None, description="Request correlation ID")
    path: Optional[str] = Field(default=None, description="Request path")
    method: Optional[str] = Field(default=None, description="HTTP method")
    timestamp: datetime = Field(..., description="Error timestamp (UTC)")
