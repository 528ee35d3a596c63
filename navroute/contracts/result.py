"""Result wrappers for route mutations and service calls."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from navroute.contracts.enums import RejectionReason

T = TypeVar("T")


class MutationResult(BaseModel):
    """Outcome of a route mutation.

    A rejected mutation is a normal outcome of interaction (the route is
    left unchanged), so it is reported here instead of raised.
    """

    applied: bool
    reason: RejectionReason | None = None
    version: int | None = Field(
        default=None, description="Store version after the mutation"
    )
    waypoint_id: str | None = None

    def __bool__(self) -> bool:
        return self.applied

    @classmethod
    def ok(
        cls, version: int | None = None, waypoint_id: str | None = None
    ) -> "MutationResult":
        return cls(applied=True, version=version, waypoint_id=waypoint_id)

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "MutationResult":
        return cls(applied=False, reason=reason)


class ServiceError(BaseModel):
    """Structured error from an external service call."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, str | int | float | bool | None] | None = None


class ServiceResult(BaseModel, Generic[T]):
    """Generic wrapper for service responses.

    On success: ``data`` is populated.
    On failure: ``error`` is populated with structured error info.
    """

    success: bool
    data: T | None = None
    error: ServiceError | None = None
    duration_ms: float | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))

    @classmethod
    def ok(cls, data: T, duration_ms: float | None = None) -> "ServiceResult[T]":
        return cls(success=True, data=data, duration_ms=duration_ms)

    @classmethod
    def fail(
        cls, code: str, message: str, **details: str | int | float | bool | None
    ) -> "ServiceResult[T]":
        return cls(
            success=False,
            error=ServiceError(code=code, message=message, details=details or None),
        )
