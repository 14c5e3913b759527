"""ServiceResult and ServiceError: the contract every service returns.

The CLI consumes this type and nothing else; services never print.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

NOT_FOUND = "NOT_FOUND"
NOT_A_TASK = "NOT_A_TASK"
INVALID_FRONTMATTER = "INVALID_FRONTMATTER"
NOT_ELIGIBLE = "NOT_ELIGIBLE"
INVALID_DATE = "INVALID_DATE"
WRITE_FAILED = "WRITE_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"complete"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, such as a failed history append.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
