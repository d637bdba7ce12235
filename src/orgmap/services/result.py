"""ServiceResult and ServiceError: the contract between services and adapters.

INVARIANT: Every public service method returns a ServiceResult. Traversal
faults such as cycles or missing anchors become failed results
carrying an :class:`~orgmap.domain.types.ErrorCode`; they never escape as
exceptions past the service layer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from orgmap.domain.types import ErrorCode


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @property
    def status(self) -> int:
        """HTTP-style status for the error code (500 for unknown codes)."""
        try:
            return ErrorCode(self.code).status
        except ValueError:
            return 500


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"tree"``, ``"hierarchy"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        """Build a failed result; the error detail always carries ``status``."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(
                code=str(code),
                message=message,
                detail={"status": code.status, **detail},
            ),
        )
