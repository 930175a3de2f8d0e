"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and the ``--json`` output consume this type. Rejected operations
carry a ServiceError built from the domain exception; persistence and
plugin failures never fail a result, they ride along as ``warnings``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from pomoctl.domain.errors import PomoError

# Attributes of domain errors copied into ServiceError.detail.
_DETAIL_ATTRS = ("text", "reason", "op", "state")


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is one of ``INVALID_FLOW``, ``INVALID_TRANSITION`` or
    ``INVALID_VALUE``; ``detail`` holds the offending input or state.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_error(cls, exc: PomoError, **detail: Any) -> ServiceError:
        for attr in _DETAIL_ATTRS:
            value = getattr(exc, attr, None)
            if value is not None:
                detail.setdefault(attr, value)
        return cls(
            code=exc.code,
            message=str(exc),
            detail={k: str(v) for k, v in detail.items()},
        )


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"toggle"``, ``"flow_set"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues (unpersisted state, failing plugins).
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def rejected(cls, op: str, exc: PomoError, **detail: Any) -> ServiceResult:
        """Failed result for a domain error; nothing was mutated."""
        return cls(ok=False, op=op, error=ServiceError.from_error(exc, **detail))
