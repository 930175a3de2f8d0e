"""BaseService — abstract foundation for pomoctl services.

Every service receives a :class:`Workspace` at construction time and
translates domain exceptions into failed :class:`ServiceResult` values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pomoctl.services.result import ServiceResult

if TYPE_CHECKING:
    from pomoctl.domain.errors import PomoError
    from pomoctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class TimerService(BaseService):
            def reset(self) -> ServiceResult:
                try:
                    self._scheduler.reset()
                except PomoError as exc:
                    return self._failure("reset", exc)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _failure(op: str, exc: PomoError, **detail: Any) -> ServiceResult:
        """Build a failed result from a domain error."""
        logger.debug("%s rejected: %s", op, exc)
        return ServiceResult.rejected(op, exc, **detail)
