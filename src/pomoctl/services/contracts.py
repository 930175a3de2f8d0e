"""Typed payload contracts for service and adapter boundaries.

These models validate operation payload shapes before they leave the
service layer, so renderer and JSON consumers can rely on key names.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="json")


class FlowItem(BaseModel):
    """One session in the flow."""

    index: int
    minutes: int
    kind: Literal["work", "break"]
    current: bool


class FlowData(BaseModel):
    """Payload contract for ``flow_show`` / ``flow_set``."""

    flow: str
    cursor: int
    count: int
    items: list[FlowItem]


class TimerStatusData(BaseModel):
    """Payload contract shared by every timer operation."""

    label: str
    title: str
    state: Literal["idle", "running", "paused", "awaiting_choice"]
    kind: Literal["work", "break"]
    remaining_minutes: int
    remaining_seconds: int
    policy: Literal["continuous", "interactive"]
    flow: str
    cursor: int
    completed_cycles: int
    muted: bool
    volume: int = Field(ge=0, le=100)


class TickData(TimerStatusData):
    """Payload contract for ``tick`` and ``run``."""

    ticks: int
    expired: int
    ignored: int
    interrupted: bool = False
