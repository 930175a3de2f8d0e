"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pomoctl.toml only contains
overrides. An empty (or absent) file gives a classic 25/5 timer.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from pomoctl.domain.errors import ParseError
from pomoctl.domain.flow import DEFAULT_FLOW, parse_flow
from pomoctl.domain.lifecycle import AdvancePolicy, BreakSource


class TimerConfig(BaseModel):
    """[timer] section."""

    model_config = {"frozen": True}

    policy: AdvancePolicy = AdvancePolicy.CONTINUOUS
    work_minutes: int = Field(default=25, ge=0)
    break_minutes: int = Field(default=5, ge=0)
    break_source: BreakSource = BreakSource.FIXED
    default_flow: str = DEFAULT_FLOW
    tick_interval: float = Field(default=1.0, ge=0)

    @field_validator("default_flow")
    @classmethod
    def _check_flow(cls, value: str) -> str:
        try:
            parse_flow(value)
        except ParseError as exc:
            raise ValueError(exc.reason) from exc
        return value


class SoundConfig(BaseModel):
    """[sound] section.

    ``muted`` and ``volume`` are initial values only; once the timer has
    persisted a preference, the stored one wins.
    """

    model_config = {"frozen": True}

    muted: bool = True
    volume: int = Field(default=50, ge=0, le=100)
    bell: bool = True


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    dirname: str = ".pomoctl"

