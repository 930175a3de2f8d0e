"""Tests for output mode dispatch and Rich renderers."""

from __future__ import annotations

import json
from typing import Any

import pytest

from pomoctl.output.formatters import OutputSettings, format_result
from pomoctl.output.renderers import render_quiet, render_result
from pomoctl.services.result import ServiceError, ServiceResult


def _status(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "label": "24:59 - Work",
        "title": "24:59 - Work",
        "state": "running",
        "kind": "work",
        "remaining_minutes": 24,
        "remaining_seconds": 59,
        "policy": "continuous",
        "flow": "25w 5b",
        "cursor": 0,
        "completed_cycles": 2,
        "muted": False,
        "volume": 40,
    }
    data.update(overrides)
    return data


_ITEMS = [
    {"index": 0, "minutes": 25, "kind": "work", "current": True},
    {"index": 1, "minutes": 5, "kind": "break", "current": False},
]


@pytest.fixture
def failure() -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="flow_set",
        error=ServiceError(
            code="INVALID_FLOW",
            message="Invalid flow format: '25x'",
            detail={"text": "25x"},
        ),
    )


class TestFormatResult:
    def test_json_mode(self) -> None:
        result = ServiceResult(ok=True, op="start", data=_status(), warnings=["w1"])
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["op"] == "start"
        assert parsed["data"]["label"] == "24:59 - Work"
        assert parsed["warnings"] == ["w1"]
        assert parsed["error"] is None

    def test_json_failure(self, failure: ServiceResult) -> None:
        parsed = json.loads(format_result(failure, settings=OutputSettings(json_output=True)))
        assert parsed["error"]["code"] == "INVALID_FLOW"

    def test_quiet_mode_prints_label(self) -> None:
        result = ServiceResult(ok=True, op="tick", data=_status())
        assert format_result(result, settings=OutputSettings(quiet=True)) == "24:59 - Work"

    def test_default_is_rich(self) -> None:
        result = ServiceResult(ok=True, op="start", data=_status())
        out = format_result(result)
        assert out.startswith("OK")
        assert "start" in out.splitlines()[0]


class TestRenderQuiet:
    def test_flow_without_label(self) -> None:
        result = ServiceResult(ok=True, op="flow_show", data={"flow": "25w 5b"})
        assert render_quiet(result) == "25w 5b"

    def test_fallback(self) -> None:
        result = ServiceResult(ok=True, op="cycles_show", data={"completed_cycles": 3})
        assert render_quiet(result) == "OK: cycles_show"

    def test_error(self, failure: ServiceResult) -> None:
        assert render_quiet(failure).startswith("ERROR: flow_set")


class TestRenderResult:
    def test_timer_op(self) -> None:
        out = render_result(ServiceResult(ok=True, op="pause", data=_status(state="paused")))
        assert "timer: 24:59 - Work" in out
        assert "state: paused" in out
        assert "volume" not in out

    def test_timer_op_verbose(self) -> None:
        out = render_result(ServiceResult(ok=True, op="pause", data=_status()), verbose=True)
        assert "completed_cycles: 2" in out
        assert "volume: 40" in out

    def test_awaiting_choice_hint(self) -> None:
        data = _status(state="awaiting_choice", title="Time's up!")
        tick_data = {**data, "ticks": 1, "expired": 1, "ignored": 0}
        out = render_result(ServiceResult(ok=True, op="tick", data=tick_data))
        assert "Time's up!" in out
        assert "pomoctl choose" in out

    def test_status_panel(self) -> None:
        data = _status(items=_ITEMS)
        out = render_result(ServiceResult(ok=True, op="status", data=data))
        assert "24:59 - Work" in out
        assert "completed: 2" in out
        assert "volume 40" in out
        assert "[25W]" in out
        assert "5B" in out

    def test_flow_table(self) -> None:
        data = {"flow": "25w 5b", "cursor": 0, "count": 2, "items": _ITEMS}
        out = render_result(ServiceResult(ok=True, op="flow_show", data=data))
        assert "flow: 25w 5b" in out
        assert "current" in out
        assert "2 sessions" in out

    def test_ticks_summary(self) -> None:
        data = {**_status(), "ticks": 61, "expired": 1, "ignored": 0, "interrupted": True}
        out = render_result(ServiceResult(ok=True, op="run", data=data))
        assert "ticks: 61" in out
        assert "expired: 1" in out
        assert "ignored" not in out
        assert "interrupted: yes" in out

    def test_sound(self) -> None:
        out = render_result(ServiceResult(ok=True, op="sound_volume", data=_status()))
        assert "muted: no" in out
        assert "volume: 40" in out

    def test_generic(self) -> None:
        result = ServiceResult(ok=True, op="cycles_reset", data={"completed_cycles": 0})
        assert "completed_cycles: 0" in render_result(result)

    def test_error(self, failure: ServiceResult) -> None:
        out = render_result(failure)
        assert out.startswith("ERROR")
        assert "flow_set" in out
        assert "detail" not in out

    def test_error_verbose_shows_detail(self, failure: ServiceResult) -> None:
        out = render_result(failure, verbose=True)
        assert "text: 25x" in out
