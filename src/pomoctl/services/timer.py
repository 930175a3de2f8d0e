"""TimerService — scheduler operations behind the ServiceResult contract.

One TimerService wraps one :class:`PomodoroScheduler`, rehydrated from
the workspace store at construction. Domain errors become failed
results; persistence and plugin failures become warnings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pomoctl.domain.countdown import TickResult
from pomoctl.domain.errors import PomoError, ValidationError
from pomoctl.domain.flow import format_flow
from pomoctl.domain.lifecycle import Choice, SchedulerState
from pomoctl.plugins.notifier import HookNotifier
from pomoctl.services.base import BaseService
from pomoctl.services.contracts import FlowData, TickData, TimerStatusData, dump_validated
from pomoctl.services.result import ServiceResult
from pomoctl.services.scheduler import PomodoroScheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from pomoctl.infrastructure.ticker import Ticker
    from pomoctl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class TimerService(BaseService):
    """Handles timer control, flows, counters, and sound preferences."""

    def __init__(self, workspace: Workspace) -> None:
        super().__init__(workspace)
        settings = workspace.settings
        self._scheduler = PomodoroScheduler(
            workspace.store,
            HookNotifier(workspace.plugin_manager),
            policy=settings.effective_policy,
            work_minutes=settings.timer.work_minutes,
            break_minutes=settings.timer.break_minutes,
            break_source=settings.timer.break_source,
            default_flow=settings.timer.default_flow,
            muted=settings.sound.muted,
            volume=settings.sound.volume,
        )

    @property
    def scheduler(self) -> PomodoroScheduler:
        return self._scheduler

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _status_data(self) -> dict[str, Any]:
        s = self._scheduler
        return {
            "label": s.label,
            "title": s.title,
            "state": str(s.state),
            "kind": str(s.active.kind),
            "remaining_minutes": s.clock.remaining_minutes,
            "remaining_seconds": s.clock.remaining_seconds,
            "policy": str(s.policy),
            "flow": format_flow(s.sequence),
            "cursor": s.sequence.cursor,
            "completed_cycles": s.completed_cycles,
            "muted": s.muted,
            "volume": s.volume,
        }

    def _flow_data(self) -> dict[str, Any]:
        seq = self._scheduler.sequence
        return dump_validated(
            FlowData,
            {
                "flow": format_flow(seq),
                "cursor": seq.cursor,
                "count": len(seq),
                "items": [
                    {
                        "index": i,
                        "minutes": item.minutes,
                        "kind": str(item.kind),
                        "current": i == seq.cursor,
                    }
                    for i, item in enumerate(seq)
                ],
            },
        )

    def _ok(self, op: str, **extra: Any) -> ServiceResult:
        data = dump_validated(TimerStatusData, self._status_data())
        data.update(extra)
        return ServiceResult(ok=True, op=op, data=data, warnings=self._scheduler.pop_warnings())

    def _run_op(self, op: str, action: Callable[[], object]) -> ServiceResult:
        try:
            action()
        except PomoError as exc:
            return self._failure(op, exc)
        return self._ok(op)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def status(self) -> ServiceResult:
        """Report the current timer state without changing it."""
        return self._ok("status", items=self._flow_data()["items"])

    def toggle(self) -> ServiceResult:
        return self._run_op("toggle", self._scheduler.toggle)

    def start(self) -> ServiceResult:
        return self._run_op("start", self._scheduler.start)

    def pause(self) -> ServiceResult:
        return self._run_op("pause", self._scheduler.pause)

    def reset(self) -> ServiceResult:
        return self._run_op("reset", self._scheduler.reset)

    def skip(self) -> ServiceResult:
        return self._run_op("skip", self._scheduler.skip)

    def choose(self, choice: Choice | str) -> ServiceResult:
        return self._run_op("choose", lambda: self._scheduler.resolve_choice(choice))

    def tick(self, count: int = 1) -> ServiceResult:
        """Deliver *count* ticks back to back (no waiting).

        Ticks delivered while the timer is not running are counted as
        ignored, not rejected.
        """
        op = "tick"
        if count < 1:
            msg = f"Tick count must be at least 1, got {count}"
            return self._failure(op, ValidationError(msg))

        results = [self._scheduler.on_tick() for _ in range(count)]
        return self._tick_result(op, results)

    def run(
        self,
        ticker: Ticker,
        *,
        max_ticks: int | None = None,
    ) -> ServiceResult:
        """Start the timer if needed and drive it with *ticker*.

        Stops after *max_ticks*, when the scheduler leaves the running
        state (an interactive expiry), or on Ctrl+C, which pauses.
        """
        op = "run"
        if self._scheduler.state != SchedulerState.RUNNING:
            try:
                self._scheduler.start()
            except PomoError as exc:
                return self._failure(op, exc)

        results: list[TickResult] = []
        interrupted = False

        def _on_tick() -> None:
            results.append(self._scheduler.on_tick())

        try:
            ticker.run(
                _on_tick,
                max_ticks=max_ticks,
                should_continue=lambda: self._scheduler.state == SchedulerState.RUNNING,
            )
        except KeyboardInterrupt:
            interrupted = True
            ticker.stop()
            if self._scheduler.state == SchedulerState.RUNNING:
                self._scheduler.pause()
            logger.debug("Run interrupted after %d ticks", len(results))

        return self._tick_result(op, results, interrupted=interrupted)

    def _tick_result(
        self,
        op: str,
        results: list[TickResult],
        *,
        interrupted: bool = False,
    ) -> ServiceResult:
        data = self._status_data()
        data.update(
            ticks=len(results),
            expired=results.count(TickResult.EXPIRED),
            ignored=results.count(TickResult.IGNORED),
            interrupted=interrupted,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(TickData, data),
            warnings=self._scheduler.pop_warnings(),
        )

    # --- Flow ---

    def flow_show(self) -> ServiceResult:
        return ServiceResult(ok=True, op="flow_show", data=self._flow_data())

    def flow_set(self, text: str) -> ServiceResult:
        """Replace the session flow with custom-flow *text*."""
        op = "flow_set"
        try:
            self._scheduler.apply_custom_flow(text)
        except PomoError as exc:
            return self._failure(op, exc)
        data = self._flow_data()
        data["label"] = self._scheduler.label
        return ServiceResult(ok=True, op=op, data=data, warnings=self._scheduler.pop_warnings())

    # --- Counters ---

    def cycles_show(self) -> ServiceResult:
        return ServiceResult(
            ok=True,
            op="cycles_show",
            data={"completed_cycles": self._scheduler.completed_cycles},
        )

    def cycles_reset(self) -> ServiceResult:
        op = "cycles_reset"
        previous = self._scheduler.completed_cycles
        self._scheduler.reset_completed_cycles()
        return ServiceResult(
            ok=True,
            op=op,
            data={"completed_cycles": 0, "previous": previous},
            warnings=self._scheduler.pop_warnings(),
        )

    # --- Sound preferences ---

    def set_muted(self, muted: bool) -> ServiceResult:
        op = "sound_mute" if muted else "sound_unmute"
        return self._run_op(op, lambda: self._scheduler.set_muted(muted))

    def set_volume(self, volume: int) -> ServiceResult:
        return self._run_op("sound_volume", lambda: self._scheduler.set_volume(volume))
