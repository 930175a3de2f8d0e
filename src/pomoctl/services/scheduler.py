"""PomodoroScheduler — the orchestrating timer state machine.

Composes a :class:`SessionSequence` and a :class:`CountdownClock` and
exposes pure state-transition methods. The scheduler owns no timers: an
external tick source calls :meth:`PomodoroScheduler.on_tick`.

INVARIANT: Every mutating operation performs exactly one persistence
write followed by exactly one label notification. Rejected operations
raise before touching any state.

INVARIANT: Persistence and notification failures are warnings, never
errors. In-memory state always advances.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from pomoctl.domain.codec import decode_sequence, encode_sequence
from pomoctl.domain.countdown import ClockStatus, CountdownClock, TickResult
from pomoctl.domain.errors import InvalidTransition, ValidationError
from pomoctl.domain.flow import DEFAULT_FLOW, parse_flow
from pomoctl.domain.lifecycle import (
    AdvancePolicy,
    BreakSource,
    Choice,
    SchedulerState,
    is_valid_transition,
)
from pomoctl.domain.sequence import SessionSequence
from pomoctl.domain.session import Duration, SessionKind
from pomoctl.infrastructure.store import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable

    from pomoctl.infrastructure.store import StateStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1
TIMES_UP_TITLE = "Time's up!"

# --- Persistence keys ---

KEY_VERSION = "schema_version"
KEY_CYCLES = "completed_cycles"
KEY_SEQUENCE = "sequence"
KEY_CURSOR = "cursor"
KEY_ACTIVE_MINUTES = "active_minutes"
KEY_ACTIVE_KIND = "active_kind"
KEY_MINUTES = "remaining_minutes"
KEY_SECONDS = "remaining_seconds"
KEY_STATE = "state"
KEY_MUTED = "muted"
KEY_VOLUME = "volume"

_CLOCK_FOR_STATE: dict[SchedulerState, ClockStatus] = {
    SchedulerState.IDLE: ClockStatus.IDLE,
    SchedulerState.RUNNING: ClockStatus.RUNNING,
    SchedulerState.PAUSED: ClockStatus.PAUSED,
    SchedulerState.AWAITING_CHOICE: ClockStatus.EXPIRED,
}


class NotificationSink(Protocol):
    """Receives label updates and expiry signals from the scheduler."""

    def update(self, label: str, kind: SessionKind) -> None:
        """Called after every persisted state change."""
        ...

    def expired(self, kind: SessionKind, *, muted: bool, volume: int) -> None:
        """Called when a session of *kind* has just completed."""
        ...


class NullSink:
    """Sink that discards everything."""

    def update(self, label: str, kind: SessionKind) -> None:
        pass

    def expired(self, kind: SessionKind, *, muted: bool, volume: int) -> None:
        pass


E = TypeVar("E", bound=StrEnum)


def _as_enum(value: Any, enum_cls: type[E]) -> E | None:
    """Return *value* as a member of *enum_cls*, or None if it is not one."""
    if not isinstance(value, str):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _as_int(value: Any, *, low: int = 0, high: int | None = None) -> int | None:
    """Return *value* if it is an int within bounds, else None."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < low or (high is not None and value > high):
        return None
    return value


class PomodoroScheduler:
    """Session flow + countdown + counters, rehydrated from a store.

    Parameters:
        store: Persistence port, read once here and written after every
            state change.
        sink: Notification sink (defaults to :class:`NullSink`).
        policy: Advance policy on expiry, fixed for the scheduler's life.
        work_minutes: Session length loaded by ``Choice.KEEP_GOING``.
        break_minutes: Session length loaded by ``Choice.TAKE_BREAK``
            (and the fallback for ``BreakSource.SEQUENCE``).
        break_source: Where ``TAKE_BREAK`` takes its minutes from.
        default_flow: Seed flow text used when the store has none.
        muted: Initial mute preference when the store has none.
        volume: Initial volume preference when the store has none.
    """

    def __init__(
        self,
        store: StateStore,
        sink: NotificationSink | None = None,
        *,
        policy: AdvancePolicy = AdvancePolicy.CONTINUOUS,
        work_minutes: int = 25,
        break_minutes: int = 5,
        break_source: BreakSource = BreakSource.FIXED,
        default_flow: str = DEFAULT_FLOW,
        muted: bool = True,
        volume: int = 50,
    ) -> None:
        self._store = store
        self._sink: NotificationSink = sink or NullSink()
        self._policy = AdvancePolicy(policy)
        self._work = Duration.work(work_minutes)
        self._break = Duration.rest(break_minutes)
        self._break_source = BreakSource(break_source)
        self._warnings: list[str] = []

        self._sequence = SessionSequence(parse_flow(default_flow))
        self._clock = CountdownClock()
        self._active = self._sequence.current()
        self._clock.reset(self._active)
        self._state = SchedulerState.IDLE
        self._completed = 0
        self._muted = muted
        self._volume = volume

        self._rehydrate()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def policy(self) -> AdvancePolicy:
        return self._policy

    @property
    def sequence(self) -> SessionSequence:
        return self._sequence

    @property
    def clock(self) -> CountdownClock:
        return self._clock

    @property
    def active(self) -> Duration:
        """The Duration currently loaded into the clock."""
        return self._active

    @property
    def completed_cycles(self) -> int:
        return self._completed

    @property
    def muted(self) -> bool:
        return self._muted

    @property
    def volume(self) -> int:
        return self._volume

    @property
    def label(self) -> str:
        """``MM:SS - Kind`` for the active session."""
        return self._clock.label(self._active.kind)

    @property
    def title(self) -> str:
        """Window-title style text: the label, or "Time's up!" awaiting a choice."""
        if self._state == SchedulerState.AWAITING_CHOICE:
            return TIMES_UP_TITLE
        return self.label

    def snapshot(self) -> dict[str, Any]:
        """Return the full persisted key-value snapshot."""
        return {
            KEY_VERSION: SNAPSHOT_VERSION,
            KEY_CYCLES: self._completed,
            KEY_SEQUENCE: encode_sequence(self._sequence),
            KEY_CURSOR: self._sequence.cursor,
            KEY_ACTIVE_MINUTES: self._active.minutes,
            KEY_ACTIVE_KIND: str(self._active.kind),
            KEY_MINUTES: self._clock.remaining_minutes,
            KEY_SECONDS: self._clock.remaining_seconds,
            KEY_STATE: str(self._state),
            KEY_MUTED: self._muted,
            KEY_VOLUME: self._volume,
        }

    def pop_warnings(self) -> list[str]:
        """Return and clear warnings collected since the last call."""
        warnings, self._warnings = self._warnings, []
        return warnings

    # ------------------------------------------------------------------
    # Timer control
    # ------------------------------------------------------------------

    def toggle(self) -> SchedulerState:
        """Pause when running, otherwise start."""
        if self._state == SchedulerState.RUNNING:
            self.pause()
        else:
            self.start()
        return self._state

    def start(self) -> None:
        if self._state not in (SchedulerState.IDLE, SchedulerState.PAUSED):
            raise InvalidTransition("start", self._state)
        self._clock.start()
        self._enter(SchedulerState.RUNNING)
        self._commit()

    def pause(self) -> None:
        if self._state != SchedulerState.RUNNING:
            raise InvalidTransition("pause", self._state)
        self._clock.pause()
        self._enter(SchedulerState.PAUSED)
        self._commit()

    def reset(self) -> None:
        """Stop, rewind the flow to its first session, and go idle."""
        self._sequence.reset_cursor()
        self._load(self._sequence.current())
        self._enter(SchedulerState.IDLE)
        self._commit()

    def skip(self) -> Duration:
        """Move to the next session without counting a cycle.

        A running timer keeps running; any other state becomes idle.
        """
        was_running = self._state == SchedulerState.RUNNING
        self._load(self._sequence.advance())
        if was_running:
            self._clock.start()
        else:
            self._enter(SchedulerState.IDLE)
        self._commit()
        return self._active

    def on_tick(self) -> TickResult:
        """Apply one tick from the external tick source.

        Ignored ticks (timer not running) change nothing and emit nothing.
        """
        result = self._clock.tick()
        if result == TickResult.IGNORED:
            return result

        if result == TickResult.EXPIRED:
            finished = self._active.kind
            self._completed += 1
            logger.debug("Session expired: %s (cycles=%d)", finished, self._completed)
            if self._policy == AdvancePolicy.CONTINUOUS:
                self._load(self._sequence.advance())
                self._clock.start()
            else:
                self._enter(SchedulerState.AWAITING_CHOICE)
            self._commit(expired=finished)
        else:
            self._commit()
        return result

    def resolve_choice(self, choice: Choice | str) -> None:
        """Pick what happens after an expiry under the interactive policy.

        Raises:
            InvalidTransition: If the scheduler is not awaiting a choice.
        """
        if self._state != SchedulerState.AWAITING_CHOICE:
            raise InvalidTransition(f"resolve choice {choice!s}", self._state)
        try:
            choice = Choice(choice)
        except ValueError as exc:
            raise ValidationError(f"Unknown choice: {choice!r}") from exc

        if choice == Choice.STOP:
            self.reset()
            return

        duration = self._work if choice == Choice.KEEP_GOING else self._break_duration()
        self._load(duration)
        self._clock.start()
        self._enter(SchedulerState.RUNNING)
        self._commit()

    def apply_custom_flow(self, text: str) -> tuple[Duration, ...]:
        """Replace the flow with parsed *text* and go idle on its first session.

        Raises:
            ParseError: If *text* is invalid. Nothing is modified.
        """
        items = parse_flow(text)
        self._sequence.replace(items)
        self._load(self._sequence.current())
        self._enter(SchedulerState.IDLE)
        self._commit()
        return items

    # ------------------------------------------------------------------
    # Counters and preferences
    # ------------------------------------------------------------------

    def reset_completed_cycles(self) -> None:
        self._completed = 0
        self._commit()

    def set_muted(self, muted: bool) -> None:
        self._muted = bool(muted)
        self._commit()

    def toggle_mute(self) -> bool:
        self.set_muted(not self._muted)
        return self._muted

    def set_volume(self, volume: int) -> None:
        """Set volume 0..100. Zero mutes; anything else unmutes.

        Raises:
            ValidationError: If *volume* is out of range.
        """
        if _as_int(volume, high=100) is None:
            raise ValidationError(f"Volume must be an integer in [0, 100], got {volume!r}")
        self._volume = volume
        self._muted = volume == 0
        self._commit()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self, duration: Duration) -> None:
        """Load *duration* into the clock (clock goes idle)."""
        self._active = duration
        self._clock.reset(duration)

    def _enter(self, target: SchedulerState) -> None:
        if not is_valid_transition(self._state, target):
            raise InvalidTransition(f"enter {target}", self._state)
        if target != self._state:
            logger.debug("Scheduler %s -> %s", self._state, target)
        self._state = target

    def _break_duration(self) -> Duration:
        if self._break_source == BreakSource.SEQUENCE:
            upcoming = self._sequence.peek_next(SessionKind.BREAK)
            if upcoming is not None:
                return upcoming
        return self._break

    def _commit(self, *, expired: SessionKind | None = None) -> None:
        """Persist the snapshot, then notify. Failures become warnings."""
        try:
            self._store.set_many(self.snapshot())
        except PersistenceError as exc:
            logger.warning("State not persisted: %s", exc)
            self._warnings.append(f"State not persisted: {exc}")

        if expired is not None:
            self._notify(
                "expired",
                lambda: self._sink.expired(expired, muted=self._muted, volume=self._volume),
            )
        self._notify("update", lambda: self._sink.update(self.label, self._active.kind))

    def _notify(self, name: str, call: Callable[[], None]) -> None:
        try:
            call()
        except Exception:
            logger.warning("Notification %s failed", name, exc_info=True)
            self._warnings.append(f"Notification {name} failed")

    def _rehydrate(self) -> None:
        """Load persisted state over the defaults. Never raises.

        Missing keys keep their defaults; malformed values are logged and
        ignored.
        """
        try:
            values = {
                key: self._store.get(key)
                for key in (
                    KEY_VERSION,
                    KEY_CYCLES,
                    KEY_SEQUENCE,
                    KEY_CURSOR,
                    KEY_ACTIVE_MINUTES,
                    KEY_ACTIVE_KIND,
                    KEY_MINUTES,
                    KEY_SECONDS,
                    KEY_STATE,
                    KEY_MUTED,
                    KEY_VOLUME,
                )
            }
        except PersistenceError as exc:
            logger.warning("Could not read persisted state, using defaults: %s", exc)
            self._warnings.append(f"State not loaded: {exc}")
            return

        version = values[KEY_VERSION]
        if version is not None and version != SNAPSHOT_VERSION:
            logger.warning("Ignoring persisted state with schema_version=%r", version)
            return

        if values[KEY_SEQUENCE] is not None:
            try:
                self._sequence.replace(decode_sequence(values[KEY_SEQUENCE]))
            except ValidationError as exc:
                logger.warning("Discarding persisted sequence: %s", exc)

        cursor = _as_int(values[KEY_CURSOR])
        if cursor is not None:
            try:
                self._sequence.restore_cursor(cursor)
            except ValidationError as exc:
                logger.warning("Discarding persisted cursor: %s", exc)
        self._active = self._sequence.current()

        active_minutes = _as_int(values[KEY_ACTIVE_MINUTES])
        active_kind = _as_enum(values[KEY_ACTIVE_KIND], SessionKind)
        if active_minutes is not None and active_kind is not None:
            self._active = Duration(minutes=active_minutes, kind=active_kind)
        self._restore_clock(values)

        cycles = _as_int(values[KEY_CYCLES])
        if cycles is not None:
            self._completed = cycles
        if isinstance(values[KEY_MUTED], bool):
            self._muted = values[KEY_MUTED]
        volume = _as_int(values[KEY_VOLUME], high=100)
        if volume is not None:
            self._volume = volume

        logger.debug("Rehydrated scheduler: %s %s", self._state, self.label)

    def _restore_clock(self, values: dict[str, Any]) -> None:
        self._clock.reset(self._active)
        self._state = SchedulerState.IDLE

        minutes = _as_int(values[KEY_MINUTES])
        seconds = _as_int(values[KEY_SECONDS], high=59)
        state = _as_enum(values[KEY_STATE], SchedulerState)
        if minutes is None or seconds is None or state is None:
            return

        if state == SchedulerState.AWAITING_CHOICE and self._policy != AdvancePolicy.INTERACTIVE:
            # Policy changed since the last run: nothing will resolve the choice.
            self._load(self._sequence.advance())
            return
        try:
            self._clock.restore(minutes, seconds, _CLOCK_FOR_STATE[state])
        except ValidationError as exc:
            logger.warning("Discarding persisted clock: %s", exc)
            self._clock.reset(self._active)
            return
        self._state = state
