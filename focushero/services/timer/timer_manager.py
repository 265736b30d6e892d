"""Timer Manager - runs the focus/break cycle and records completed sessions"""
import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional, Protocol, Set

from focushero.models.session import Session, SessionCreate
from focushero.models.settings import Settings
from focushero.utils.datetime_helper import format_time, utc_now
from .durations import next_phase, resolve_duration
from .models.timer_state import TimerPhase, TimerState
from .notifier import Notifier, SoundPlayer, fire_expiry_side_effects
from .state_store import KeyValueStore, default_state_store, load_timer_state, save_timer_state
from .ticker import TickerHandle, start_ticker

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    TimerPhase.FOCUS: "Focus Session",
    TimerPhase.SHORT_BREAK: "Short Break",
    TimerPhase.LONG_BREAK: "Long Break",
}


class SessionStore(Protocol):
    """Anything that can persist a completed session record"""

    async def create(self, data: SessionCreate) -> Session:
        ...


class TimerStateMachine:
    """
    Pomodoro timer state machine.

    Owns the current phase, countdown, running flag and completed-session
    counter. While running, a one-second ticker decrements the countdown;
    when it reaches zero the phase expires, a session is recorded for focus
    phases, and the next phase is prepared from the current settings.

    Every state change is a single replacement of the TimerState value and is
    saved to the local key-value store.
    """

    def __init__(
        self,
        session_store: SessionStore,
        settings: Optional[Settings] = None,
        state_store: Optional[KeyValueStore] = None,
        sound_player: Optional[SoundPlayer] = None,
        notifier: Optional[Notifier] = None,
        tick_interval: float = 1.0,
        auto_tick: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._session_store = session_store
        self._settings = settings
        self._state_store = state_store if state_store is not None else default_state_store()
        self._sound_player = sound_player
        self._notifier = notifier
        self._tick_interval = tick_interval
        self._auto_tick = auto_tick
        self._clock = clock

        self._ticker: Optional[TickerHandle] = None
        self._pending: Set[asyncio.Task] = set()
        self._session_note = ""
        # Bumped by reset_to_defaults so in-flight saves stop counting
        self._generation = 0
        self._state = load_timer_state(self._state_store) or self._default_state()

    @classmethod
    async def from_client(cls, client, **kwargs) -> "TimerStateMachine":
        """
        Build a timer backed by the HTTP API.

        Args:
            client: FocusHeroClient used for settings and session persistence
            **kwargs: Passed through to the constructor

        Returns:
            TimerStateMachine seeded with the server's settings
        """
        settings = await client.settings.get()
        timer = cls(client.sessions, settings=settings, **kwargs)
        if timer.expiry_pending:
            # Restored from a phase that ran out before it was handled
            await timer.handle_expiry()
        else:
            timer.apply_settings(settings)
        return timer

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def settings(self) -> Optional[Settings]:
        return self._settings

    @property
    def session_note(self) -> str:
        return self._session_note

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def has_active_ticker(self) -> bool:
        return self._ticker is not None and not self._ticker.cancelled

    @property
    def expiry_pending(self) -> bool:
        """True when the countdown ran out but handle_expiry has not run yet"""
        state = self._state
        return not state.is_running and state.current_time == 0 and state.start_time is not None

    @property
    def progress(self) -> float:
        """Percentage of the current phase already elapsed"""
        if self._state.duration <= 0:
            return 0.0
        return (self._state.duration - self._state.current_time) / self._state.duration * 100

    @property
    def formatted_time(self) -> str:
        return format_time(self._state.current_time)

    @property
    def phase_label(self) -> str:
        return PHASE_LABELS[self._state.phase]

    @property
    def status_label(self) -> str:
        if self._state.is_running:
            return "In Progress"
        if self._state.current_time == 0:
            return "Completed"
        if self._state.start_time:
            return "Paused"
        return "Ready to Start"

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start or resume the countdown; a no-op if already running"""
        if self._state.is_running:
            return

        if self._auto_tick:
            # Raises RuntimeError outside a running loop, before any state changes
            ticker = start_ticker(self._on_tick, self._tick_interval)
            self._stop_ticker()
            self._ticker = ticker

        self._update(
            is_running=True,
            start_time=self._state.start_time or self._clock(),
        )
        logger.info(f"Timer started: {self._state.phase.value}, {self._state.current_time}s remaining")

    def pause(self) -> None:
        """Stop the countdown, keeping the remaining time"""
        self._stop_ticker()
        if self._state.is_running:
            self._update(is_running=False)
            logger.info(f"Timer paused with {self._state.current_time}s remaining")

    def tick(self) -> bool:
        """
        Advance the countdown by one second.

        Returns:
            True if this tick expired the phase (countdown clamped to 0 and
            the timer stopped), False otherwise
        """
        if not self._state.is_running:
            return False

        if self._state.current_time <= 1:
            self._update(current_time=0, is_running=False)
            self._stop_ticker()
            return True

        self._update(current_time=self._state.current_time - 1)
        return False

    def reset(self) -> None:
        """Go back to a fresh focus phase; the completed counter is kept"""
        self._stop_ticker()
        duration = resolve_duration(self._settings, TimerPhase.FOCUS)
        self._update(
            phase=TimerPhase.FOCUS,
            current_time=duration,
            duration=duration,
            is_running=False,
            start_time=None,
        )
        self._session_note = ""
        logger.info("Timer reset")

    def reset_to_defaults(self) -> None:
        """Clear all locally persisted data and start over with a zero counter"""
        self._stop_ticker()
        self._state_store.clear()
        self._generation += 1
        self._session_note = ""
        self._state = self._default_state()
        save_timer_state(self._state_store, self._state)
        logger.info("Timer state cleared")

    def set_session_note(self, text: str) -> None:
        """Attach a note to the session recorded at the next focus expiry"""
        self._session_note = text

    def apply_settings(self, settings: Settings) -> None:
        """
        Use new settings for future phases.

        While idle the current phase's countdown is refreshed to the new
        length; a running countdown is left untouched, and so is an expired
        one still waiting for handle_expiry.
        """
        self._settings = settings
        if not self._state.is_running and not self.expiry_pending:
            duration = resolve_duration(settings, self._state.phase)
            self._update(current_time=duration, duration=duration)

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    async def handle_expiry(self) -> Optional[TimerPhase]:
        """
        Transition out of an expired phase.

        Runs only when the countdown is at zero, the timer is stopped and the
        phase had been started. The move to the next phase happens before any
        await and clears start_time, so a second call for the same expiry is
        a no-op and at most one session is recorded.

        Returns:
            The new phase, or None if there was nothing to do
        """
        if not self.expiry_pending:
            return None

        expired = self._state

        note = self._session_note.strip() or None
        upcoming = next_phase(expired.phase, expired.completed_sessions)
        upcoming_duration = resolve_duration(self._settings, upcoming)
        self._update(
            phase=upcoming,
            current_time=upcoming_duration,
            duration=upcoming_duration,
            start_time=None,
        )
        self._session_note = ""
        logger.info(f"Phase {expired.phase.value} expired, next phase {upcoming.value} ({upcoming_duration}s)")

        fire_expiry_side_effects(self._settings, expired.phase, self._sound_player, self._notifier)

        if expired.phase == TimerPhase.FOCUS:
            await self._record_session(
                SessionCreate(
                    start_time=expired.start_time,
                    duration=expired.duration,
                    note=note,
                    completed=True,
                )
            )

        return upcoming

    async def _record_session(self, record: SessionCreate) -> Optional[Session]:
        """Persist a completed focus session; count it only once the store accepts it"""
        generation = self._generation
        try:
            session = await self._session_store.create(record)
        except Exception as e:
            # Not retried: the history entry is lost but the cycle continues
            logger.error(f"Failed to save session: {e}")
            return None

        if generation != self._generation:
            logger.info(f"Session {session.id} saved after the timer was cleared; not counted")
            return session

        self._update(completed_sessions=self._state.completed_sessions + 1)
        logger.info(f"Session {session.id} saved, {self._state.completed_sessions} completed")
        return session

    def _on_tick(self) -> None:
        if self.tick():
            task = asyncio.get_running_loop().create_task(self.handle_expiry())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def wait_idle(self) -> None:
        """Wait for in-flight expiry handling (session saves) to finish"""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def close(self) -> None:
        """Tear down: stop the ticker, finish pending saves, persist state"""
        self._stop_ticker()
        await self.wait_idle()
        save_timer_state(self._state_store, self._state)

    async def __aenter__(self) -> "TimerStateMachine":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _default_state(self) -> TimerState:
        duration = resolve_duration(self._settings, TimerPhase.FOCUS)
        return TimerState(current_time=duration, duration=duration)

    def _update(self, **changes) -> None:
        self._state = self._state.model_copy(update=changes)
        save_timer_state(self._state_store, self._state)

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
