"""Tests for the timer state machine."""

import asyncio
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from focushero.models.settings import Settings
from focushero.services.timer import (
    MemoryKeyValueStore,
    TimerPhase,
    TimerState,
    TimerStateMachine,
    load_timer_state,
    save_theme,
    save_timer_state,
)
from focushero.services.timer.state_store import THEME_KEY

from conftest import NOW, RecordingSessionStore


def make_timer(session_store=None, settings=None, state_store=None, **kwargs):
    return TimerStateMachine(
        session_store if session_store is not None else RecordingSessionStore(),
        settings=settings if settings is not None else Settings(),
        state_store=state_store,
        auto_tick=False,
        clock=kwargs.pop("clock", lambda: NOW),
        **kwargs,
    )


def store_with(state: TimerState) -> MemoryKeyValueStore:
    store = MemoryKeyValueStore()
    save_timer_state(store, state)
    return store


def run_to_zero(timer: TimerStateMachine) -> None:
    timer.start()
    while not timer.tick():
        pass


# ---------------------------------------------------------------------------
# Initial state and controls
# ---------------------------------------------------------------------------


def test_initial_state_uses_configured_focus_duration():
    timer = make_timer(settings=Settings(focus_duration=1200))

    state = timer.state
    assert state.phase == TimerPhase.FOCUS
    assert state.current_time == 1200
    assert state.duration == 1200
    assert state.is_running is False
    assert state.start_time is None
    assert state.completed_sessions == 0


def test_initial_state_without_settings_falls_back_to_25_minutes():
    timer = TimerStateMachine(RecordingSessionStore(), auto_tick=False)

    assert timer.state.current_time == 1500
    assert timer.state.duration == 1500


def test_start_records_start_time_only_once():
    instants = [NOW, NOW + timedelta(minutes=3)]
    timer = make_timer(clock=lambda: instants[0])

    timer.start()
    timer.tick()
    timer.pause()
    instants[0] = instants[1]
    timer.start()

    assert timer.state.is_running is True
    assert timer.state.start_time == NOW


def test_start_is_idempotent():
    timer = make_timer()
    timer.start()
    first = timer.state

    timer.start()

    assert timer.state == first


def test_pause_keeps_remaining_time():
    timer = make_timer(settings=Settings(focus_duration=10))
    timer.start()
    timer.tick()
    timer.tick()

    timer.pause()

    assert timer.state.is_running is False
    assert timer.state.current_time == 8
    assert timer.status_label == "Paused"


def test_tick_while_idle_does_nothing():
    timer = make_timer(settings=Settings(focus_duration=10))

    assert timer.tick() is False
    assert timer.state.current_time == 10


def test_ticks_are_monotonic_and_never_negative():
    timer = make_timer(settings=Settings(focus_duration=5))
    timer.start()

    seen = [timer.state.current_time]
    expired = []
    for _ in range(10):
        expired.append(timer.tick())
        seen.append(timer.state.current_time)

    assert all(later <= earlier for earlier, later in zip(seen, seen[1:]))
    assert min(seen) == 0
    assert expired.count(True) == 1
    assert timer.state.is_running is False


def test_reset_to_zero_stops_running():
    timer = make_timer(settings=Settings(focus_duration=3))

    run_to_zero(timer)

    assert timer.state.current_time == 0
    assert timer.state.is_running is False
    assert timer.status_label == "Completed"


# ---------------------------------------------------------------------------
# Expiry
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_focus_expiry_records_one_session_and_starts_short_break():
    store = RecordingSessionStore()
    timer = make_timer(store, settings=Settings(focus_duration=3))
    timer.set_session_note("  wrote the parser  ")
    run_to_zero(timer)

    first = await timer.handle_expiry()
    second = await timer.handle_expiry()

    assert first == TimerPhase.SHORT_BREAK
    assert second is None
    assert len(store.created) == 1
    record = store.created[0]
    assert record.start_time == NOW
    assert record.duration == 3
    assert record.note == "wrote the parser"
    assert record.completed is True

    state = timer.state
    assert state.phase == TimerPhase.SHORT_BREAK
    assert state.current_time == state.duration == 300
    assert state.start_time is None
    assert state.completed_sessions == 1
    assert timer.session_note == ""


@pytest.mark.asyncio
async def test_blank_note_is_recorded_as_absent():
    store = RecordingSessionStore()
    timer = make_timer(store, settings=Settings(focus_duration=2))
    timer.set_session_note("   ")
    run_to_zero(timer)

    await timer.handle_expiry()

    assert store.created[0].note is None


@pytest.mark.asyncio
async def test_fourth_focus_completion_starts_long_break():
    store = RecordingSessionStore()
    saved = TimerState(current_time=1, duration=1500, completed_sessions=3)
    timer = make_timer(store, state_store=store_with(saved))
    run_to_zero(timer)

    await timer.handle_expiry()

    assert len(store.created) == 1
    assert store.created[0].duration == 1500
    assert timer.state.phase == TimerPhase.LONG_BREAK
    assert timer.state.duration == 1800
    assert timer.state.current_time == 1800
    assert timer.state.completed_sessions == 4


@pytest.mark.asyncio
@pytest.mark.parametrize("completed", [0, 1, 2, 4, 5, 6, 8])
async def test_other_focus_completions_start_short_break(completed):
    saved = TimerState(current_time=1, duration=1500, completed_sessions=completed)
    timer = make_timer(state_store=store_with(saved))
    run_to_zero(timer)

    assert await timer.handle_expiry() == TimerPhase.SHORT_BREAK


@pytest.mark.asyncio
@pytest.mark.parametrize("phase", [TimerPhase.SHORT_BREAK, TimerPhase.LONG_BREAK])
async def test_break_expiry_returns_to_focus_without_recording(phase):
    store = RecordingSessionStore()
    saved = TimerState(phase=phase, current_time=1, duration=300, completed_sessions=2)
    timer = make_timer(store, settings=Settings(focus_duration=1200), state_store=store_with(saved))
    run_to_zero(timer)

    assert await timer.handle_expiry() == TimerPhase.FOCUS

    assert store.created == []
    assert timer.state.duration == 1200
    assert timer.state.completed_sessions == 2


@pytest.mark.asyncio
async def test_expiry_without_start_time_is_ignored():
    saved = TimerState(current_time=0, duration=1500)
    store = RecordingSessionStore()
    timer = make_timer(store, state_store=store_with(saved))

    assert await timer.handle_expiry() is None
    assert store.created == []
    assert timer.state.phase == TimerPhase.FOCUS


@pytest.mark.asyncio
async def test_failed_save_keeps_cycle_going_without_counting():
    timer = make_timer(RecordingSessionStore(fail=True), settings=Settings(focus_duration=2))
    run_to_zero(timer)

    assert await timer.handle_expiry() == TimerPhase.SHORT_BREAK

    assert timer.state.phase == TimerPhase.SHORT_BREAK
    assert timer.state.completed_sessions == 0


@pytest.mark.asyncio
async def test_expiry_plays_sound_and_notifies():
    sound = MagicMock()
    notifier = MagicMock()
    notifier.permission_granted.return_value = True
    settings = Settings(focus_duration=2, sound_notifications=True, browser_notifications=True)
    timer = make_timer(settings=settings, sound_player=sound, notifier=notifier)
    run_to_zero(timer)

    await timer.handle_expiry()

    sound.play.assert_called_once_with()
    notifier.notify.assert_called_once_with("FocusHero", "Focus session completed! Time for a break.")


@pytest.mark.asyncio
async def test_side_effect_failures_never_block_expiry():
    store = RecordingSessionStore()
    sound = MagicMock()
    sound.play.side_effect = RuntimeError("autoplay blocked")
    notifier = MagicMock()
    notifier.permission_granted.side_effect = RuntimeError("no notification support")
    settings = Settings(focus_duration=2, sound_notifications=True, browser_notifications=True)
    timer = make_timer(store, settings=settings, sound_player=sound, notifier=notifier)
    run_to_zero(timer)

    assert await timer.handle_expiry() == TimerPhase.SHORT_BREAK
    assert len(store.created) == 1
    assert timer.state.completed_sessions == 1


@pytest.mark.asyncio
async def test_notification_needs_permission():
    notifier = MagicMock()
    notifier.permission_granted.return_value = False
    settings = Settings(focus_duration=2, sound_notifications=False, browser_notifications=True)
    timer = make_timer(settings=settings, notifier=notifier)
    run_to_zero(timer)

    await timer.handle_expiry()

    notifier.notify.assert_not_called()


# ---------------------------------------------------------------------------
# Reset and settings
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("phase", list(TimerPhase))
@pytest.mark.parametrize("running", [True, False])
def test_reset_from_any_state(phase, running):
    saved = TimerState(phase=phase, current_time=42, duration=300, start_time=NOW, completed_sessions=5)
    timer = make_timer(settings=Settings(focus_duration=1200), state_store=store_with(saved))
    timer.set_session_note("half done")
    if running:
        timer.start()

    timer.reset()

    state = timer.state
    assert state.phase == TimerPhase.FOCUS
    assert state.current_time == state.duration == 1200
    assert state.is_running is False
    assert state.start_time is None
    assert state.completed_sessions == 5
    assert timer.session_note == ""


def test_reset_to_defaults_clears_counter_and_local_data():
    state_store = store_with(TimerState(current_time=10, duration=1500, completed_sessions=7))
    save_theme(state_store, "dark")
    timer = make_timer(state_store=state_store)

    timer.reset_to_defaults()

    assert timer.state.completed_sessions == 0
    assert timer.state.current_time == 1500
    assert state_store.get(THEME_KEY) is None


def test_settings_change_while_idle_refreshes_current_phase():
    saved = TimerState(phase=TimerPhase.SHORT_BREAK, current_time=300, duration=300)
    timer = make_timer(state_store=store_with(saved))

    timer.apply_settings(Settings(short_break_duration=600))

    assert timer.state.current_time == 600
    assert timer.state.duration == 600


def test_settings_change_while_running_keeps_countdown():
    timer = make_timer(settings=Settings(focus_duration=1500))
    timer.start()
    timer.tick()

    timer.apply_settings(Settings(focus_duration=3000))

    assert timer.state.current_time == 1499
    assert timer.state.duration == 1500
    assert timer.settings.focus_duration == 3000


@pytest.mark.asyncio
async def test_new_settings_apply_to_the_next_phase():
    timer = make_timer(settings=Settings(focus_duration=2))
    timer.start()
    timer.apply_settings(Settings(focus_duration=2, short_break_duration=120))
    while not timer.tick():
        pass

    await timer.handle_expiry()

    assert timer.state.duration == 120


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def test_restored_state_is_never_running():
    saved = TimerState(current_time=100, duration=1500, is_running=True, start_time=NOW, completed_sessions=2)
    state_store = store_with(saved)

    timer = make_timer(state_store=state_store)

    assert timer.state.is_running is False
    assert timer.state.current_time == 100
    assert timer.state.start_time == NOW
    assert timer.state.completed_sessions == 2


def test_every_change_is_saved():
    state_store = MemoryKeyValueStore()
    timer = make_timer(settings=Settings(focus_duration=10), state_store=state_store)

    timer.start()
    timer.tick()

    saved = load_timer_state(state_store)
    assert saved.current_time == 9
    assert saved.is_running is False  # never restored as running


def test_display_helpers():
    timer = make_timer(settings=Settings(focus_duration=1500))
    assert timer.formatted_time == "25:00"
    assert timer.phase_label == "Focus Session"
    assert timer.status_label == "Ready to Start"
    assert timer.progress == 0.0

    timer.start()
    for _ in range(150):
        timer.tick()

    assert timer.formatted_time == "22:30"
    assert timer.progress == pytest.approx(10.0)
    assert timer.status_label == "In Progress"


# ---------------------------------------------------------------------------
# Ticker-driven runs
# ---------------------------------------------------------------------------


async def wait_for(condition, attempts: int = 200):
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0.01)
    raise AssertionError("condition not reached")


@pytest.mark.asyncio
async def test_ticker_runs_focus_phase_to_completion():
    store = RecordingSessionStore()
    timer = TimerStateMachine(
        store,
        settings=Settings(focus_duration=2),
        tick_interval=0.01,
        clock=lambda: NOW,
    )

    async with timer:
        timer.start()
        assert timer.has_active_ticker
        await wait_for(lambda: timer.state.phase == TimerPhase.SHORT_BREAK)
        await timer.wait_idle()

    assert len(store.created) == 1
    assert timer.state.completed_sessions == 1
    assert timer.state.is_running is False
    assert not timer.has_active_ticker


@pytest.mark.asyncio
async def test_pause_cancels_ticker():
    timer = TimerStateMachine(
        RecordingSessionStore(),
        settings=Settings(focus_duration=100),
        tick_interval=0.01,
    )
    timer.start()
    await wait_for(lambda: timer.state.current_time < 100)

    timer.pause()
    paused_at = timer.state.current_time
    await asyncio.sleep(0.05)

    assert not timer.has_active_ticker
    assert timer.state.current_time == paused_at
    await timer.close()


@pytest.mark.asyncio
async def test_close_cancels_ticker_and_saves_state():
    state_store = MemoryKeyValueStore()
    timer = TimerStateMachine(
        RecordingSessionStore(),
        settings=Settings(focus_duration=100),
        state_store=state_store,
        tick_interval=0.01,
    )
    timer.start()

    await timer.close()

    assert not timer.has_active_ticker
    assert load_timer_state(state_store) is not None


# ---------------------------------------------------------------------------
# Interrupted transitions
# ---------------------------------------------------------------------------


def test_start_without_event_loop_leaves_timer_stopped():
    state_store = MemoryKeyValueStore()
    timer = TimerStateMachine(
        RecordingSessionStore(), settings=Settings(), state_store=state_store, clock=lambda: NOW
    )

    with pytest.raises(RuntimeError):
        timer.start()

    assert timer.state.is_running is False
    assert timer.state.start_time is None
    assert not timer.has_active_ticker
    assert load_timer_state(state_store).is_running is False


@pytest.mark.asyncio
async def test_start_can_be_retried_inside_a_loop():
    timer = TimerStateMachine(RecordingSessionStore(), settings=Settings(), tick_interval=0.01)

    timer.start()

    assert timer.is_running
    assert timer.has_active_ticker
    await timer.close()


@pytest.mark.asyncio
async def test_settings_change_does_not_discard_unhandled_expiry():
    saved = TimerState(current_time=0, duration=1500, start_time=NOW, completed_sessions=3)
    store = RecordingSessionStore()
    timer = make_timer(store, state_store=store_with(saved))

    assert timer.expiry_pending
    timer.apply_settings(Settings(focus_duration=1200, long_break_duration=2400))

    assert timer.state.current_time == 0
    assert timer.status_label == "Completed"

    assert await timer.handle_expiry() == TimerPhase.LONG_BREAK
    assert len(store.created) == 1
    assert store.created[0].start_time == NOW
    assert store.created[0].duration == 1500
    assert timer.state.current_time == 2400
    assert timer.state.start_time is None
    assert timer.state.completed_sessions == 4


class SlowSessionStore(RecordingSessionStore):
    """Session store whose saves wait until released"""

    def __init__(self):
        super().__init__()
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def create(self, data):
        self.entered.set()
        await self.release.wait()
        return await super().create(data)


@pytest.mark.asyncio
async def test_clearing_data_during_a_save_keeps_counter_at_zero():
    store = SlowSessionStore()
    timer = make_timer(store, settings=Settings(focus_duration=2))
    run_to_zero(timer)

    expiry = asyncio.create_task(timer.handle_expiry())
    await store.entered.wait()
    timer.reset_to_defaults()
    store.release.set()
    await expiry

    assert len(store.created) == 1
    assert timer.state.completed_sessions == 0
    assert timer.state.phase == TimerPhase.FOCUS
