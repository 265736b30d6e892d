"""Best-effort expiry side effects: audible cue and system notification"""
import logging
import sys
from typing import Optional, Protocol, TextIO

from focushero.models.settings import Settings
from .models.timer_state import TimerPhase

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "FocusHero"
FOCUS_COMPLETE_MESSAGE = "Focus session completed! Time for a break."
BREAK_COMPLETE_MESSAGE = "Break time is over! Ready for another focus session?"


class SoundPlayer(Protocol):
    def play(self) -> None:
        ...


class Notifier(Protocol):
    def permission_granted(self) -> bool:
        ...

    def notify(self, title: str, body: str) -> None:
        ...


class TerminalBellPlayer:
    """Plays the terminal bell as the audible cue"""

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def play(self) -> None:
        stream = self._stream or sys.stdout
        stream.write("\a")
        stream.flush()


def completion_message(phase: TimerPhase) -> str:
    """Notification body for the phase that just expired"""
    return FOCUS_COMPLETE_MESSAGE if phase == TimerPhase.FOCUS else BREAK_COMPLETE_MESSAGE


def fire_expiry_side_effects(
    settings: Optional[Settings],
    expired_phase: TimerPhase,
    sound_player: Optional[SoundPlayer] = None,
    notifier: Optional[Notifier] = None,
) -> None:
    """
    Play the sound cue and show a notification, as enabled in settings.

    Failures are logged and swallowed; nothing here may interrupt the phase
    transition.
    """
    if settings is None:
        return

    if settings.sound_notifications and sound_player is not None:
        try:
            sound_player.play()
        except Exception as e:
            logger.debug(f"Ignoring sound playback failure: {e}")

    if settings.browser_notifications and notifier is not None:
        try:
            if notifier.permission_granted():
                notifier.notify(NOTIFICATION_TITLE, completion_message(expired_phase))
        except Exception as e:
            logger.debug(f"Ignoring notification failure: {e}")
