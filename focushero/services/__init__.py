"""Services module"""

from focushero.services.motivation import generate_motivational_quote
from focushero.services.timer import TimerStateMachine

__all__ = [
    "generate_motivational_quote",
    "TimerStateMachine",
]
