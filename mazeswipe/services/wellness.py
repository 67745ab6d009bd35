"""Wellness interruption collaborators.

Every Nth win the round controller pauses and hands a short message to a
wellness prompt. The prompt shows it however it likes and later calls
``controller.resume()`` exactly once; the controller tolerates the resume
arriving at any later time.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional

WELLNESS_MESSAGES = [
    "Stand up and stretch!",
    "Take a deep breath.",
    "Try doing one good deed today!",
]


def pick_message(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(WELLNESS_MESSAGES)


def is_wellness_win(rounds_completed: int, every: int) -> bool:
    return every > 0 and rounds_completed > 0 and rounds_completed % every == 0


class WellnessPrompt:
    """Base collaborator: remembers the message; subclasses present it."""

    def __init__(self):
        self.message: Optional[str] = None
        self.shown = 0

    def pause(self, message: str) -> None:
        self.message = message
        self.shown += 1

    def dismissed(self) -> None:
        self.message = None


class CallbackWellnessPrompt(WellnessPrompt):
    """Forwards the pause to a host callback (socket emit, UI modal)."""

    def __init__(self, on_pause: Callable[[str], None]):
        super().__init__()
        self._on_pause = on_pause

    def pause(self, message: str) -> None:
        super().pause(message)
        self._on_pause(message)


class RecordingWellnessPrompt(WellnessPrompt):
    """Keeps every message shown; used by headless hosts and tests."""

    def __init__(self):
        super().__init__()
        self.history: List[str] = []

    def pause(self, message: str) -> None:
        super().pause(message)
        self.history.append(message)


__all__ = [
    "CallbackWellnessPrompt",
    "RecordingWellnessPrompt",
    "WELLNESS_MESSAGES",
    "WellnessPrompt",
    "is_wellness_win",
    "pick_message",
]
