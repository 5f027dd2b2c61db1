"""Cosmetic progress indicator for in-flight enhancements.

The value is not tied to real backend progress. It climbs in fixed steps
while a request is in flight, stalls short of completion and jumps to 100
when the result arrives.
"""

import asyncio
from typing import Optional


class ProgressTracker:
    """Monotonic 0-100 progress value with a matching status message."""

    STEP = 10
    CEILING = 90  # Never reached by ticking alone
    COMPLETE = 100

    IDLE_MESSAGE = "Initializing..."
    COMPLETE_MESSAGE = "Complete!"

    def __init__(self):
        self._value = 0
        self._completed = False

    @property
    def value(self) -> int:
        return self._value

    @property
    def message(self) -> str:
        if self._completed:
            return self.COMPLETE_MESSAGE
        if self._value == 0:
            return self.IDLE_MESSAGE
        if self._value < 30:
            return "Analyzing your prompt..."
        if self._value < 60:
            return "Enhancing content..."
        return "Finalizing your enhanced prompt..."

    def reset(self) -> None:
        self._value = 0
        self._completed = False

    def advance(self) -> None:
        """One tick; stops at the ceiling."""
        if self._value < self.CEILING:
            self._value = min(self._value + self.STEP, self.CEILING)

    def complete(self) -> None:
        self._value = self.COMPLETE
        self._completed = True

    async def run(self, interval_ms: int) -> None:
        """Tick every ``interval_ms`` until cancelled or at the ceiling."""
        while self._value < self.CEILING:
            await asyncio.sleep(interval_ms / 1000)
            self.advance()

    def start(self, interval_ms: int) -> Optional["asyncio.Task[None]"]:
        """Reset and start ticking in the background."""
        self.reset()
        if interval_ms <= 0:
            return None
        return asyncio.ensure_future(self.run(interval_ms))
