"""Deadline collaborator polled by the search before each explored move."""

import time
from typing import Optional

from gametree.core.errors import SearchTimeout


class Timer:
    """Wall-clock budget for one search.

    A timer with no budget never expires, which gives depth-only search.
    Call ``start`` at the beginning of every turn; the budget is measured
    from that point.
    """

    def __init__(self, budget_ms: Optional[int] = None):
        self.budget_ms = budget_ms
        self._start = time.monotonic()

    def start(self, budget_ms: Optional[int] = None):
        """Restart the clock, optionally with a new budget."""
        if budget_ms is not None:
            self.budget_ms = budget_ms
        self._start = time.monotonic()

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self._start) * 1000.0

    def expired(self) -> bool:
        return self.budget_ms is not None and self.elapsed_ms >= self.budget_ms

    def time_check(self):
        """Raise SearchTimeout once the budget is spent."""
        if self.expired():
            raise SearchTimeout(f"search budget of {self.budget_ms} ms exceeded "
                                f"({self.elapsed_ms:.1f} ms elapsed)")
