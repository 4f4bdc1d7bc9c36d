"""Watchdog deadline for a single check run."""

import time
from collections.abc import Callable

from check_proc_mem.errors import ProbeTimeout


class Deadline:
    """
    Wall-clock budget armed once at start-up.

    Each phase calls check() at its I/O or loop boundaries; once the budget
    is spent, check() raises ProbeTimeout and the run aborts wherever it is.
    A budget of 0 or None never expires.
    """

    def __init__(
        self,
        seconds: float | None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Arm the deadline.

        Args:
            seconds: Run time budget. 0 or None disables the watchdog.
            clock: Monotonic time source, injectable for tests.
        """
        self._seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds if seconds else None

    @property
    def seconds(self) -> float | None:
        """Get the configured budget."""
        return self._seconds

    @property
    def expired(self) -> bool:
        """Check if the budget has been spent."""
        return self._expires_at is not None and self._clock() >= self._expires_at

    def check(self) -> None:
        """Raise ProbeTimeout if the deadline has passed."""
        if self.expired:
            raise ProbeTimeout(f"timeout after {self._seconds} seconds")
