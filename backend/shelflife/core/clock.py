"""Injectable clock so expiry classification never calls date.today() directly."""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from fastapi import Request


class Clock(ABC):
    """Source of the reference instant used for expiry classification."""

    @abstractmethod
    def now(self) -> datetime:
        """Current timezone-aware instant."""
        ...

    def today(self) -> date:
        """Calendar date of ``now()`` with the time of day discarded."""
        return self.now().date()


class SystemClock(Clock):
    """Wall clock evaluated in a fixed reference timezone."""

    def __init__(self, timezone_name: str = "UTC") -> None:
        self.tz = timezone.utc if timezone_name == "UTC" else ZoneInfo(timezone_name)

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock(Clock):
    """Clock pinned to one calendar date. Used in tests and what-if queries."""

    def __init__(self, fixed: date) -> None:
        self._fixed = fixed

    def now(self) -> datetime:
        return datetime.combine(self._fixed, time.min, tzinfo=timezone.utc)

    def today(self) -> date:
        return self._fixed

    def set_date(self, fixed: date) -> None:
        self._fixed = fixed


def init_clock(app_state: object, timezone_name: str) -> Clock:
    """Create the process clock and store it on app.state."""
    clock = SystemClock(timezone_name)
    app_state.clock = clock  # type: ignore[attr-defined]
    return clock


def get_clock(request: Request) -> Clock:
    """FastAPI dependency that returns the clock from app.state."""
    clock: Clock | None = getattr(request.app.state, "clock", None)
    if clock is None:
        raise RuntimeError("Clock not initialized. Call init_clock() first.")
    return clock
