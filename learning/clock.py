from datetime import date, datetime, timedelta
from typing import Optional, Protocol


class Clock(Protocol):
    """Time source for everything that stamps or ages learned data.

    Implementors return timezone-aware datetimes. The calendar day used to
    group putts is the date in the returned moment's own offset, so a
    clock in the course's local zone keeps an evening round on one day.
    """

    def now(self) -> datetime:
        ...

    def today(self) -> date:
        ...


class SystemClock:
    """Wall-clock time in the machine's local zone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """Clock pinned to a given moment. Used by tests and replays."""

    def __init__(self, moment: Optional[datetime] = None):
        self._moment = ensure_aware(moment or datetime.now().astimezone())

    def now(self) -> datetime:
        return self._moment

    def today(self) -> date:
        return self._moment.date()

    def set(self, moment: datetime) -> None:
        self._moment = ensure_aware(moment)

    def advance(self, **kwargs) -> datetime:
        """Move forward by a timedelta expressed as keyword args (days=1, hours=3, ...)."""
        self._moment = self._moment + timedelta(**kwargs)
        return self._moment


def ensure_aware(moment: datetime) -> datetime:
    """Treat naive datetimes as local wall-clock time."""
    if moment.tzinfo is None:
        return moment.astimezone()
    return moment


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from `earlier` to `later`."""
    delta = ensure_aware(later) - ensure_aware(earlier)
    return delta.total_seconds() / 86400.0
