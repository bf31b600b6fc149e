"""Time normalisation between storage instants and the organisation's wall clock.

There are exactly two kinds of time value in this package:

* an *instant*: a ``datetime`` in UTC. Naive datetimes are storage-clock
  values (MySQL DATETIME columns) and are read as UTC.
* a *local* value: a :class:`LocalDateTime`, which wraps an aware datetime
  already expressed in the organisation's zone.

Conversions only ever go instant -> local -> instant. ``to_local`` returns a
``LocalDateTime`` unchanged, so an offset can never be applied twice.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional, Union
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_TIMEZONE
from ..core.exceptions import ValidationError
from .clock import Clock, SystemClock


@dataclass(frozen=True)
class LocalDateTime:
    """A wall-clock reading in the organisation's time zone."""

    value: datetime

    @property
    def date(self) -> date:
        return self.value.date()

    @property
    def time(self) -> time:
        return self.value.time()

    @property
    def date_key(self) -> str:
        return self.value.strftime("%Y-%m-%d")

    def to_instant(self) -> datetime:
        return self.value.astimezone(timezone.utc)

    def __str__(self) -> str:
        return self.value.isoformat()


def as_utc(value: Union[datetime, LocalDateTime]) -> datetime:
    """Return ``value`` as an aware UTC instant."""
    if isinstance(value, LocalDateTime):
        return value.to_instant()
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage(value: datetime) -> datetime:
    """Naive UTC datetime for DATETIME columns."""
    return as_utc(value).replace(tzinfo=None)


class TimeNormalizer:
    def __init__(self, tz_name: str = DEFAULT_TIMEZONE, *, clock: Optional[Clock] = None):
        self._tz = ZoneInfo(tz_name)
        self._clock = clock or SystemClock()

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return as_utc(self._clock.now())

    def to_local(self, value: Union[datetime, LocalDateTime]) -> LocalDateTime:
        if isinstance(value, LocalDateTime):
            return value
        return LocalDateTime(as_utc(value).astimezone(self._tz))

    def local_date(self, value: Union[datetime, LocalDateTime]) -> date:
        return self.to_local(value).date

    def local_date_key(self, value: Union[datetime, LocalDateTime]) -> str:
        return self.to_local(value).date_key

    def at(self, local_date: date, wall_time: time) -> LocalDateTime:
        """The local reading ``wall_time`` on ``local_date``."""
        return LocalDateTime(datetime.combine(local_date, wall_time, tzinfo=self._tz))

    def start_of_day(self, local_date: date) -> datetime:
        """Instant of local midnight opening ``local_date``."""
        return self.at(local_date, time(0, 0)).to_instant()

    def end_of_day(self, local_date: date) -> datetime:
        """Instant of local midnight closing ``local_date``."""
        return self.start_of_day(local_date + timedelta(days=1))


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"invalid date: {value!r}") from exc


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into a UTC instant. A trailing ``Z`` is accepted; no offset means UTC."""
    try:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return as_utc(datetime.fromisoformat(text))
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValidationError(f"invalid timestamp: {value!r}") from exc


def parse_month(value: str) -> tuple[int, int]:
    """Parse a ``YYYY-MM`` month string into ``(year, month)``."""
    try:
        parsed = datetime.strptime(value, "%Y-%m")
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"invalid month: {value!r}, expected YYYY-MM") from exc
    return parsed.year, parsed.month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_month_days(year: int, month: int) -> Iterator[date]:
    first, last = month_bounds(year, month)
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)
