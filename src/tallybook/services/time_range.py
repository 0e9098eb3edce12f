"""Resolve symbolic time ranges into concrete datetime bounds."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from ..errors import InvalidInputError

EPOCH = datetime(1970, 1, 1)

# Gap between the end of the previous comparison window and the current start.
PREVIOUS_PERIOD_GAP = timedelta(milliseconds=1)


class TimeRange(str, Enum):
    """Symbolic ranges offered by the statistics screens."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"


class Granularity(str, Enum):
    """Size of one trend bucket."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


_GRANULARITY_BY_RANGE = {
    TimeRange.DAY: Granularity.HOUR,
    TimeRange.WEEK: Granularity.DAY,
    TimeRange.MONTH: Granularity.DAY,
    TimeRange.YEAR: Granularity.MONTH,
    TimeRange.CUSTOM: Granularity.DAY,
}


@dataclass(frozen=True, slots=True)
class DateBounds:
    """Inclusive [start_date, end_date] window."""

    start_date: datetime
    end_date: datetime

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date


def parse_time_range(value: Union[TimeRange, str]) -> TimeRange:
    """Coerce a range name (``"month"``) or member into a ``TimeRange``."""

    if isinstance(value, TimeRange):
        return value
    try:
        return TimeRange(str(value).strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in TimeRange)
        raise InvalidInputError(f"Unknown time range {value!r}; expected one of {allowed}") from exc


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_bounds(
    time_range: Union[TimeRange, str],
    now: Optional[datetime] = None,
    custom_start: Optional[datetime] = None,
    custom_end: Optional[datetime] = None,
) -> DateBounds:
    """Return the concrete window for ``time_range`` relative to ``now``.

    Symbolic ranges start at local midnight of the first day of the current
    day/ISO week/month/year and end at ``now``. ``custom`` takes the supplied
    bounds verbatim, defaulting the start to the epoch and the end to ``now``.
    An inverted custom window is returned as-is; filtering it yields nothing.
    """

    time_range = parse_time_range(time_range)
    now = now or datetime.now()

    if time_range is TimeRange.DAY:
        start = _midnight(now)
    elif time_range is TimeRange.WEEK:
        start = _midnight(now) - timedelta(days=now.weekday())
    elif time_range is TimeRange.MONTH:
        start = _midnight(now).replace(day=1)
    elif time_range is TimeRange.YEAR:
        start = _midnight(now).replace(month=1, day=1)
    else:
        return DateBounds(
            start_date=custom_start if custom_start is not None else EPOCH,
            end_date=custom_end if custom_end is not None else now,
        )
    return DateBounds(start_date=start, end_date=now)


def _shift_back(moment: datetime, delta: timedelta) -> datetime:
    """``moment - delta``, pinned to the representable datetime range."""

    try:
        return moment - delta
    except OverflowError:
        return datetime.min if delta > timedelta(0) else datetime.max


def previous_bounds(bounds: DateBounds) -> DateBounds:
    """Return the equal-length window ending just before ``bounds`` starts.

    The end is ``start - 1ms`` rather than a calendar boundary, so a month or
    year whose length differs from the current one is compared over a
    slightly skewed window. A window reaching past ``datetime.min`` is cut
    short there.
    """

    duration = bounds.duration
    return DateBounds(
        start_date=_shift_back(bounds.start_date, duration),
        end_date=_shift_back(bounds.start_date, PREVIOUS_PERIOD_GAP),
    )


def granularity_for(time_range: Union[TimeRange, str]) -> Granularity:
    """Trend bucket size used when aggregating ``time_range``."""

    return _GRANULARITY_BY_RANGE[parse_time_range(time_range)]
