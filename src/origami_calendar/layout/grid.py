from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Union

from ..domain import CalendarEvent, NavigationDirection, ViewMode
from ..i18n import month_name

HOURS_PER_DAY = 24
HOUR_HEIGHT = 60
DAY_MINUTES = HOURS_PER_DAY * HOUR_HEIGHT
DAYS_PER_WEEK = 7

EXTENT_FLOORS: Dict[ViewMode, int] = {
    ViewMode.DAY: 30,
    ViewMode.WEEK: 20,
}

DateLike = Union[date, datetime]


@dataclass(frozen=True, slots=True)
class GridBucket:
    view: ViewMode
    range_start: datetime
    range_end: datetime
    days: tuple[date, ...]
    leading_blanks: int = 0
    hour_rows: int = HOURS_PER_DAY


@dataclass(frozen=True, slots=True)
class Placement:
    top: int
    extent: int


@dataclass(frozen=True, slots=True)
class PlacedEvent:
    event: CalendarEvent
    placement: Placement


@dataclass(slots=True)
class DayColumn:
    day: date
    events: List[PlacedEvent] = field(default_factory=list)


@dataclass(slots=True)
class MonthCell:
    day: date
    events: List[CalendarEvent] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ViewLayout:
    bucket: GridBucket
    columns: tuple[DayColumn, ...] = ()
    cells: tuple[Optional[MonthCell], ...] = ()


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def _coerce_view(view: Union[ViewMode, str]) -> ViewMode:
    try:
        return ViewMode(view)
    except ValueError as exc:
        raise ValueError(f"Unsupported view: {view!r}") from exc


def sunday_index(day: date) -> int:
    """Weekday index with Sunday as 0."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def start_of_week(day: date) -> date:
    return day - timedelta(days=sunday_index(day))


def _day_range(first: date, count: int) -> tuple[date, ...]:
    return tuple(first + timedelta(days=offset) for offset in range(count))


def bucket_for_view(reference: DateLike, view: Union[ViewMode, str]) -> GridBucket:
    """Return the date range and subdivisions rendered for ``view`` around ``reference``."""

    mode = _coerce_view(view)
    anchor = _as_date(reference)
    leading_blanks = 0

    if mode is ViewMode.DAY:
        days = (anchor,)
    elif mode is ViewMode.WEEK:
        days = _day_range(start_of_week(anchor), DAYS_PER_WEEK)
    else:
        first = anchor.replace(day=1)
        days = _day_range(first, calendar.monthrange(anchor.year, anchor.month)[1])
        leading_blanks = sunday_index(first)

    return GridBucket(
        view=mode,
        range_start=datetime.combine(days[0], time.min),
        range_end=datetime.combine(days[-1], time(23, 59, 59)),
        days=days,
        leading_blanks=leading_blanks,
        hour_rows=0 if mode is ViewMode.MONTH else HOURS_PER_DAY,
    )


def place_event(event: CalendarEvent, view: Union[ViewMode, str]) -> Placement:
    """Vertical offset and extent of ``event`` on a day column, one minute per unit.

    The extent is the event duration clipped to the minutes left before midnight,
    so an event running into the next day ends at the bottom of its start column.
    It never drops below the view's floor (30 for day, 20 for week).
    """

    mode = _coerce_view(view)
    if mode not in EXTENT_FLOORS:
        raise ValueError(f"Events are not placed on a time grid in the {mode.value} view")
    floor = EXTENT_FLOORS[mode]
    top = event.start.hour * 60 + event.start.minute
    extent = max(floor, min(event.duration_minutes, DAY_MINUTES - top))
    return Placement(top=top, extent=extent)


def events_on(events: Iterable[CalendarEvent], day: date) -> List[CalendarEvent]:
    """Events starting on ``day``, in chronological order."""
    return sorted((event for event in events if event.start.date() == day), key=lambda ev: ev.start)


def layout_view(
    reference: DateLike,
    view: Union[ViewMode, str],
    events: Iterable[CalendarEvent],
) -> ViewLayout:
    bucket = bucket_for_view(reference, view)
    collected = list(events)

    if bucket.view is ViewMode.MONTH:
        cells: List[Optional[MonthCell]] = [None] * bucket.leading_blanks
        cells.extend(MonthCell(day=day, events=events_on(collected, day)) for day in bucket.days)
        return ViewLayout(bucket=bucket, cells=tuple(cells))

    columns = tuple(
        DayColumn(
            day=day,
            events=[
                PlacedEvent(event=event, placement=place_event(event, bucket.view))
                for event in events_on(collected, day)
            ],
        )
        for day in bucket.days
    )
    return ViewLayout(bucket=bucket, columns=columns)


def _shift_months(day: date, months: int) -> date:
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def advance(
    reference: DateLike,
    view: Union[ViewMode, str],
    direction: Union[NavigationDirection, int],
) -> DateLike:
    """Move ``reference`` one step of the view's granularity forward or back.

    Month steps keep the day of month, clamped to the length of the target month.
    """

    mode = _coerce_view(view)
    step = int(NavigationDirection(direction))
    if mode is ViewMode.MONTH:
        shifted = _shift_months(_as_date(reference), step)
        if isinstance(reference, datetime):
            return datetime.combine(shifted, reference.time())
        return shifted
    days = DAYS_PER_WEEK if mode is ViewMode.WEEK else 1
    return reference + timedelta(days=days * step)


def current_time_offset(day: date, now: Optional[datetime] = None) -> Optional[int]:
    moment = now or datetime.now()
    if moment.date() != day:
        return None
    return moment.hour * 60 + moment.minute


def header_title(reference: DateLike, view: Union[ViewMode, str], locale: Optional[str] = None) -> str:
    mode = _coerce_view(view)
    anchor = _as_date(reference)
    title = f"{month_name(anchor.month, locale)} {anchor.year}"
    if mode is ViewMode.DAY:
        return f"{anchor.day} {title}"
    return title
