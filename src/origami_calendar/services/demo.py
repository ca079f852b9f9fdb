from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple

from ..domain import CalendarEvent
from ..layout import start_of_week

DEMO_DISPLAY_HINT = "demo"

# (id, title, day offset from Sunday, start, minutes)
_DEMO_SLOTS = (
    ("demo-1", "Intro call", 1, time(9, 0), 30),
    ("demo-2", "Fitting", 2, time(11, 30), 60),
    ("demo-3", "Follow-up", 3, time(14, 0), 45),
    ("demo-4", "Consultation", 4, time(10, 15), 90),
    ("demo-5", "Pickup", 5, time(8, 0), 15),
)


def demo_events(reference: Optional[date] = None) -> Tuple[CalendarEvent, ...]:
    """Fixed sample appointments laid on the week containing ``reference``."""

    sunday = start_of_week(reference or date.today())
    events = []
    for identifier, title, offset, starts, minutes in _DEMO_SLOTS:
        start = datetime.combine(sunday + timedelta(days=offset), starts)
        events.append(
            CalendarEvent(
                id=identifier,
                title=title,
                start=start,
                end=start + timedelta(minutes=minutes),
                display_hint=DEMO_DISPLAY_HINT,
            )
        )
    return tuple(events)
