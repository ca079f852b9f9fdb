from datetime import date, datetime

import pytest

from origami_calendar.domain import CalendarEvent, NavigationDirection, ViewMode
from origami_calendar.layout import (
    Placement,
    advance,
    bucket_for_view,
    current_time_offset,
    events_on,
    header_title,
    layout_view,
    place_event,
    start_of_week,
)


def _event(identifier, start, end, title="Slot"):
    return CalendarEvent(id=identifier, title=title, start=start, end=end)


class TestBucketForView:
    def test_week_runs_sunday_through_saturday(self):
        bucket = bucket_for_view(date(2024, 6, 15), "week")

        assert bucket.range_start == datetime(2024, 6, 9, 0, 0)
        assert bucket.range_end == datetime(2024, 6, 15, 23, 59, 59)
        assert len(bucket.days) == 7
        assert bucket.days[0].weekday() == 6  # Sunday
        assert bucket.hour_rows == 24

    def test_week_starting_on_sunday_keeps_reference(self):
        assert start_of_week(date(2024, 6, 9)) == date(2024, 6, 9)

    def test_day_is_a_single_column(self):
        bucket = bucket_for_view(datetime(2024, 6, 15, 13, 45), ViewMode.DAY)

        assert bucket.days == (date(2024, 6, 15),)
        assert bucket.range_start == datetime(2024, 6, 15)
        assert bucket.range_end == datetime(2024, 6, 15, 23, 59, 59)

    def test_month_pads_leading_cells_with_weekday_of_first(self):
        # June 1st 2024 is a Saturday
        bucket = bucket_for_view(date(2024, 6, 20), "month")

        assert bucket.leading_blanks == 6
        assert bucket.days[0] == date(2024, 6, 1)
        assert bucket.days[-1] == date(2024, 6, 30)
        assert bucket.hour_rows == 0

    def test_month_starting_on_sunday_has_no_padding(self):
        # September 1st 2024 is a Sunday
        assert bucket_for_view(date(2024, 9, 10), "month").leading_blanks == 0

    def test_leap_february(self):
        assert len(bucket_for_view(date(2024, 2, 10), "month").days) == 29

    def test_unknown_view_is_rejected(self):
        with pytest.raises(ValueError):
            bucket_for_view(date(2024, 6, 15), "year")


class TestPlaceEvent:
    def test_short_event_gets_day_floor(self):
        event = _event("a", datetime(2024, 6, 15, 10, 0), datetime(2024, 6, 15, 10, 5))

        assert place_event(event, "day") == Placement(top=600, extent=30)

    def test_short_event_gets_week_floor(self):
        event = _event("a", datetime(2024, 6, 15, 10, 0), datetime(2024, 6, 15, 10, 5))

        assert place_event(event, "week").extent == 20

    def test_long_event_uses_duration(self):
        event = _event("a", datetime(2024, 6, 15, 9, 15), datetime(2024, 6, 15, 11, 0))

        assert place_event(event, ViewMode.WEEK) == Placement(top=555, extent=105)

    def test_event_past_midnight_is_clipped_to_day(self):
        event = _event("a", datetime(2024, 6, 15, 22, 0), datetime(2024, 6, 16, 2, 0))

        assert place_event(event, "day") == Placement(top=1320, extent=120)

    def test_inverted_event_still_visible(self):
        event = _event("a", datetime(2024, 6, 15, 10, 0), datetime(2024, 6, 15, 9, 0))

        assert place_event(event, "day").extent == 30

    def test_month_view_has_no_geometry(self):
        event = _event("a", datetime(2024, 6, 15, 10, 0), datetime(2024, 6, 15, 11, 0))

        with pytest.raises(ValueError):
            place_event(event, "month")


class TestLayoutView:
    def test_week_columns_use_start_day_only(self):
        spanning = _event("span", datetime(2024, 6, 11, 23, 0), datetime(2024, 6, 12, 1, 0))
        morning = _event("am", datetime(2024, 6, 12, 8, 0), datetime(2024, 6, 12, 9, 0))
        outside = _event("out", datetime(2024, 6, 16, 8, 0), datetime(2024, 6, 16, 9, 0))

        layout = layout_view(date(2024, 6, 12), "week", [morning, spanning, outside])

        by_day = {column.day: [placed.event.id for placed in column.events] for column in layout.columns}
        assert by_day[date(2024, 6, 11)] == ["span"]
        assert by_day[date(2024, 6, 12)] == ["am"]
        assert all("out" not in ids for ids in by_day.values())

    def test_column_events_are_chronological(self):
        late = _event("late", datetime(2024, 6, 12, 15, 0), datetime(2024, 6, 12, 16, 0))
        early = _event("early", datetime(2024, 6, 12, 8, 0), datetime(2024, 6, 12, 9, 0))

        assert [event.id for event in events_on([late, early], date(2024, 6, 12))] == ["early", "late"]

    def test_month_cells_bucket_by_start_day(self):
        spanning = _event("span", datetime(2024, 6, 30, 23, 0), datetime(2024, 7, 1, 1, 0))
        first = _event("first", datetime(2024, 6, 1, 12, 0), datetime(2024, 6, 1, 13, 0))

        layout = layout_view(date(2024, 6, 5), "month", [spanning, first])

        assert layout.cells[:6] == (None,) * 6
        assert layout.cells[6].day == date(2024, 6, 1)
        assert [event.id for event in layout.cells[6].events] == ["first"]
        assert [event.id for event in layout.cells[-1].events] == ["span"]
        assert len(layout.cells) == 6 + 30
        assert layout.columns == ()


class TestAdvance:
    def test_week_step_crosses_year_boundary(self):
        wednesday = date(2024, 12, 25)

        assert advance(wednesday, "week", NavigationDirection.NEXT) == date(2025, 1, 1)

    def test_day_next_and_previous_are_inverse(self):
        reference = date(2024, 3, 1)

        forward = advance(reference, "day", NavigationDirection.NEXT)
        assert forward == date(2024, 3, 2)
        assert advance(forward, "day", NavigationDirection.PREVIOUS) == reference
        assert advance(reference, "day", -1) == date(2024, 2, 29)

    def test_month_step_clamps_day(self):
        assert advance(date(2024, 1, 31), "month", 1) == date(2024, 2, 29)
        assert advance(date(2024, 1, 15), "month", -1) == date(2023, 12, 15)

    def test_month_step_keeps_time_of_day(self):
        assert advance(datetime(2024, 11, 30, 9, 30), "month", 1) == datetime(2024, 12, 30, 9, 30)

    def test_zero_direction_is_rejected(self):
        with pytest.raises(ValueError):
            advance(date(2024, 1, 1), "day", 0)


def test_current_time_offset_only_on_same_day():
    now = datetime(2024, 6, 15, 14, 30)

    assert current_time_offset(date(2024, 6, 15), now) == 870
    assert current_time_offset(date(2024, 6, 14), now) is None


def test_header_title():
    assert header_title(date(2024, 6, 15), "week", "en") == "June 2024"
    assert header_title(date(2024, 6, 15), "day", "en") == "15 June 2024"
    assert header_title(date(2024, 6, 15), "month", "he") == "יוני 2024"
