"""Unit tests for the weekly progress window."""

from datetime import date, datetime, timedelta, timezone

from edclub.engagement.week_utils import week_label, week_start, week_window


class TestWeekWindow:
    def test_starts_on_monday_midnight(self):
        start, _ = week_window(datetime(2026, 2, 25, 15, 30, tzinfo=timezone.utc))  # Wednesday
        assert start == datetime(2026, 2, 23, tzinfo=timezone.utc)
        assert start.weekday() == 0

    def test_end_is_next_monday_exclusive(self):
        start, end = week_window(datetime(2026, 2, 25, tzinfo=timezone.utc))
        assert end - start == timedelta(days=7)
        assert end == datetime(2026, 3, 2, tzinfo=timezone.utc)

    def test_last_instant_of_sunday_is_inside(self):
        sunday = datetime(2026, 3, 1, 23, 59, 59, 999999, tzinfo=timezone.utc)
        start, end = week_window(sunday)
        assert start <= sunday < end

    def test_monday_midnight_opens_a_new_week(self):
        monday = datetime(2026, 3, 2, tzinfo=timezone.utc)
        start, _ = week_window(monday)
        assert start == monday

    def test_offset_timestamps_are_converted_to_utc(self):
        # Monday 01:00 at UTC+3 is still Sunday in UTC
        local = datetime(2026, 3, 2, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        start, _ = week_window(local)
        assert start == datetime(2026, 2, 23, tzinfo=timezone.utc)

    def test_naive_is_read_as_utc(self):
        start, _ = week_window(datetime(2026, 3, 2, 0, 30))
        assert start == datetime(2026, 3, 2, tzinfo=timezone.utc)

    def test_defaults_to_now(self):
        start, end = week_window()
        assert start <= datetime.now(timezone.utc) < end


class TestWeekHelpers:
    def test_week_start_from_sunday(self):
        assert week_start(date(2026, 3, 1)) == date(2026, 2, 23)

    def test_label_crosses_year(self):
        # 2026-01-01 is a Thursday in ISO week 1 of 2026
        assert week_label(datetime(2026, 1, 1, tzinfo=timezone.utc)) == "2026-W01"
        # 2027-01-01 is a Friday, still in ISO week 53 of 2026
        assert week_label(datetime(2027, 1, 1, tzinfo=timezone.utc)) == "2026-W53"
