"""Tests for client-side form validation."""

from datetime import datetime, timezone

import pytest

from edclub.cli.forms import FormError, parse_datetime, validate_event_form, validate_post


class TestEventForm:
    def test_valid_form_normalised_to_utc(self):
        form = validate_event_form("team-1", "  Lab  ", "2026-03-02T09:00", "2026-03-02T12:00:00+02:00")
        assert form.title == "Lab"
        assert form.starts_at == datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
        assert form.ends_at == datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        ("args", "message"),
        [
            (("team-1", "  ", "2026-03-02T09:00", "2026-03-02T10:00"), "title"),
            (("team-1", "Lab", "", "2026-03-02T10:00"), "start"),
            (("team-1", "Lab", "2026-03-02T09:00", None), "end"),
            (("team-1", "Lab", "yesterday", "2026-03-02T10:00"), "Invalid dates"),
            (("team-1", "Lab", "2026-03-02T11:00", "2026-03-02T10:00"), "must not be before"),
            (("", "Lab", "2026-03-02T09:00", "2026-03-02T10:00"), "team"),
        ],
    )
    def test_rejections(self, args, message):
        with pytest.raises(FormError, match=message):
            validate_event_form(*args)

    def test_start_equal_to_end_is_fine(self):
        form = validate_event_form("team-1", "Lab", "2026-03-02T09:00", "2026-03-02T09:00")
        assert form.starts_at == form.ends_at

    def test_parse_datetime(self):
        assert parse_datetime("nope") is None
        assert parse_datetime("2026-03-02T09:00:00Z") == datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestPostComposer:
    def test_trimmed(self):
        assert validate_post("  hello  ") == "hello"

    @pytest.mark.parametrize("content", ["", "   ", None])
    def test_blank(self, content):
        with pytest.raises(FormError, match="Write something"):
            validate_post(content)

    def test_limit(self):
        assert len(validate_post("x" * 500)) == 500
        with pytest.raises(FormError, match="500"):
            validate_post("x" * 501)
