"""Tests for the slot-based text views."""

from datetime import datetime, timezone

from edclub.cli.views import (
    STAR,
    TROPHY,
    Slot,
    display_percent,
    progress_bar,
    render_agenda,
    render_attendance,
    render_badges,
    render_feed,
    render_progress,
    render_rank,
    render_registration,
    short_id,
)
from edclub.shared import (
    AttendanceDTO,
    AttendanceStatus,
    BadgeDTO,
    EventDTO,
    PostDTO,
    RankEntryDTO,
    UserDTO,
    WeeklyProgressDTO,
)

WHEN = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


class TestSlotStates:
    def test_loading(self):
        assert render_progress(Slot()) == "Loading weekly progress..."

    def test_error(self):
        assert render_feed(Slot.failed("boom")) == "Could not load posts: boom"

    def test_error_without_message(self):
        assert Slot.failed("").error == "Request failed."


class TestProgress:
    def test_zero_total_forces_zero(self):
        progress = WeeklyProgressDTO(presents=0, total=0, percent=80.0)
        assert display_percent(progress) == 0.0

    def test_clamped(self):
        assert display_percent(WeeklyProgressDTO(presents=3, total=2, percent=150.0)) == 100.0
        assert display_percent(WeeklyProgressDTO(presents=0, total=2, percent=-3.0)) == 0.0

    def test_render(self):
        text = render_progress(Slot.ready(WeeklyProgressDTO(presents=2, total=3, percent=66.67)))
        assert "66.7%" in text
        assert "2/3 present" in text

    def test_bar(self):
        assert progress_bar(50.0, width=10) == "[#####-----]"
        assert progress_bar(0.0, width=4) == "[----]"
        assert progress_bar(100.0, width=4) == "[####]"


class TestRank:
    def test_empty(self):
        assert render_rank(Slot.ready([])) == "No attendance recorded this week yet."

    def test_trophy_then_stars(self):
        entries = [
            RankEntryDTO(user_id="9f1c2d3e-aaaa-bbbb-cccc-1234567890ab", presents=2, total=2, percent=100.0),
            RankEntryDTO(user_id="short", presents=1, total=2, percent=50.0),
        ]
        lines = render_rank(Slot.ready(entries)).splitlines()
        assert lines[0] == "Weekly ranking"
        assert lines[1].lstrip().startswith(f"1. {TROPHY}")
        assert "9f1c2d3e\N{HORIZONTAL ELLIPSIS}90ab" in lines[1]
        assert "100.0%" in lines[1]
        assert lines[2].lstrip().startswith(f"2. {STAR}")
        assert "short" in lines[2]

    def test_short_id(self):
        assert short_id("") == "Unknown user"
        assert short_id(None) == "Unknown user"
        assert short_id("x" * 16) == "x" * 16
        assert short_id("abcdefghijklmnopq") == "abcdefgh\N{HORIZONTAL ELLIPSIS}nopq"


class TestLists:
    def test_agenda_with_status(self):
        event = EventDTO(id="e-1", team_id=None, title="Lab", starts_at=WHEN, ends_at=WHEN)
        text = render_agenda(Slot.ready([event]), {"e-1": AttendanceStatus.LATE})
        assert "Lab" in text
        assert "[late]" in text
        assert "2026-03-02 09:00" in text

    def test_empty_agenda(self):
        assert render_agenda(Slot.ready([])) == "No events scheduled."

    def test_feed(self):
        post = PostDTO(id="p-1", user_id="u-1", content="hello", created_at=WHEN)
        assert "hello" in render_feed(Slot.ready([post]))
        assert render_feed(Slot.ready([])).startswith("No posts yet")

    def test_attendance(self):
        row = AttendanceDTO(id="a", event_id="e-1", user_id="u", status=AttendanceStatus.PRESENT, created_at=WHEN)
        assert "present" in render_attendance(Slot.ready([row]))
        assert render_attendance(Slot.ready([])) == "No attendance recorded."

    def test_badges(self):
        badges = [
            BadgeDTO(id="1", name="Perfect Week", description="All present", earned_at=WHEN),
            BadgeDTO(id="2", name="Storyteller"),
        ]
        text = render_badges(Slot.ready(badges))
        assert text.splitlines()[0] == "Badges (1/2 earned)"
        assert "[x] Perfect Week" in text
        assert "[ ] Storyteller" in text
        assert "All present" in text


class TestRegistration:
    def test_check_your_email(self):
        user = UserDTO(id="u", email="s@school.edu")
        assert "Check your email" in render_registration(user, signed_in=False)

    def test_signed_in(self):
        user = UserDTO(id="u", email="s@school.edu")
        assert "signed in" in render_registration(user, signed_in=True)
