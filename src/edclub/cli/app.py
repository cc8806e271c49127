"""The `edclub` command.

    edclub login student@school.edu
    edclub agenda --team 3f2c...
    edclub attend 9a1b... present
    edclub dashboard
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from edclub.cli import views
from edclub.cli.forms import FormError, validate_event_form, validate_post
from edclub.cli.views import Slot
from edclub.client import auth, badges, engagement, events, posts
from edclub.client.http import ApiClient, ApiError
from edclub.shared import AttendanceStatus

T = TypeVar("T")


def _configure_logging() -> None:
    """Client diagnostics go to stderr so command output stays clean."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


async def load_slot(fetch: Awaitable[T]) -> Slot[T]:
    """Await a fetch and settle it into a Slot; API failures become the slot's error."""
    try:
        return Slot.ready(await fetch)
    except ApiError as e:
        return Slot.failed(e.message)


async def _login(api: ApiClient, args: argparse.Namespace) -> str:
    password = args.password or getpass.getpass("Password: ")
    user, _ = await auth.login(api, args.email, password)
    return f"Signed in as {views.render_user(user)}."


async def _register(api: ApiClient, args: argparse.Namespace) -> str:
    password = args.password or getpass.getpass("Password: ")
    user, session = await auth.register(api, args.email, password)
    return views.render_registration(user, signed_in=session is not None)


async def _logout(api: ApiClient, _args: argparse.Namespace) -> str:
    auth.logout(api)
    return "Signed out."


async def _profile(api: ApiClient, _args: argparse.Namespace) -> str:
    profile = await auth.profile(api)
    return "\n\n".join(
        [
            views.render_user(profile.user),
            views.render_progress(Slot.ready(profile.stats.weekly_progress)),
            f"Badges earned: {profile.stats.badges_earned}",
            "Upcoming events\n" + views.render_agenda(Slot.ready(profile.stats.upcoming_events)),
        ]
    )


async def _agenda(api: ApiClient, args: argparse.Namespace) -> str:
    slot = await load_slot(events.list_events(api, team_id=args.team))
    statuses = {}
    if slot.value:
        status_slot = await load_slot(events.get_attendance_status(api, [e.id for e in slot.value]))
        statuses = status_slot.value or {}
    return views.render_agenda(slot, statuses)


async def _attend(api: ApiClient, args: argparse.Namespace) -> str:
    row = await events.mark_attendance(api, args.event_id, args.status)
    return f"Marked {row.status.value} for event {row.event_id}."


async def _create_event(api: ApiClient, args: argparse.Namespace) -> str:
    form = validate_event_form(args.team, args.title, args.starts, args.ends)
    event = await events.create_event(api, form.team_id, form.title, form.starts_at, form.ends_at)
    return f"Created {event.title!r} ({event.id})."


async def _badges(api: ApiClient, args: argparse.Namespace) -> str:
    return views.render_badges(await load_slot(badges.list_badges(api, user_id=args.user)))


async def _grant(api: ApiClient, args: argparse.Namespace) -> str:
    assignment = await badges.grant_badge(api, args.user_id, args.badge_id)
    return f"Badge {assignment.badge_id} granted to {assignment.user_id}."


async def _feed(api: ApiClient, _args: argparse.Namespace) -> str:
    return views.render_feed(await load_slot(posts.list_posts(api)))


async def _post(api: ApiClient, args: argparse.Namespace) -> str:
    content = validate_post(args.content)
    post = await posts.create_post(api, content)
    return f"Published post {post.id}."


async def _progress(api: ApiClient, _args: argparse.Namespace) -> str:
    return views.render_progress(await load_slot(engagement.get_progress(api)))


async def _rank(api: ApiClient, _args: argparse.Namespace) -> str:
    return views.render_rank(await load_slot(engagement.get_rank(api)))


async def dashboard(api: ApiClient) -> list[Slot]:
    """Fetch progress, badges and attendance concurrently; each settles into its own slot."""
    return await asyncio.gather(
        load_slot(engagement.get_progress(api)),
        load_slot(badges.list_badges(api)),
        load_slot(events.list_attendance(api)),
    )


async def _dashboard(api: ApiClient, _args: argparse.Namespace) -> str:
    progress, badge_slot, attendance = await dashboard(api)
    rows = Slot.ready(attendance.value[0]) if attendance.value is not None else attendance
    return "\n\n".join(
        [
            views.render_progress(progress),
            views.render_badges(badge_slot),
            "Recent attendance\n" + views.render_attendance(rows),
        ]
    )


COMMANDS = {
    "login": _login,
    "register": _register,
    "logout": _logout,
    "profile": _profile,
    "agenda": _agenda,
    "attend": _attend,
    "create-event": _create_event,
    "badges": _badges,
    "grant": _grant,
    "feed": _feed,
    "post": _post,
    "progress": _progress,
    "rank": _rank,
    "dashboard": _dashboard,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edclub", description="EDClub from the terminal.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name in ("login", "register"):
        p = subparsers.add_parser(name, help=f"{name.capitalize()} with email and password.")
        p.add_argument("email")
        p.add_argument("--password", help="Prompted for when omitted.")

    subparsers.add_parser("logout", help="Forget the stored session.")
    subparsers.add_parser("profile", help="Your account, weekly progress and next events.")

    agenda = subparsers.add_parser("agenda", help="List events.")
    agenda.add_argument("--team", help="Only events of this team id.")

    attend = subparsers.add_parser("attend", help="Mark your attendance for an event.")
    attend.add_argument("event_id")
    attend.add_argument("status", choices=[s.value for s in AttendanceStatus])

    create = subparsers.add_parser("create-event", help="Create an event (teachers).")
    create.add_argument("--team", required=True)
    create.add_argument("--title", required=True)
    create.add_argument("--starts", required=True, help="ISO-8601, e.g. 2026-03-02T14:00")
    create.add_argument("--ends", required=True, help="ISO-8601, e.g. 2026-03-02T15:30")

    badge_list = subparsers.add_parser("badges", help="Badge catalog with earned flags.")
    badge_list.add_argument("--user", help="Another user's badges (teachers).")

    grant = subparsers.add_parser("grant", help="Grant a badge (teachers).")
    grant.add_argument("user_id")
    grant.add_argument("badge_id")

    subparsers.add_parser("feed", help="Most recent posts.")
    post = subparsers.add_parser("post", help="Publish a post.")
    post.add_argument("content")

    subparsers.add_parser("progress", help="This week's attendance progress.")
    subparsers.add_parser("rank", help="This week's ranking.")
    subparsers.add_parser("dashboard", help="Progress, badges and attendance at a glance.")

    return parser


async def run(args: argparse.Namespace, api: ApiClient | None = None) -> str:
    if api is None:
        async with ApiClient() as client:
            return await COMMANDS[args.command](client, args)
    return await COMMANDS[args.command](api, args)


def main(argv: list[str] | None = None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    try:
        print(asyncio.run(run(args)))
    except FormError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ApiError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
