"""Database and account management commands.

    python -m edclub.manage init-db
    python -m edclub.manage set-role teacher@school.edu teacher
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

from edclub.auth.provider import confirm_email, set_user_role
from edclub.badges.seed import seed_badges
from edclub.config import get_settings
from edclub.database import close_db, create_schema, init_db, session_scope
from edclub.db.models import Team
from edclub.middleware.logging import setup_logging
from edclub.shared import Role


async def _init_db() -> str:
    await create_schema()
    return "Tables created."


async def _seed_badges() -> str:
    async with session_scope() as db:
        count = await seed_badges(db)
    return f"Seeded {count} badges."


async def _set_role(email: str, role: Role) -> str:
    async with session_scope() as db:
        user = await set_user_role(db, email, role)
    return f"{user.email} is now a {role.value}."


async def _confirm_email(email: str) -> str:
    async with session_scope() as db:
        user = await confirm_email(db, email)
    return f"{user.email} confirmed."


async def _create_team(name: str) -> str:
    async with session_scope() as db:
        team = Team(name=name)
        db.add(team)
        await db.commit()
    return f"Team {team.name!r} created with id {team.id}"


async def _run(args: argparse.Namespace) -> str:
    await init_db(get_settings().database_url)
    try:
        if args.command == "init-db":
            return await _init_db()
        if args.command == "seed-badges":
            return await _seed_badges()
        if args.command == "set-role":
            return await _set_role(args.email, Role(args.role))
        if args.command == "confirm-email":
            return await _confirm_email(args.email)
        if args.command == "create-team":
            return await _create_team(args.name)
        msg = f"Unknown command {args.command}"
        raise ValueError(msg)
    finally:
        await close_db()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="edclub-manage", description="EDClub database and account management.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create all tables (development; use alembic in production).")
    subparsers.add_parser("seed-badges", help="Upsert the default badge catalog.")

    set_role = subparsers.add_parser("set-role", help="Change a user's role claim.")
    set_role.add_argument("email")
    set_role.add_argument("role", choices=[r.value for r in Role])

    confirm = subparsers.add_parser("confirm-email", help="Mark a user's email as confirmed.")
    confirm.add_argument("email")

    team = subparsers.add_parser("create-team", help="Create a team and print its id.")
    team.add_argument("name")

    serve = subparsers.add_parser("serve", help="Run the API with uvicorn.")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")

    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logging(get_settings())
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        import uvicorn

        uvicorn.run("edclub.main:app", host=args.host, port=args.port, reload=args.reload)
        return 0

    try:
        print(asyncio.run(_run(args)))
    except LookupError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        print(f"database error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
