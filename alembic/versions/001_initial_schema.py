"""Initial schema: users, teams, events, attendances, posts, badges, user_badges.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Users (auth provider) ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id VARCHAR(36) PRIMARY KEY,
            email VARCHAR(320) UNIQUE NOT NULL,
            password_hash VARCHAR(256) NOT NULL,
            role VARCHAR(16) NOT NULL DEFAULT 'student',
            email_confirmed_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            last_sign_in_at TIMESTAMPTZ,
            CONSTRAINT users_role_check CHECK (role IN ('student', 'teacher'))
        )
    """)

    # --- Agenda ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS teams (
            id VARCHAR(36) PRIMARY KEY,
            name VARCHAR(128) NOT NULL
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS events (
            id VARCHAR(36) PRIMARY KEY,
            team_id VARCHAR(36) REFERENCES teams(id) ON DELETE SET NULL,
            title VARCHAR(200) NOT NULL,
            starts_at TIMESTAMPTZ NOT NULL,
            ends_at TIMESTAMPTZ NOT NULL,
            CONSTRAINT events_time_order CHECK (starts_at <= ends_at)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_events_starts_at ON events(starts_at)")

    op.execute("""
        CREATE TABLE IF NOT EXISTS attendances (
            id VARCHAR(36) PRIMARY KEY,
            event_id VARCHAR(36) NOT NULL REFERENCES events(id) ON DELETE CASCADE,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status VARCHAR(16) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT attendances_user_id_event_id_key UNIQUE (user_id, event_id),
            CONSTRAINT attendances_status_check CHECK (status IN ('present', 'absent', 'late'))
        )
    """)
    op.execute("""
        CREATE INDEX IF NOT EXISTS idx_attendances_user_created
        ON attendances(user_id, created_at)
    """)

    # --- Feed ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS posts (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            content VARCHAR(500) NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT posts_content_length CHECK (char_length(content) BETWEEN 1 AND 500)
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at)")

    # --- Badges ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS badges (
            id VARCHAR(36) PRIMARY KEY,
            name VARCHAR(128) UNIQUE NOT NULL,
            rule TEXT,
            icon_url VARCHAR(256)
        )
    """)
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_badges (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            badge_id VARCHAR(36) NOT NULL REFERENCES badges(id) ON DELETE CASCADE,
            awarded_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT user_badges_user_id_badge_id_key UNIQUE (user_id, badge_id)
        )
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS user_badges CASCADE")
    op.execute("DROP TABLE IF EXISTS badges CASCADE")
    op.execute("DROP TABLE IF EXISTS posts CASCADE")
    op.execute("DROP TABLE IF EXISTS attendances CASCADE")
    op.execute("DROP TABLE IF EXISTS events CASCADE")
    op.execute("DROP TABLE IF EXISTS teams CASCADE")
    op.execute("DROP TABLE IF EXISTS users CASCADE")
