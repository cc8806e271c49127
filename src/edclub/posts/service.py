"""Feed queries and post creation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select

from edclub.db.models import Post

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def list_recent_posts(db: AsyncSession, limit: int) -> list[Post]:
    """The newest `limit` posts from every author."""
    result = await db.execute(
        select(Post).order_by(Post.created_at.desc(), Post.id.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def create_post(db: AsyncSession, user_id: str, content: str) -> Post:
    post = Post(user_id=user_id, content=content)
    db.add(post)
    await db.commit()
    logger.info("post_created", post_id=post.id, user_id=user_id, length=len(content))
    return post
