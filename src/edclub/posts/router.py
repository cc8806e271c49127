"""Feed endpoints: /api/posts."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from edclub.auth.dependencies import AuthContext, require_auth
from edclub.config import get_settings
from edclub.posts.schemas import CreatePostRequest, CreatePostResponse, PostsResponse
from edclub.posts.service import create_post, list_recent_posts
from edclub.shared import PostDTO

router = APIRouter(prefix="/api/posts", tags=["Posts"])


@router.get("", response_model=PostsResponse)
async def get_posts(auth: AuthContext = Depends(require_auth)):
    """Most recent posts, newest first, from every author."""
    posts = await list_recent_posts(auth.db, limit=get_settings().posts_feed_limit)
    return PostsResponse(posts=[PostDTO.model_validate(p) for p in posts])


@router.post("", response_model=CreatePostResponse)
async def post_post(
    body: CreatePostRequest,
    auth: AuthContext = Depends(require_auth),
):
    """Publish a post attributed to the caller."""
    post = await create_post(auth.db, auth.user.id, body.content)
    return CreatePostResponse(post=PostDTO.model_validate(post))
