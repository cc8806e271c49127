"""Request/response schemas for the feed."""

from __future__ import annotations

from typing import Annotated

from pydantic import StringConstraints

from edclub.shared import DTO, PostDTO

MAX_POST_LENGTH = 500


class CreatePostRequest(DTO):
    content: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=MAX_POST_LENGTH)]


class PostsResponse(DTO):
    posts: list[PostDTO]


class CreatePostResponse(DTO):
    post: PostDTO
