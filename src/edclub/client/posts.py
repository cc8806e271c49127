"""Feed operations."""

from __future__ import annotations

from edclub.client.http import ApiClient
from edclub.shared import PostDTO


async def list_posts(api: ApiClient) -> list[PostDTO]:
    payload = await api.request("GET", "/api/posts")
    return [PostDTO.model_validate(row) for row in payload.get("posts", [])]


async def create_post(api: ApiClient, content: str) -> PostDTO:
    payload = await api.request("POST", "/api/posts", {"content": content})
    return PostDTO.model_validate(payload["post"])
