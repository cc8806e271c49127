"""Integration tests for the feed."""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

from edclub.database import session_scope
from edclub.db.models import Post


class TestCreatePost:
    async def test_requires_auth(self, client: AsyncClient, student: dict):
        response = await client.post("/api/posts", json={"content": "hello"})
        assert response.status_code == 401

        feed = await client.get("/api/posts", headers=student["headers"])
        assert feed.json()["posts"] == []

    async def test_publish(self, client: AsyncClient, student: dict):
        response = await client.post("/api/posts", json={"content": "  First post!  "}, headers=student["headers"])
        assert response.status_code == 200
        post = response.json()["post"]
        assert post["content"] == "First post!"
        assert post["userId"] == student["id"]
        assert post["createdAt"]

    async def test_exactly_500_characters_allowed(self, client: AsyncClient, student: dict):
        response = await client.post("/api/posts", json={"content": "x" * 500}, headers=student["headers"])
        assert response.status_code == 200

    async def test_501_characters_rejected(self, client: AsyncClient, student: dict):
        response = await client.post("/api/posts", json={"content": "x" * 501}, headers=student["headers"])
        assert response.status_code == 400
        assert "content" in response.json()["error"]["fieldErrors"]

    async def test_blank_rejected(self, client: AsyncClient, student: dict):
        for content in ("", "   "):
            response = await client.post("/api/posts", json={"content": content}, headers=student["headers"])
            assert response.status_code == 400

        feed = await client.get("/api/posts", headers=student["headers"])
        assert feed.json()["posts"] == []


class TestFeed:
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/posts")
        assert response.status_code == 401

    async def test_everyone_sees_all_authors(self, client: AsyncClient, student: dict, other_student: dict):
        await client.post("/api/posts", json={"content": "from a"}, headers=student["headers"])
        await client.post("/api/posts", json={"content": "from b"}, headers=other_student["headers"])

        response = await client.get("/api/posts", headers=student["headers"])
        authors = {p["userId"] for p in response.json()["posts"]}
        assert authors == {student["id"], other_student["id"]}

    async def test_newest_first_and_capped_at_50(self, client: AsyncClient, student: dict):
        base = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
        async with session_scope() as db:
            for i in range(55):
                db.add(Post(user_id=student["id"], content=f"post {i}", created_at=base + timedelta(minutes=i)))
            await db.commit()

        response = await client.get("/api/posts", headers=student["headers"])
        posts = response.json()["posts"]
        assert len(posts) == 50
        assert posts[0]["content"] == "post 54"
        assert posts[-1]["content"] == "post 5"
