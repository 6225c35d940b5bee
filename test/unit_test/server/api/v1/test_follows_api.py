"""API tests for the follow endpoints."""

import pytest

pytestmark = pytest.mark.asyncio


def _auth(session):
    return {"Authorization": f"Bearer {session.token}"}


class TestFollowFlow:
    async def test_follow_status_count_unfollow(self, client, world):
        author_id = world.author.uid

        follow = await client.post(f"/api/v1/follows/{author_id}", headers=_auth(world.reader))
        assert follow.status_code == 201
        assert follow.json()["user_id"] == world.reader.uid

        status = await client.get(f"/api/v1/follows/{author_id}/status", headers=_auth(world.reader))
        assert status.json() == {"exists": True}

        count = await client.get(f"/api/v1/follows/{author_id}/count")
        assert count.json() == {"author_id": author_id, "followers_count": 1}

        unfollow = await client.delete(f"/api/v1/follows/{author_id}", headers=_auth(world.reader))
        assert unfollow.status_code == 200
        assert (await client.get(f"/api/v1/follows/{author_id}/count")).json()["followers_count"] == 0

    async def test_follow_twice_is_conflict(self, client, world):
        await client.post(f"/api/v1/follows/{world.author.uid}", headers=_auth(world.reader))

        response = await client.post(f"/api/v1/follows/{world.author.uid}", headers=_auth(world.reader))

        assert response.status_code == 409
        assert response.json()["detail"] == "Already following this author"

    async def test_follow_self_is_rejected(self, client, world):
        response = await client.post(f"/api/v1/follows/{world.author.uid}", headers=_auth(world.author))

        assert response.status_code == 422

    async def test_follow_requires_sign_in(self, client, world):
        response = await client.post(f"/api/v1/follows/{world.author.uid}")

        assert response.status_code == 401

    async def test_unknown_author(self, client, world):
        response = await client.post("/api/v1/follows/missing", headers=_auth(world.reader))

        assert response.status_code == 404


class TestMyFollowers:
    async def test_author_lists_and_removes_followers(self, client, world):
        await client.post(f"/api/v1/follows/{world.author.uid}", headers=_auth(world.reader))

        listed = await client.get("/api/v1/follows/me/followers", headers=_auth(world.author))
        assert listed.status_code == 200
        (follower,) = listed.json()
        assert follower["user"]["full_name"] == "Rita Reader"
        assert follower["user"]["role"] == "reader"

        removed = await client.delete(f"/api/v1/follows/me/followers/{world.reader.uid}", headers=_auth(world.author))
        assert removed.status_code == 200
        assert (await client.get("/api/v1/follows/me/followers", headers=_auth(world.author))).json() == []

    async def test_readers_have_no_follower_list(self, client, world):
        response = await client.get("/api/v1/follows/me/followers", headers=_auth(world.reader))

        assert response.status_code == 403

    async def test_subscriptions(self, client, world):
        await client.post(f"/api/v1/follows/{world.author.uid}", headers=_auth(world.reader))
        await client.post(f"/api/v1/follows/{world.other_author.uid}", headers=_auth(world.reader))

        everything = await client.get("/api/v1/follows/me/subscriptions", headers=_auth(world.reader))
        searched = await client.get(
            "/api/v1/follows/me/subscriptions", params={"search": "anna"}, headers=_auth(world.reader)
        )

        assert len(everything.json()) == 2
        assert [s["author_name"] for s in searched.json()] == ["Anna Writer"]
