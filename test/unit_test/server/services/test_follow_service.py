"""Unit tests for FollowService."""

from unittest.mock import AsyncMock

import pytest

from inkwell.core.errors import (
    AuthenticationError,
    BackendError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from inkwell.server.services.follows import FollowService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def follows(repos):
    return FollowService(repos)


class TestFollow:
    """Test creating follow edges."""

    async def test_follow_creates_edge(self, follows, world, fake_backend):
        follower = await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert follower.user_id == world.reader.uid
        assert follower.author_id == world.author.uid
        assert len(fake_backend.rows("followers")) == 1
        assert await follows.is_following(world.reader, world.reader.uid, world.author.uid)

    async def test_follow_requires_session(self, follows, world):
        with pytest.raises(AuthenticationError, match="not authenticated"):
            await follows.follow(None, world.reader.uid, world.author.uid)

    async def test_cannot_follow_yourself(self, follows, world, fake_backend):
        with pytest.raises(ValidationError, match="yourself"):
            await follows.follow(world.author, world.author.uid, world.author.uid)
        assert fake_backend.rows("followers") == []

    async def test_cannot_follow_for_someone_else(self, follows, world):
        with pytest.raises(PermissionDeniedError):
            await follows.follow(world.reader, world.other_author.uid, world.author.uid)

    async def test_following_twice_is_conflict(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        with pytest.raises(ConflictError, match="Already following"):
            await follows.follow(world.reader, world.reader.uid, world.author.uid)
        assert len(fake_backend.rows("followers")) == 1

    async def test_existing_edge_is_found_before_inserting(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        with pytest.raises(ConflictError, match="Already following"):
            await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert fake_backend.calls.count(("followers", "insert")) == 1

    async def test_concurrent_follow_is_conflict(self, follows, world, monkeypatch):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)
        monkeypatch.setattr(follows.repos.followers, "find_edge", AsyncMock(return_value=None))

        with pytest.raises(ConflictError, match="Already following") as exc_info:
            await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert exc_info.value.code == "23505"

    async def test_unknown_author(self, follows, world):
        with pytest.raises(NotFoundError):
            await follows.follow(world.reader, world.reader.uid, "missing-author")

    async def test_row_level_security_refusal(self, follows, world, fake_backend):
        fake_backend.fail("followers", "insert", code="42501", message="new row violates row-level security policy")

        with pytest.raises(PermissionDeniedError, match="Insufficient permissions"):
            await follows.follow(world.reader, world.reader.uid, world.author.uid)


class TestUnfollow:
    """Test removing follow edges."""

    async def test_unfollow_removes_edge(self, follows, world):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert await follows.unfollow(world.reader, world.reader.uid, world.author.uid) is True
        assert not await follows.is_following(world.reader, world.reader.uid, world.author.uid)

    async def test_unfollow_without_edge_succeeds(self, follows, world):
        assert await follows.unfollow(world.reader, world.reader.uid, world.author.uid) is True

    async def test_unfollow_outsider_is_denied(self, follows, world):
        with pytest.raises(PermissionDeniedError):
            await follows.unfollow(world.other_author, world.reader.uid, world.author.uid)

    async def test_author_removes_follower(self, follows, world):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        await follows.remove_follower(world.author, world.reader.uid)

        assert await follows.get_followers_count(world.author.uid) == 0


class TestQueries:
    """Test follow status, counts and lists."""

    async def test_is_following_swallows_backend_errors(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)
        fake_backend.fail("followers", "select")

        assert await follows.is_following(world.reader, world.reader.uid, world.author.uid) is False

    async def test_is_following_without_session_is_false(self, follows, world):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert await follows.is_following(None, world.reader.uid, world.author.uid) is False

    async def test_follow_status_propagates_backend_errors(self, follows, world, fake_backend):
        fake_backend.fail("followers", "select")

        with pytest.raises(BackendError):
            await follows.get_follow_status(world.reader, world.reader.uid, world.author.uid)

    async def test_follow_status(self, follows, world):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        status = await follows.get_follow_status(world.reader, world.reader.uid, world.author.uid)

        assert status.exists is True

    async def test_followers_count_and_fallback(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)
        await follows.follow(world.other_author, world.other_author.uid, world.author.uid)

        assert await follows.get_followers_count(world.author.uid) == 2

        fake_backend.fail("followers", "count")
        assert await follows.get_followers_count(world.author.uid) == 0

    async def test_get_followers_and_fallback(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)

        assert [f.user_id for f in await follows.get_followers(world.author.uid)] == [world.reader.uid]

        fake_backend.fail("followers", "select")
        assert await follows.get_followers(world.author.uid) == []

    async def test_follower_profiles_join_users_and_roles(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)
        await follows.follow(world.other_author, world.other_author.uid, world.author.uid)
        fake_backend.seed("users", {"id": "ghost", "full_name": "Ghost", "role_id": 99})
        fake_backend.seed("followers", {"user_id": "ghost", "author_id": world.author.uid})
        fake_backend.seed("followers", {"user_id": "deleted-user", "author_id": world.author.uid})

        profiles = await follows.list_follower_profiles(world.author.uid)

        roles = {profile.user.full_name: profile.user.role for profile in profiles}
        assert roles == {"Rita Reader": "reader", "Boris Poet": "author", "Ghost": "user"}

    async def test_subscriptions_with_counts_and_search(self, follows, world, fake_backend):
        await follows.follow(world.reader, world.reader.uid, world.author.uid)
        await follows.follow(world.reader, world.reader.uid, world.other_author.uid)
        fake_backend.seed(
            "posts",
            {"author_id": world.author.uid, "title": "One"},
            {"author_id": world.author.uid, "title": "Two"},
        )
        fake_backend.seed("books", {"author_id": world.author.uid, "title": "Book"})
        fake_backend.seed("media", {"author_id": world.other_author.uid, "title": "Clip", "media_type": "video"})

        subscriptions = {s.author_name: s for s in await follows.list_subscriptions(world.reader.uid)}

        assert subscriptions["Anna Writer"].posts_count == 2
        assert subscriptions["Anna Writer"].books_count == 1
        assert subscriptions["Boris Poet"].media_count == 1

        found = await follows.list_subscriptions(world.reader.uid, search="bor")
        assert [s.author_name for s in found] == ["Boris Poet"]

    async def test_no_subscriptions(self, follows, world):
        assert await follows.list_subscriptions(world.reader.uid) == []
