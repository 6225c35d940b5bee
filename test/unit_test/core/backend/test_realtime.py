"""Unit tests for realtime insert subscriptions."""

from unittest.mock import AsyncMock

import pytest

from inkwell.core.backend.realtime import subscribe_inserts, unsubscribe

pytestmark = pytest.mark.asyncio


async def test_subscribe_inserts_delivers_matching_rows(fake_backend):
    received = []
    channel = await subscribe_inserts(fake_backend, "messages", "to_author=eq.a1", received.append)

    fake_backend.insert_row("messages", {"to_author": "a1", "from_user": "u1", "content": "hi"})
    fake_backend.insert_row("messages", {"to_author": "a2", "from_user": "u1", "content": "not for a1"})

    assert channel.subscribed
    assert channel.topic.startswith("messages:to_author=eq.a1:")
    assert [payload["data"]["record"]["content"] for payload in received] == ["hi"]


async def test_unsubscribe_removes_channel(fake_backend):
    channel = await subscribe_inserts(fake_backend, "messages", "to_author=eq.a1", lambda payload: None)

    await unsubscribe(fake_backend, channel)

    assert channel in fake_backend.removed_channels
    assert fake_backend.channels == []


async def test_unsubscribe_failure_is_only_logged():
    client = AsyncMock()
    client.remove_channel.side_effect = RuntimeError("socket closed")

    await unsubscribe(client, object())

    client.remove_channel.assert_awaited_once()
