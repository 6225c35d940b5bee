"""
Realtime change notifications.

Wraps the Supabase realtime channel API for the one subscription Inkwell uses:
row inserts on a single table, narrowed by a PostgREST-style filter.
"""

from __future__ import annotations

import uuid
from typing import Any, Callable, Dict

from supabase import AsyncClient

from inkwell.core.logging_config import get_logger

logger = get_logger(__name__)

ChangeCallback = Callable[[Dict[str, Any]], None]


async def subscribe_inserts(client: AsyncClient, table: str, row_filter: str, callback: ChangeCallback) -> Any:
    """
    Subscribe to ``INSERT`` events on ``public.<table>``.

    Args:
        client: Supabase async client
        table: Table to watch
        row_filter: Filter such as ``"to_author=eq.<id>"``
        callback: Invoked with the change payload for every insert

    Returns:
        The subscribed channel, to be passed to ``unsubscribe``
    """
    channel = client.channel(f"{table}:{row_filter}:{uuid.uuid4().hex[:8]}")
    channel.on_postgres_changes(
        "INSERT",
        schema="public",
        table=table,
        filter=row_filter,
        callback=callback,
    )
    await channel.subscribe()
    logger.debug(f"Subscribed to inserts on {table} ({row_filter})")
    return channel


async def unsubscribe(client: AsyncClient, channel: Any) -> None:
    """Remove a channel created by ``subscribe_inserts``."""
    try:
        await client.remove_channel(channel)
    except Exception as e:
        logger.warning(f"Failed to remove realtime channel: {e}")
