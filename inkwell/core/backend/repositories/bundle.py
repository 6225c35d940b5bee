"""
Repository bundle for dependency injection.

This module provides a convenience bundle of one repository per remote table
for easy injection into services.
"""

from __future__ import annotations

from dataclasses import dataclass

from supabase import AsyncClient

from .base import TableRepository
from .followers import FollowerRepository
from .likes import LikeRepository
from .messages import MessageRepository


@dataclass(frozen=True)
class BackendRepos:
    """Convenience bundle of all table repositories."""

    users: TableRepository
    roles: TableRepository
    authors: TableRepository
    posts: TableRepository
    books: TableRepository
    media: TableRepository
    followers: FollowerRepository
    likes: LikeRepository
    messages: MessageRepository


def build_repos(client: AsyncClient) -> BackendRepos:
    """Build a BackendRepos bundle over the shared client handle.

    Args:
        client: Supabase async client

    Returns:
        Bundle containing all repository instances
    """
    return BackendRepos(
        users=TableRepository(client, "users"),
        roles=TableRepository(client, "roles"),
        authors=TableRepository(client, "authors"),
        posts=TableRepository(client, "posts"),
        books=TableRepository(client, "books"),
        media=TableRepository(client, "media"),
        followers=FollowerRepository(client),
        likes=LikeRepository(client),
        messages=MessageRepository(client),
    )
