"""Test doubles for external services."""

from .supabase_backend import FakeSupabaseClient

__all__ = ["FakeSupabaseClient"]
