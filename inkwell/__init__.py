"""Inkwell.

A content-publishing service: authors publish posts, books and videos; readers
follow authors, like content and comment on an author's page.

High-level architecture
-----------------------

Inkwell owns no data engine of its own. Authentication, relational tables,
file storage and realtime change notifications all live in a hosted
backend-as-a-service (Supabase) and are reached through a single shared SDK
client handle.

Core subpackages
----------------

- ``inkwell.core``:

  - Logging and optional Logfire monitoring.
  - The exception taxonomy shared by every layer.
  - ``backend``: the client handle, per-table repositories, storage uploads
    and realtime subscriptions.
  - ``models``: domain shapes assembled from rows and API I/O schemas.

- ``inkwell.server``:

  - The FastAPI application, its settings and exception handlers.
  - ``services``: auth, social graph (follows, likes, comments), profiles and
    content, each a thin sequence of remote calls.
  - ``api.v1``: the HTTP endpoints.
"""
