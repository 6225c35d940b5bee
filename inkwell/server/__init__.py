"""
Inkwell HTTP server.

FastAPI application exposing the social-reading backend under ``/api/v1``.
"""
