"""
Models for Inkwell.

- domain/: enums and the local shapes assembled from backend rows
- io/: request bodies and response envelopes of the HTTP API
"""
