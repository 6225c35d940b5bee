"""Service layer: one service per feature, built per request over the shared backend client."""
