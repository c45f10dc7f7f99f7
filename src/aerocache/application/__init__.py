"""Application layer – caching engine for domain services."""
