"""Infrastructure adapters (database, cache, logging)."""
