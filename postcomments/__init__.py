"""Posts with threaded, cursor-paginated comments held in an in-memory store."""

__version__ = "0.1.0"
__all__ = ["models", "repositories", "memory", "services", "resolvers"]