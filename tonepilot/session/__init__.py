"""Session-scoped persistence for the memory store."""

from tonepilot.session.storage import InMemorySessionStorage, JsonFileSessionStorage

__all__ = ["InMemorySessionStorage", "JsonFileSessionStorage"]
