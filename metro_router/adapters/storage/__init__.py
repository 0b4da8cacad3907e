"""Storage adapters - Implementations of RecentRoutesStorePort.

Available implementations:
- InMemoryRecentRoutesStore: Thread-safe history held in memory
- JSONFileRecentRoutesStore: Same history persisted to a JSON file
"""

from .recent_routes import InMemoryRecentRoutesStore, JSONFileRecentRoutesStore

__all__ = ["InMemoryRecentRoutesStore", "JSONFileRecentRoutesStore"]
