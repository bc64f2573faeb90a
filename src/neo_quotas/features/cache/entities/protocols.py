"""Cache protocols for neo-quotas.

This module defines the interface the quota feature consumes for caching
read-mostly data (effective limits). Values must be JSON-serializable.
"""

from abc import abstractmethod
from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheBackendAdapter(Protocol):
    """Protocol for cache backend implementations."""

    @abstractmethod
    async def connect(self) -> None:
        """Open connections to the backend."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connections to the backend."""
        ...

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get value by key, None on miss."""
        ...

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set key-value pair with optional TTL in seconds."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete key and return whether it existed."""
        ...

    @abstractmethod
    async def increment(self, key: str) -> int:
        """Atomically add 1 to an integer counter, starting from 0, and return it."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if key exists."""
        ...

    @abstractmethod
    async def clear(self) -> None:
        """Clear all cache entries owned by this adapter."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check backend health."""
        ...

    @abstractmethod
    async def info(self) -> Dict[str, Any]:
        """Get cache backend information."""
        ...


# Short alias used by feature code
Cache = CacheBackendAdapter
