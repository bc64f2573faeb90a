"""Cache entities and protocols."""

from .protocols import Cache, CacheBackendAdapter

__all__ = ["Cache", "CacheBackendAdapter"]
