"""quantum-cache: local content-addressed cache for remote component files."""

from quantum_cache.cache import CacheManager, RemoteCache

__version__ = "0.1.0"

__all__ = ["CacheManager", "RemoteCache", "__version__"]
