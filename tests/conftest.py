import pytest

from quantum_cache.cache.index import CacheIndex
from quantum_cache.cache.manager import CacheManager


@pytest.fixture
def cache_root(tmp_path):
    """Isolated cache root (not created until the index loads)."""
    return tmp_path / "quantum-cli"


@pytest.fixture
def index(cache_root):
    return CacheIndex(cache_root).load()


@pytest.fixture
def manager(cache_root):
    return CacheManager(root=cache_root)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for var in ("QUANTUM_CACHE_DIR", "QUANTUM_CACHE_ATOMIC_WRITES", "QUANTUM_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
