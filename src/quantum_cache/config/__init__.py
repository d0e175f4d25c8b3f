"""Configuration — defaults, YAML/env hierarchy, and validated settings."""

from quantum_cache.config.hierarchy import load_config_hierarchy, load_settings
from quantum_cache.config.paths import default_cache_root
from quantum_cache.config.schema import Settings

__all__ = ["Settings", "default_cache_root", "load_config_hierarchy", "load_settings"]
