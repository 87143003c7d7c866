"""Utility modules for stackprint."""

from stackprint.utils.cache import ProfileCache, compute_source_checksum, get_cache_dir

__all__ = ["ProfileCache", "compute_source_checksum", "get_cache_dir"]
