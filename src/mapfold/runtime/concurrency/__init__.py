"""Opt-in parallel mapping on a thread pool (ordered results, unordered side effects)."""

from .pool import ThreadPool, map_parallel, pmap_parallel

__all__ = ["ThreadPool", "map_parallel", "pmap_parallel"]
