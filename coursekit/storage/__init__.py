"""
CourseKit Storage - Persistence port and state serialization.

This module provides:
- KeyValueStore: the get/set port
- MemoryStore, SqliteStore: store implementations
- StateStore: namespaced, best-effort load/save of courses and learner state
"""

from .store import KeyValueStore, MemoryStore, SqliteStore
from .state import StateStore, DEFAULT_KEY_PREFIX

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "StateStore",
    "DEFAULT_KEY_PREFIX",
]
