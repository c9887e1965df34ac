"""
Infrastructure layer - storage, sessions and locking primitives.
Keeps business logic clean from implementation details.
"""

from .memory_store import MemoryStore, Collection
from .session_store import SessionStore
from .locks import KeyedLock

__all__ = ['MemoryStore', 'Collection', 'SessionStore', 'KeyedLock']
