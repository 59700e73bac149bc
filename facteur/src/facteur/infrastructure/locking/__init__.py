"""
Locking primitives for Facteur.
"""

from facteur.infrastructure.locking.keyed_lock import KeyedLock

__all__ = ["KeyedLock"]
