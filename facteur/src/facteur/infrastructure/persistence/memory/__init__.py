"""
In-memory repository implementations (storage_backend: memory).
"""

from facteur.infrastructure.persistence.memory.message_repository import (
    InMemoryMessageRepository,
)
from facteur.infrastructure.persistence.memory.user_repository import (
    InMemoryUserRepository,
)

__all__ = ["InMemoryMessageRepository", "InMemoryUserRepository"]
