"""
Persistence infrastructure for Facteur.
"""

from facteur.infrastructure.persistence.database import Database
from facteur.infrastructure.persistence.memory import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from facteur.infrastructure.persistence.repositories import (
    MessageRepository,
    UserRepository,
)

__all__ = [
    "Database",
    "InMemoryMessageRepository",
    "InMemoryUserRepository",
    "MessageRepository",
    "UserRepository",
]
