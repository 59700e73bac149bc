"""
SQLAlchemy repository implementations.
"""

from facteur.infrastructure.persistence.repositories.message_repository import (
    MessageRepository,
)
from facteur.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["MessageRepository", "UserRepository"]
