"""
Repository interfaces for Facteur.
"""

from facteur.domain.repositories.i_message_repository import IMessageRepository
from facteur.domain.repositories.i_user_repository import IUserRepository

__all__ = ["IMessageRepository", "IUserRepository"]
