"""
Message repository interface.
"""

from abc import ABC, abstractmethod
from typing import List

from facteur.domain.entities import Message


class IMessageRepository(ABC):
    """Interface for message persistence operations."""

    @abstractmethod
    async def create(self, message: Message) -> Message:
        """
        Persist a new message.

        Args:
            message: Message entity to store

        Returns:
            Stored message entity

        Raises:
            StorageError: If the datastore fails
        """

    @abstractmethod
    async def find_between(
        self, user_a: str, user_b: str, page: int = 1, limit: int = 50
    ) -> List[Message]:
        """
        Get messages exchanged between two users, oldest first.

        Args:
            user_a: One participant
            user_b: Other participant
            page: 1-based page number
            limit: Page size

        Returns:
            Messages of the requested page ordered by (created_at, sequence)
        """

    @abstractmethod
    async def count_between(self, user_a: str, user_b: str) -> int:
        """Count messages exchanged between two users."""
