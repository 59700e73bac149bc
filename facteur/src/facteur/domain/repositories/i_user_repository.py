"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from facteur.domain.entities import User


class IUserRepository(ABC):
    """
    Interface for user persistence operations.

    Implementations raise StorageError when the datastore fails.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create new user.

        Args:
            user: User entity to create

        Returns:
            Created user entity
        """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            Detached user entity if found, None otherwise
        """

    @abstractmethod
    async def get_many(self, user_ids: Sequence[str]) -> List[User]:
        """
        Get several users, silently skipping unknown ids.

        Args:
            user_ids: Identifiers to load

        Returns:
            Users found, in the order of user_ids
        """

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Persist contact and friend-request sets of one user.

        Args:
            user: User entity with updated data

        Returns:
            Saved user entity
        """

    @abstractmethod
    async def save_all(self, users: Sequence[User]) -> None:
        """
        Persist several users as one all-or-nothing unit.

        Either every user is stored, or (on failure) none of the changes
        becomes observable.

        Args:
            users: User entities to store together
        """
