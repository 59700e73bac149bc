"""
In-memory user repository.
"""

import asyncio
from typing import Dict, List, Optional, Sequence

from facteur.domain.entities import User
from facteur.domain.exceptions import StorageError
from facteur.domain.repositories import IUserRepository


class InMemoryUserRepository(IUserRepository):
    """
    Process-local user store.

    Entities are copied on the way in and out, so callers never share
    mutable state with the store. save_all swaps every user under one lock.
    """

    def __init__(self, users: Optional[Sequence[User]] = None):
        self._users: Dict[str, User] = {}
        self._lock = asyncio.Lock()
        for user in users or []:
            self._users[user.id] = user.copy()

    async def create(self, user: User) -> User:
        async with self._lock:
            if user.id in self._users:
                raise StorageError(f"User {user.id} already exists")
            self._users[user.id] = user.copy()
        return user.copy()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.copy() if user else None

    async def get_many(self, user_ids: Sequence[str]) -> List[User]:
        return [
            self._users[user_id].copy()
            for user_id in dict.fromkeys(user_ids)
            if user_id in self._users
        ]

    async def save(self, user: User) -> User:
        await self.save_all([user])
        return user.copy()

    async def save_all(self, users: Sequence[User]) -> None:
        async with self._lock:
            missing = [user.id for user in users if user.id not in self._users]
            if missing:
                raise StorageError(f"Unknown users: {', '.join(missing)}")
            self._users.update({user.id: user.copy() for user in users})

    def __len__(self) -> int:
        return len(self._users)
