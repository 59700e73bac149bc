"""
In-memory message repository.
"""

import bisect
from typing import Dict, List, Tuple

from facteur.domain.entities import Message
from facteur.domain.exceptions import StorageError
from facteur.domain.repositories import IMessageRepository


class InMemoryMessageRepository(IMessageRepository):
    """Process-local message store, conversations kept sorted."""

    def __init__(self):
        self._conversations: Dict[Tuple[str, str], List[Message]] = {}
        self._ids = set()

    @staticmethod
    def _key(user_a: str, user_b: str) -> Tuple[str, str]:
        return (user_a, user_b) if user_a <= user_b else (user_b, user_a)

    async def create(self, message: Message) -> Message:
        if message.id in self._ids:
            raise StorageError(f"Message {message.id} already exists")

        conversation = self._conversations.setdefault(
            self._key(message.sender_id, message.receiver_id), []
        )
        keys = [m.sort_key for m in conversation]
        conversation.insert(bisect.bisect_right(keys, message.sort_key), message)
        self._ids.add(message.id)
        return message

    async def find_between(
        self, user_a: str, user_b: str, page: int = 1, limit: int = 50
    ) -> List[Message]:
        conversation = self._conversations.get(self._key(user_a, user_b), [])
        start = (max(page, 1) - 1) * limit
        return conversation[start : start + limit]

    async def count_between(self, user_a: str, user_b: str) -> int:
        return len(self._conversations.get(self._key(user_a, user_b), []))

    def __len__(self) -> int:
        return len(self._ids)
