"""
User entity - the relationship view of a user document.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Set


@dataclass
class User:
    """
    User entity with its contact and friend-request sets.

    Registration data (password, keys, email) is owned by the external user
    store; only what the relationship core needs lives here.

    Attributes:
        id: Stable user identity
        username: Display name
        contacts: Confirmed contacts (symmetric across users)
        friend_requests: Pending requests received by this user (sender ids)
    """

    id: str
    username: str = ""
    contacts: Set[str] = field(default_factory=set)
    friend_requests: Set[str] = field(default_factory=set)

    def __post_init__(self):
        if not self.id:
            raise ValueError("User id is required")
        self.contacts = set(self.contacts)
        self.friend_requests = set(self.friend_requests)
        self.contacts.discard(self.id)
        self.friend_requests.discard(self.id)

    def has_contact(self, user_id: str) -> bool:
        return user_id in self.contacts

    def has_request_from(self, user_id: str) -> bool:
        return user_id in self.friend_requests

    def copy(self) -> "User":
        """Detached copy, safe to mutate without touching stored state."""
        return User(
            id=self.id,
            username=self.username,
            contacts=set(self.contacts),
            friend_requests=set(self.friend_requests),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
        }
