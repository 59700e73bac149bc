"""
Relationship state machine: friend requests and contacts.
"""

from typing import List, Optional, Tuple

from shared.reporter import SystemReporter
from shared.reporter.emojis import Emoji

from facteur.application.dto import ContactsPage
from facteur.domain.entities import User
from facteur.domain.events import FriendRequestAcceptedEvent, NewFriendRequestEvent
from facteur.domain.exceptions import (
    AlreadyContactsError,
    AlreadyPendingError,
    InvalidPayloadError,
    NoSuchRequestError,
    SelfRelationshipError,
    StorageError,
    StorageFailureError,
    UnknownUserError,
)
from facteur.domain.repositories import IUserRepository
from facteur.domain.services import IEventRouter
from facteur.domain.value_objects import RelationshipState
from facteur.infrastructure.locking import KeyedLock


class ManageRelationshipUseCase:
    """
    Transitions between NONE, PENDING and CONTACTS for a pair of users.

    Requests are stored on their receiver. Every transition holds the lock
    of each user it touches, so transitions sharing a user (two accepts of
    one request, or a request to Bob racing Bob accepting Alice) are applied
    one after the other. Notifications are pushed after the new state is
    stored.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        event_router: IEventRouter,
        user_locks: Optional[KeyedLock] = None,
        reporter: Optional[SystemReporter] = None,
    ):
        self.user_repository = user_repository
        self.event_router = event_router
        self.user_locks = user_locks or KeyedLock()
        self.reporter = reporter

    # ================================================================
    # Transitions
    # ================================================================

    async def request_friend(self, sender_id: str, receiver_id: str) -> User:
        """
        NONE -> PENDING: sender asks receiver to become a contact.

        Returns:
            The receiver after the request was recorded

        Raises:
            SelfRelationshipError, UnknownUserError, AlreadyContactsError,
            AlreadyPendingError, StorageFailureError
        """
        self._check_pair(sender_id, receiver_id)

        async with self.user_locks.hold_many(sender_id, receiver_id):
            sender, receiver = await self._load_pair(sender_id, receiver_id)

            if receiver.has_contact(sender_id) or sender.has_contact(receiver_id):
                raise AlreadyContactsError(
                    f"{sender_id} and {receiver_id} are already contacts",
                    user_id=sender_id,
                    other_id=receiver_id,
                )
            if receiver.has_request_from(sender_id) or sender.has_request_from(
                receiver_id
            ):
                raise AlreadyPendingError(
                    f"A friend request between {sender_id} and {receiver_id} "
                    f"is already pending",
                    user_id=sender_id,
                    other_id=receiver_id,
                )

            receiver.friend_requests.add(sender_id)
            await self._store(receiver)

        await self.event_router.deliver(
            receiver_id,
            NewFriendRequestEvent(sender_id=sender_id, username=sender.username or None),
        )
        self._log(
            f"{Emoji.MESSAGE.FRIEND_REQUEST} Friend request {sender_id} -> {receiver_id}"
        )
        return receiver

    async def accept_friend(
        self,
        user_id: str,
        requester_id: str,
        origin_connection_id: Optional[str] = None,
    ) -> User:
        """
        PENDING -> CONTACTS: user accepts the request sent by requester.

        Both users are stored together; afterwards the requester and the
        user's other live connections are notified.

        Args:
            user_id: Receiver of the request (the acceptor)
            requester_id: Sender of the request (the request id)
            origin_connection_id: Acceptor connection excluded from the push

        Returns:
            The requester, now a contact

        Raises:
            UnknownUserError, NoSuchRequestError, StorageFailureError
        """
        self._check_pair(user_id, requester_id)

        async with self.user_locks.hold_many(user_id, requester_id):
            acceptor, requester = await self._load_pair(
                user_id, requester_id, require_request=True
            )

            acceptor.friend_requests.discard(requester_id)
            requester.friend_requests.discard(user_id)
            acceptor.contacts.add(requester_id)
            requester.contacts.add(user_id)

            try:
                await self.user_repository.save_all([acceptor, requester])
            except StorageError as e:
                raise StorageFailureError(
                    f"Failed to store contacts: {e.message}"
                ) from e

        await self.event_router.deliver(
            requester_id,
            FriendRequestAcceptedEvent(user_id=user_id, request_id=requester_id),
        )
        await self.event_router.deliver(
            user_id,
            FriendRequestAcceptedEvent(user_id=requester_id, request_id=requester_id),
            exclude_connection_id=origin_connection_id,
        )
        self._log(
            f"{Emoji.MESSAGE.ACCEPTED} Friend request {requester_id} -> {user_id} accepted"
        )
        return requester

    async def decline_friend(self, user_id: str, requester_id: str) -> None:
        """
        PENDING -> NONE: user drops the request sent by requester.

        The requester is not notified.

        Raises:
            UnknownUserError, NoSuchRequestError, StorageFailureError
        """
        self._check_pair(user_id, requester_id)

        async with self.user_locks.hold_many(user_id, requester_id):
            user = await self.user_repository.get_by_id(user_id)
            if user is None:
                raise UnknownUserError(f"Unknown user: {user_id}", user_id=user_id)
            if not user.has_request_from(requester_id):
                raise NoSuchRequestError(
                    f"No pending request from {requester_id}",
                    user_id=user_id,
                    other_id=requester_id,
                )

            user.friend_requests.discard(requester_id)
            await self._store(user)

        self._log(
            f"{Emoji.MESSAGE.DECLINED} Friend request {requester_id} -> {user_id} declined"
        )

    # ================================================================
    # Queries
    # ================================================================

    async def get_state(self, user_id: str, other_id: str) -> RelationshipState:
        """State of the pair as seen from user_id."""
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UnknownUserError(f"Unknown user: {user_id}", user_id=user_id)

        if user.has_contact(other_id):
            return RelationshipState.CONTACTS
        if user.has_request_from(other_id):
            return RelationshipState.PENDING_INCOMING

        other = await self.user_repository.get_by_id(other_id)
        if other is not None and other.has_request_from(user_id):
            return RelationshipState.PENDING_OUTGOING
        return RelationshipState.NONE

    async def get_contact(
        self, user_id: str, contact_id: str
    ) -> Tuple[User, RelationshipState]:
        """
        Look up another user together with their relationship to user_id.

        Raises:
            UnknownUserError: Either user does not exist
        """
        contact = await self.user_repository.get_by_id(contact_id)
        if contact is None:
            raise UnknownUserError(
                f"Unknown user: {contact_id}", user_id=user_id, other_id=contact_id
            )
        return contact, await self.get_state(user_id, contact_id)

    async def list_friend_requests(self, user_id: str) -> List[User]:
        """Senders of the requests pending on user_id."""
        user = await self._get_user(user_id)
        return await self.user_repository.get_many(sorted(user.friend_requests))

    async def list_contacts(
        self, user_id: str, page: int = 1, limit: int = 20
    ) -> ContactsPage:
        """One page of user_id's contacts ordered by id."""
        if page < 1 or limit < 1:
            raise InvalidPayloadError("page and limit must be positive")

        user = await self._get_user(user_id)
        contact_ids = sorted(user.contacts)
        start = (page - 1) * limit
        contacts = await self.user_repository.get_many(contact_ids[start : start + limit])

        return ContactsPage.build(
            contacts=[contact.to_dict() for contact in contacts],
            page=page,
            limit=limit,
            total=len(contact_ids),
        )

    async def ensure_user(self, user_id: str, username: Optional[str] = None) -> User:
        """Return the user, creating an empty record on first sight."""
        user = await self.user_repository.get_by_id(user_id)
        if user is not None:
            return user

        user = User(id=user_id, username=username or "")
        try:
            return await self.user_repository.create(user)
        except StorageError:
            # Another connection of the same user created it first
            existing = await self.user_repository.get_by_id(user_id)
            if existing is None:
                raise
            return existing

    # ================================================================
    # Helpers
    # ================================================================

    @staticmethod
    def _check_pair(user_id: str, other_id: str) -> None:
        if not other_id:
            raise InvalidPayloadError("Target user id is required")
        if user_id == other_id:
            raise SelfRelationshipError(
                "Cannot create a relationship with yourself", user_id=user_id
            )

    async def _get_user(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UnknownUserError(f"Unknown user: {user_id}", user_id=user_id)
        return user

    async def _load_pair(
        self, user_id: str, other_id: str, require_request: bool = False
    ) -> Tuple[User, User]:
        users = {u.id: u for u in await self.user_repository.get_many([user_id, other_id])}

        user = users.get(user_id)
        if user is None:
            raise UnknownUserError(f"Unknown user: {user_id}", user_id=user_id)
        if require_request and not user.has_request_from(other_id):
            raise NoSuchRequestError(
                f"No pending request from {other_id}",
                user_id=user_id,
                other_id=other_id,
            )

        other = users.get(other_id)
        if other is None:
            raise UnknownUserError(
                f"Unknown user: {other_id}", user_id=user_id, other_id=other_id
            )
        return user, other

    async def _store(self, user: User) -> None:
        try:
            await self.user_repository.save(user)
        except StorageError as e:
            raise StorageFailureError(f"Failed to store user: {e.message}") from e

    def _log(self, msg: str) -> None:
        if self.reporter:
            self.reporter.info(msg, context="Relationship", verbose_level=2)
