"""
Unit tests for ManageRelationshipUseCase.

Usage:
    python facteur/tests/unit/application/test_manage_relationship.py
    pytest facteur/tests/unit/application/test_manage_relationship.py
"""

import asyncio

from shared.tests import LaborantTest

from facteur.application.use_cases import ManageRelationshipUseCase
from facteur.domain.entities import User
from facteur.domain.exceptions import (
    AlreadyContactsError,
    AlreadyPendingError,
    NoSuchRequestError,
    SelfRelationshipError,
    StorageError,
    StorageFailureError,
    UnknownUserError,
)
from facteur.domain.services import DeliveryReport, IEventRouter
from facteur.domain.value_objects import RelationshipState
from facteur.infrastructure.persistence import InMemoryUserRepository


class RecordingRouter(IEventRouter):
    """Event router double that records deliveries."""

    def __init__(self):
        self.deliveries = []

    async def deliver(self, recipient_id, event, exclude_connection_id=None):
        self.deliveries.append((recipient_id, event.to_wire(), exclude_connection_id))
        return DeliveryReport(recipient_id=recipient_id)


class FailingSaveUserRepository(InMemoryUserRepository):
    """User store whose multi-user writes fail."""

    async def save_all(self, users):
        raise StorageError("write conflict")


class SlowReadUserRepository(InMemoryUserRepository):
    """User store that yields to other tasks before every read."""

    async def get_by_id(self, user_id):
        await asyncio.sleep(0.01)
        return await super().get_by_id(user_id)

    async def get_many(self, user_ids):
        await asyncio.sleep(0.01)
        return await super().get_many(user_ids)


class TestManageRelationship(LaborantTest):
    """Unit tests for the relationship state machine."""

    component_name = "facteur"
    test_category = "unit"

    def setup_test(self):
        self.users = InMemoryUserRepository(
            [
                User(id="1", username="alice"),
                User(id="2", username="bob"),
                User(id="3", username="carol"),
            ]
        )
        self.router = RecordingRouter()
        self.use_case = ManageRelationshipUseCase(self.users, self.router)

    # ================================================================
    # Request
    # ================================================================

    async def test_request_records_pending_on_receiver(self):
        """Test a request is stored on the receiver and pushed to them."""
        self.reporter.info("Testing friend request", context="Test")

        await self.use_case.request_friend("1", "2")

        bob = await self.users.get_by_id("2")
        assert bob.friend_requests == {"1"}
        assert await self.use_case.get_state("1", "2") == RelationshipState.PENDING_OUTGOING
        assert await self.use_case.get_state("2", "1") == RelationshipState.PENDING_INCOMING
        assert self.router.deliveries == [
            ("2", {"type": "newFriendRequest", "senderId": "1", "username": "alice"}, None)
        ]

    async def test_double_request_already_pending(self):
        """Test requesting twice fails and changes nothing."""
        self.reporter.info("Testing duplicate request", context="Test")

        await self.use_case.request_friend("1", "2")

        try:
            await self.use_case.request_friend("1", "2")
            assert False, "Should have raised AlreadyPendingError"
        except AlreadyPendingError:
            pass

        bob = await self.users.get_by_id("2")
        assert bob.friend_requests == {"1"}
        assert len(self.router.deliveries) == 1

    async def test_crossed_request_already_pending(self):
        """Test B cannot request A while A's request to B is pending."""
        await self.use_case.request_friend("1", "2")

        try:
            await self.use_case.request_friend("2", "1")
            assert False, "Should have raised AlreadyPendingError"
        except AlreadyPendingError:
            pass

    async def test_request_to_contact_rejected(self):
        await self.use_case.request_friend("1", "2")
        await self.use_case.accept_friend("2", "1")

        try:
            await self.use_case.request_friend("2", "1")
            assert False, "Should have raised AlreadyContactsError"
        except AlreadyContactsError:
            pass

    async def test_request_to_unknown_user(self):
        try:
            await self.use_case.request_friend("1", "99")
            assert False, "Should have raised UnknownUserError"
        except UnknownUserError as e:
            assert e.other_id == "99"

    async def test_request_to_self(self):
        try:
            await self.use_case.request_friend("1", "1")
            assert False, "Should have raised SelfRelationshipError"
        except SelfRelationshipError:
            pass

    # ================================================================
    # Accept
    # ================================================================

    async def test_accept_makes_symmetric_contacts(self):
        """Test accept links both users and notifies both sides."""
        self.reporter.info("Testing accept", context="Test")

        await self.use_case.request_friend("1", "2")
        self.router.deliveries.clear()

        requester = await self.use_case.accept_friend("2", "1", origin_connection_id="conn_b")

        alice = await self.users.get_by_id("1")
        bob = await self.users.get_by_id("2")
        assert requester.id == "1"
        assert alice.contacts == {"2"}
        assert bob.contacts == {"1"}
        assert bob.friend_requests == set()
        assert self.router.deliveries == [
            ("1", {"type": "friendRequestAccepted", "userId": "2", "requestId": "1"}, None),
            ("2", {"type": "friendRequestAccepted", "userId": "1", "requestId": "1"}, "conn_b"),
        ]

    async def test_accept_twice_no_such_request(self):
        """Test a second accept fails with no state change."""
        self.reporter.info("Testing re-accept", context="Test")

        await self.use_case.request_friend("1", "2")
        await self.use_case.accept_friend("2", "1")

        try:
            await self.use_case.accept_friend("2", "1")
            assert False, "Should have raised NoSuchRequestError"
        except NoSuchRequestError:
            pass

        alice = await self.users.get_by_id("1")
        assert alice.contacts == {"2"}

    async def test_accept_without_request(self):
        try:
            await self.use_case.accept_friend("2", "3")
            assert False, "Should have raised NoSuchRequestError"
        except NoSuchRequestError:
            pass
        assert self.router.deliveries == []

    async def test_concurrent_accepts_apply_once(self):
        """Test two racing accepts on one pair: one wins, one fails."""
        await self.use_case.request_friend("1", "2")

        results = await asyncio.gather(
            self.use_case.accept_friend("2", "1"),
            self.use_case.accept_friend("2", "1"),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, NoSuchRequestError)]
        assert len(failures) == 1
        bob = await self.users.get_by_id("2")
        assert bob.contacts == {"1"}

    async def test_transitions_sharing_a_user_keep_both_updates(self):
        """Test accept(bob, alice) racing request(carol -> bob) loses nothing."""
        self.reporter.info("Testing transitions on pairs sharing bob", context="Test")

        users = SlowReadUserRepository(
            [
                User(id="1", username="alice"),
                User(id="2", username="bob", friend_requests={"1"}),
                User(id="3", username="carol"),
            ]
        )
        use_case = ManageRelationshipUseCase(users, self.router)

        await asyncio.gather(
            use_case.accept_friend("2", "1"),
            use_case.request_friend("3", "2"),
        )

        bob = await users.get_by_id("2")
        assert bob.contacts == {"1"}
        assert bob.friend_requests == {"3"}
        alice = await users.get_by_id("1")
        assert alice.contacts == {"2"}

    async def test_failed_accept_leaves_state_untouched(self):
        """Test a storage failure during accept keeps the request pending."""
        users = FailingSaveUserRepository(
            [User(id="1"), User(id="2", friend_requests={"1"})]
        )
        use_case = ManageRelationshipUseCase(users, self.router)

        try:
            await use_case.accept_friend("2", "1")
            assert False, "Should have raised StorageFailureError"
        except StorageFailureError:
            pass

        bob = await users.get_by_id("2")
        alice = await users.get_by_id("1")
        assert bob.friend_requests == {"1"}
        assert bob.contacts == set()
        assert alice.contacts == set()
        assert self.router.deliveries == []

    # ================================================================
    # Decline / queries
    # ================================================================

    async def test_decline_removes_request_silently(self):
        """Test decline drops the request without notifying anyone."""
        await self.use_case.request_friend("1", "2")
        self.router.deliveries.clear()

        await self.use_case.decline_friend("2", "1")

        assert await self.use_case.get_state("1", "2") == RelationshipState.NONE
        assert self.router.deliveries == []

        try:
            await self.use_case.decline_friend("2", "1")
            assert False, "Should have raised NoSuchRequestError"
        except NoSuchRequestError:
            pass

    async def test_list_friend_requests(self):
        await self.use_case.request_friend("1", "2")
        await self.use_case.request_friend("3", "2")

        senders = await self.use_case.list_friend_requests("2")

        assert [s.to_dict() for s in senders] == [
            {"id": "1", "username": "alice"},
            {"id": "3", "username": "carol"},
        ]

    async def test_list_contacts_paginates(self):
        """Test contacts pagination block."""
        for requester in ("2", "3"):
            await self.use_case.request_friend(requester, "1")
            await self.use_case.accept_friend("1", requester)

        page = await self.use_case.list_contacts("1", page=1, limit=1)
        body = page.to_response()

        assert body["contacts"] == [{"id": "2", "username": "bob"}]
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 2,
            "totalContacts": 2,
            "hasNextPage": True,
            "hasPrevPage": False,
        }

    async def test_get_contact_with_relationship(self):
        await self.use_case.request_friend("1", "2")

        contact, state = await self.use_case.get_contact("2", "1")

        assert contact.to_dict() == {"id": "1", "username": "alice"}
        assert state == RelationshipState.PENDING_INCOMING

    async def test_get_contact_unknown_user(self):
        try:
            await self.use_case.get_contact("1", "99")
            assert False, "Should have raised UnknownUserError"
        except UnknownUserError as e:
            assert e.code == "UNKNOWN_USER"

    async def test_ensure_user_creates_once(self):
        created = await self.use_case.ensure_user("42", "dave")
        again = await self.use_case.ensure_user("42", "ignored")

        assert created.username == "dave"
        assert again.username == "dave"


if __name__ == "__main__":
    TestManageRelationship.run_as_main()
