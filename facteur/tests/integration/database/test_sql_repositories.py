"""
Integration tests for the SQLAlchemy repositories.

Runs against an in-memory SQLite database through aiosqlite.

Usage:
    python facteur/tests/integration/database/test_sql_repositories.py
    pytest facteur/tests/integration/database/test_sql_repositories.py
"""

from datetime import datetime, timedelta

from shared.tests import LaborantTest

from facteur.domain.entities import Message, User
from facteur.domain.exceptions import StorageError
from facteur.domain.value_objects import MediaReference
from facteur.infrastructure.persistence import (
    Database,
    MessageRepository,
    UserRepository,
)

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class TestSQLRepositories(LaborantTest):
    """Integration tests for UserRepository and MessageRepository."""

    component_name = "facteur"
    test_category = "integration"

    async def _open(self) -> Database:
        database = Database(DATABASE_URL)
        await database.connect()
        return database

    # ================================================================
    # Database
    # ================================================================

    async def test_health_check(self):
        """Test connect, health check and disconnect."""
        self.reporter.info("Testing database lifecycle", context="Test")

        database = await self._open()
        try:
            assert database.is_connected
            assert await database.health_check()
        finally:
            await database.disconnect()

        assert not database.is_connected
        assert not await database.health_check()

    async def test_session_requires_connect(self):
        database = Database(DATABASE_URL)

        try:
            async with database.session():
                pass
            assert False, "Should have raised RuntimeError"
        except RuntimeError:
            pass

    # ================================================================
    # Users
    # ================================================================

    async def test_user_roundtrip_with_relations(self):
        """Test contacts and requests survive a store/load cycle."""
        self.reporter.info("Testing user persistence", context="Test")

        database = await self._open()
        try:
            users = UserRepository(database)
            await users.create(User(id="1", username="alice"))
            await users.create(User(id="2", username="bob"))
            await users.create(
                User(id="3", username="carol", contacts={"1"}, friend_requests={"2"})
            )

            carol = await users.get_by_id("3")
            assert carol.username == "carol"
            assert carol.contacts == {"1"}
            assert carol.friend_requests == {"2"}

            assert await users.get_by_id("404") is None
            many = await users.get_many(["2", "404", "1", "2"])
            assert [u.id for u in many] == ["2", "1"]
        finally:
            await database.disconnect()

    async def test_duplicate_user_rejected(self):
        database = await self._open()
        try:
            users = UserRepository(database)
            await users.create(User(id="1", username="alice"))

            try:
                await users.create(User(id="1", username="again"))
                assert False, "Should have raised StorageError"
            except StorageError:
                pass
        finally:
            await database.disconnect()

    async def test_save_all_is_atomic(self):
        """Test a failed batch leaves every user untouched."""
        database = await self._open()
        try:
            users = UserRepository(database)
            await users.create(User(id="1", username="alice", friend_requests={"2"}))

            alice = await users.get_by_id("1")
            alice.friend_requests.discard("2")
            alice.contacts.add("2")

            try:
                await users.save_all([alice, User(id="2", username="ghost")])
                assert False, "Should have raised StorageError"
            except StorageError:
                pass

            stored = await users.get_by_id("1")
            assert stored.contacts == set()
            assert stored.friend_requests == {"2"}
        finally:
            await database.disconnect()

    async def test_save_all_replaces_relations(self):
        database = await self._open()
        try:
            users = UserRepository(database)
            await users.create(User(id="1", username="alice"))
            await users.create(User(id="2", username="bob", friend_requests={"1"}))

            await users.save_all(
                [
                    User(id="1", username="alice", contacts={"2"}),
                    User(id="2", username="bob", contacts={"1"}),
                ]
            )

            alice, bob = await users.get_many(["1", "2"])
            assert alice.contacts == {"2"}
            assert bob.contacts == {"1"}
            assert bob.friend_requests == set()
        finally:
            await database.disconnect()

    # ================================================================
    # Messages
    # ================================================================

    async def test_conversation_order_and_paging(self):
        """Test messages come back oldest first, ties broken by sequence."""
        self.reporter.info("Testing message persistence", context="Test")

        database = await self._open()
        try:
            messages = MessageRepository(database)
            start = datetime(2024, 1, 1, 12, 0, 0)

            await messages.create(
                Message(sender_id="2", receiver_id="1", content="b", created_at=start, sequence=2)
            )
            await messages.create(
                Message(sender_id="1", receiver_id="2", content="a", created_at=start, sequence=1)
            )
            await messages.create(
                Message(
                    sender_id="1",
                    receiver_id="2",
                    content="",
                    media=MediaReference(url="https://cdn.example/p.png", media_type="image/png"),
                    created_at=start + timedelta(seconds=1),
                    sequence=3,
                )
            )
            await messages.create(Message(sender_id="1", receiver_id="3", content="x"))

            assert await messages.count_between("2", "1") == 3

            page = await messages.find_between("1", "2", page=1, limit=10)
            assert [m.content for m in page] == ["a", "b", ""]
            assert page[2].media.url == "https://cdn.example/p.png"
            assert page[2].media.media_type == "image"
            assert page[0].media is None

            second = await messages.find_between("2", "1", page=2, limit=2)
            assert [m.sequence for m in second] == [3]
        finally:
            await database.disconnect()

    async def test_duplicate_message_rejected(self):
        database = await self._open()
        try:
            messages = MessageRepository(database)
            message = Message(sender_id="1", receiver_id="2", content="hi")
            await messages.create(message)

            try:
                await messages.create(message)
                assert False, "Should have raised StorageError"
            except StorageError:
                pass
        finally:
            await database.disconnect()


if __name__ == "__main__":
    TestSQLRepositories.run_as_main()
