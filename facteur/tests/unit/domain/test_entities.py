"""
Unit tests for User, Message and MediaReference.

Usage:
    python facteur/tests/unit/domain/test_entities.py
    pytest facteur/tests/unit/domain/test_entities.py
"""

from datetime import datetime

from shared.tests import LaborantTest

from facteur.domain.entities import Message, User
from facteur.domain.value_objects import MediaReference, RelationshipState


class TestEntities(LaborantTest):
    """Unit tests for domain entities and value objects."""

    component_name = "facteur"
    test_category = "unit"

    # ================================================================
    # User
    # ================================================================

    def test_user_never_contains_itself(self):
        """Test a user's own id is dropped from contacts and requests."""
        self.reporter.info("Testing self exclusion", context="Test")

        user = User(id="1", contacts={"1", "2"}, friend_requests={"1", "3"})

        assert user.contacts == {"2"}
        assert user.friend_requests == {"3"}

    def test_user_copy_is_detached(self):
        """Test copies do not share sets with the original."""
        user = User(id="1", username="alice", contacts={"2"})
        clone = user.copy()
        clone.contacts.add("3")

        assert user.contacts == {"2"}
        assert clone.username == "alice"

    def test_user_to_dict(self):
        """Test public user representation."""
        user = User(id="1", username="alice", contacts={"2"})

        assert user.to_dict() == {"id": "1", "username": "alice"}

    # ================================================================
    # MediaReference
    # ================================================================

    def test_media_type_reduced_to_category(self):
        """Test MIME types are stored as their category."""
        self.reporter.info("Testing MIME category", context="Test")

        media = MediaReference(url="/uploads/a.png", media_type="Image/PNG")

        assert media.media_type == "image"

    def test_media_requires_url(self):
        """Test empty media URLs are rejected."""
        try:
            MediaReference(url="  ")
            assert False, "Should have raised ValueError"
        except ValueError:
            pass

    # ================================================================
    # Message
    # ================================================================

    def test_message_to_dict_text_only(self):
        """Test wire representation of a text message."""
        self.reporter.info("Testing message representation", context="Test")

        created = datetime(2024, 1, 2, 3, 4, 5)
        message = Message(
            sender_id="1", receiver_id="2", content="hi", created_at=created, id="m1"
        )

        assert message.to_dict() == {
            "id": "m1",
            "sender": "1",
            "receiver": "2",
            "content": "hi",
            "mediaUrl": None,
            "mediaType": None,
            "thumbnailUrl": None,
            "timestamp": "2024-01-02T03:04:05",
        }

    def test_message_to_dict_with_media(self):
        """Test media fields are flattened."""
        message = Message(
            sender_id="1",
            receiver_id="2",
            media=MediaReference(
                url="/uploads/v.mp4", media_type="video/mp4", thumbnail_url="/t.jpg"
            ),
        )

        data = message.to_dict()
        assert data["content"] == ""
        assert data["mediaUrl"] == "/uploads/v.mp4"
        assert data["mediaType"] == "video"
        assert data["thumbnailUrl"] == "/t.jpg"

    def test_message_is_immutable(self):
        """Test messages cannot be modified."""
        message = Message(sender_id="1", receiver_id="2", content="hi")

        try:
            message.content = "edited"
            assert False, "Should have raised"
        except AttributeError:
            pass

    def test_message_involves_pair_in_either_direction(self):
        message = Message(sender_id="1", receiver_id="2", content="hi")

        assert message.involves("1", "2")
        assert message.involves("2", "1")
        assert not message.involves("1", "3")

    def test_sort_key_breaks_ties_with_sequence(self):
        """Test messages in the same tick order by sequence."""
        tick = datetime(2024, 1, 1)
        first = Message(sender_id="1", receiver_id="2", content="a", created_at=tick, sequence=1)
        second = Message(sender_id="1", receiver_id="2", content="b", created_at=tick, sequence=2)

        assert first.sort_key < second.sort_key

    def test_relationship_state_pending(self):
        assert RelationshipState.PENDING_OUTGOING.is_pending
        assert RelationshipState.PENDING_INCOMING.is_pending
        assert not RelationshipState.CONTACTS.is_pending
        assert not RelationshipState.NONE.is_pending


if __name__ == "__main__":
    TestEntities.run_as_main()
