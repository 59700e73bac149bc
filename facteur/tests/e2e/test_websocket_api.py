"""
E2E tests for the WebSocket endpoint.

Opens real WebSocket sessions against the in-process application and
checks handshake authentication, replies and live pushes.

Usage:
    python facteur/tests/e2e/test_websocket_api.py
    pytest facteur/tests/e2e/test_websocket_api.py
"""

import time

import jwt
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient
from shared.tests import LaborantTest

from facteur.config.settings import Settings
from facteur.main import FacteurApp

SECRET = "e2e-secret-key-for-facteur-ws"


def make_token(user_id: str, username: str) -> str:
    now = int(time.time())
    payload = {"sub": user_id, "username": username, "iat": now, "exp": now + 3600}
    return jwt.encode(payload, SECRET, algorithm="HS256")


class TestWebSocketAPI(LaborantTest):
    """E2E tests for WebSocket sessions."""

    component_name = "facteur"
    test_category = "e2e"

    def _app(self, **overrides) -> FacteurApp:
        options = {
            "ENV": "test",
            "jwt_secret": SECRET,
            "storage_backend": "memory",
            "rate_limit_enabled": False,
            "shutdown_grace_period": 0,
            "receive_timeout": 30,
            "log_level": "warning",
            "verbose": 0,
        }
        options.update(overrides)
        return FacteurApp(Settings(**options))

    def _url(self, user_id: str, username: str) -> str:
        return f"/ws?token={make_token(user_id, username)}"

    # ================================================================
    # Handshake
    # ================================================================

    def test_missing_token_rejected(self):
        """Test the handshake is refused with a policy violation."""
        self.reporter.info("Testing handshake without token", context="Test")

        facteur = self._app()
        with TestClient(facteur.app) as client:
            try:
                with client.websocket_connect("/ws"):
                    pass
                assert False, "Should have raised WebSocketDisconnect"
            except WebSocketDisconnect as e:
                assert e.code == 1008

        assert facteur.container.stats["auth_failures"] == 1

    def test_invalid_token_rejected(self):
        facteur = self._app()
        with TestClient(facteur.app) as client:
            try:
                with client.websocket_connect("/ws?token=forged"):
                    pass
                assert False, "Should have raised WebSocketDisconnect"
            except WebSocketDisconnect as e:
                assert e.code == 1008

    def test_presence_follows_session(self):
        facteur = self._app()
        presence = facteur.container.presence

        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("1", "alice")) as ws:
                ws.send_json({"type": "ping"})
                assert ws.receive_json() == {"type": "pong"}
                assert presence.is_online("1")

            health = client.get("/health").json()

        assert not presence.is_online("1")
        assert health["connections"] == 0

    def test_contacts_report_live_presence(self):
        """Test contact routes show isOnline while the contact holds a session."""
        facteur = self._app()
        alice = {"Authorization": f"Bearer {make_token('1', 'alice')}"}

        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("2", "bob")) as bob:
                bob.send_json({"type": "ping"})
                assert bob.receive_json() == {"type": "pong"}

                client.post("/friends/request", json={"receiverId": "2"}, headers=alice)
                assert bob.receive_json()["type"] == "newFriendRequest"
                bob.send_json({"type": "acceptFriendRequest", "requestId": "1"})
                assert bob.receive_json()["type"] == "friendRequestAccepted"

                online_detail = client.get("/contacts/2", headers=alice).json()
                online_list = client.get("/contacts", headers=alice).json()

            offline_detail = client.get("/contacts/2", headers=alice).json()

        assert online_detail["isOnline"] is True
        assert online_detail["relationship"] == "contacts"
        assert online_list["contacts"] == [{"id": "2", "username": "bob", "isOnline": True}]
        assert offline_detail["isOnline"] is False

    def test_per_user_limit(self):
        facteur = self._app(max_connections_per_user=1)

        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("1", "alice")) as first:
                with client.websocket_connect(self._url("1", "alice")) as second:
                    error = second.receive_json()
                    assert error["type"] == "error"
                    assert error["code"] == "CONNECTION_LIMIT_EXCEEDED"

                first.send_json({"type": "ping"})
                assert first.receive_json() == {"type": "pong"}

        assert facteur.container.stats["connection_rejections_by_type"] == {"per_user": 1}

    # ================================================================
    # Events
    # ================================================================

    def test_alice_messages_online_bob(self):
        """Test alice's message reaches bob live and is acknowledged to alice."""
        self.reporter.info("Testing live message delivery", context="Test")

        facteur = self._app()
        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("2", "bob")) as bob:
                with client.websocket_connect(self._url("1", "alice")) as alice:
                    alice.send_json({"type": "sendMessage", "receiverId": 2, "content": "hi"})

                    ack = alice.receive_json()
                    pushed = bob.receive_json()

            history = client.get(
                "/messages/1", headers={"Authorization": f"Bearer {make_token('2', 'bob')}"}
            ).json()

        assert ack["type"] == "messageSent"
        assert pushed["type"] == "receiveMessage"
        assert pushed["content"] == "hi"
        assert pushed["sender"] == "1"
        assert pushed["id"] == ack["id"]
        assert [m["content"] for m in history["messages"]] == ["hi"]

    def test_friend_request_over_websocket(self):
        facteur = self._app()
        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("2", "bob")) as bob:
                with client.websocket_connect(self._url("1", "alice")) as alice:
                    alice.send_json({"type": "sendFriendRequest", "receiverId": "2"})
                    assert alice.receive_json() == {
                        "type": "friendRequestSent",
                        "receiverId": "2",
                    }
                    assert bob.receive_json() == {
                        "type": "newFriendRequest",
                        "senderId": "1",
                        "username": "alice",
                    }

                    bob.send_json({"type": "acceptFriendRequest", "requestId": "1"})
                    assert bob.receive_json() == {
                        "type": "friendRequestAccepted",
                        "userId": "1",
                        "requestId": "1",
                    }
                    assert alice.receive_json() == {
                        "type": "friendRequestAccepted",
                        "userId": "2",
                        "requestId": "1",
                    }

    def test_invalid_frame(self):
        """Test malformed frames get a validation error and the session stays open."""
        facteur = self._app()
        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("1", "alice")) as ws:
                ws.send_text("not json")
                error = ws.receive_json()
                assert error["type"] == "error"
                assert error["code"] == "VALIDATION_ERROR"

                ws.send_json({"type": "teleport"})
                error = ws.receive_json()
                assert error["errors"] == ["Unknown event type: teleport"]

                ws.send_json({"type": "ping"})
                assert ws.receive_json() == {"type": "pong"}

        assert facteur.container.stats["validation_failures"] == 2

    def test_rate_limit(self):
        facteur = self._app(rate_limit_enabled=True, rate_limit_events=2)
        with TestClient(facteur.app) as client:
            with client.websocket_connect(self._url("1", "alice")) as ws:
                for _ in range(2):
                    ws.send_json({"type": "ping"})
                    assert ws.receive_json() == {"type": "pong"}

                ws.send_json({"type": "ping"})
                error = ws.receive_json()

        assert error["code"] == "RATE_LIMIT_EXCEEDED"
        assert error["retryAfterSeconds"] >= 1
        assert facteur.container.stats["rate_limit_hits"] == 1


if __name__ == "__main__":
    TestWebSocketAPI.run_as_main()
