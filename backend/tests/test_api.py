"""
HTTP tests: the gate, guest sessions, forms and chat endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from app import db
from app.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def sign_in_as_guest(client: TestClient) -> None:
    response = client.get("/api/auth/guest", follow_redirects=False)
    assert response.status_code == 307
    assert "session" in client.cookies


def register(client: TestClient, email: str = "alice@mail.com") -> None:
    response = client.post(
        "/api/auth/register",
        data={"email": email, "password": "secret123"}
    )
    assert response.json()["status"] == "success"


class TestStartup:
    """Tests for application startup."""

    def test_db_package_exports_callables(self):
        assert callable(db.init_db)
        assert callable(db.init_database)
        assert callable(db.close_db)

    def test_lifespan_creates_schema(self, client):
        response = client.get("/api/auth/session")

        assert response.status_code == 200
        assert client.get("/api/health/ready").json() == {"ready": True}


class TestGate:
    """Tests for request gating."""

    def test_unauthenticated_api_request_redirects_to_guest(self, client):
        response = client.get("/api/history", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/api/auth/guest?redirectUrl=%2Fapi%2Fhistory"

    def test_guest_redirect_lands_back_with_session(self, client):
        response = client.get("/api/history")

        assert response.status_code == 200
        assert response.json() == {"chats": [], "has_more": False}
        assert "session" in client.cookies

    def test_health_is_public(self, client):
        response = client.get("/api/health", follow_redirects=False)

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_checks_database(self, client):
        response = client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json() == {"ready": True}

    def test_regular_user_sent_home_from_login(self, client):
        register(client)

        response = client.get("/login", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/"

    def test_guest_may_open_register(self, client):
        sign_in_as_guest(client)

        response = client.get("/register", follow_redirects=False)

        assert response.status_code != 307

    def test_invalid_cookie_is_unauthenticated(self, client):
        client.cookies.set("session", "garbage")

        response = client.get("/api/history", follow_redirects=False)

        assert response.status_code == 307


class TestAuthRoutes:
    """Tests for login, register, session and logout."""

    def test_session_without_cookie(self, client):
        response = client.get("/api/auth/session")

        assert response.json() == {"user": None}

    def test_guest_session(self, client):
        sign_in_as_guest(client)

        user = client.get("/api/auth/session").json()["user"]

        assert user["type"] == "guest"
        assert user["email"].startswith("guest-")

    def test_guest_redirect_url_must_be_relative(self, client):
        response = client.get(
            "/api/auth/guest",
            params={"redirectUrl": "https://evil.test/"},
            follow_redirects=False
        )

        assert response.headers["location"] == "/"

    def test_register_then_session(self, client):
        register(client)

        user = client.get("/api/auth/session").json()["user"]

        assert user["email"] == "alice@mail.com"
        assert user["type"] == "regular"

    def test_register_duplicate(self, client):
        register(client)
        client.cookies.clear()

        response = client.post(
            "/api/auth/register",
            json={"email": "alice@mail.com", "password": "secret123"}
        )

        assert response.json()["status"] == "user_exists"

    def test_login_invalid_data(self, client):
        response = client.post(
            "/api/auth/login",
            data={"email": "a@b.com", "password": "short"}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "invalid_data"
        assert "session" not in client.cookies

    def test_login_after_logout(self, client):
        register(client)
        client.post("/api/auth/logout")
        assert client.get("/api/auth/session").json() == {"user": None}

        response = client.post(
            "/api/auth/login",
            json={"email": "alice@mail.com", "password": "secret123"}
        )

        assert response.json()["status"] == "success"
        assert client.get("/api/auth/session").json()["user"]["email"] == "alice@mail.com"

    def test_login_rejects_non_object_json(self, client):
        response = client.post("/api/auth/login", json=["a", "b"])

        assert response.status_code == 422
        assert response.json()["error"] == "ValidationError"


class TestChatRoutes:
    """Tests for chats, votes, actions and history."""

    def submit(self, client: TestClient, chat_id: str = "c1", message_id: str = "m1"):
        return client.post("/api/chat", json={
            "id": chat_id,
            "message": {
                "id": message_id,
                "parts": [{"type": "text", "text": "Hello there"}],
            },
            "selectedChatModel": "chat-model",
            "selectedVisibilityType": "private",
        })

    def test_submit_and_read_chat(self, client):
        sign_in_as_guest(client)

        response = self.submit(client)
        assert response.status_code == 201
        assert response.json()["chat_id"] == "c1"

        chat = client.get("/api/chat/c1").json()
        assert chat["title"] == "Hello there"
        assert chat["is_readonly"] is False
        assert [m["id"] for m in chat["messages"]] == ["m1"]

        history = client.get("/api/history").json()
        assert [c["id"] for c in history["chats"]] == ["c1"]

    def test_history_rejects_both_cursors(self, client):
        sign_in_as_guest(client)

        response = client.get(
            "/api/history",
            params={"starting_after": "a", "ending_before": "b"}
        )

        assert response.status_code == 422

    def test_private_chat_hidden_until_public(self, client):
        sign_in_as_guest(client)
        self.submit(client)
        owner_cookie = client.cookies.get("session")

        client.cookies.clear()
        sign_in_as_guest(client)
        assert client.get("/api/chat/c1").status_code == 404

        client.cookies.clear()
        client.cookies.set("session", owner_cookie)
        state = client.post(
            "/api/actions/update-chat-visibility",
            json={"chatId": "c1", "visibility": "public"}
        ).json()
        assert state["status"] == "success"

        client.cookies.clear()
        sign_in_as_guest(client)
        chat = client.get("/api/chat/c1").json()
        assert chat["is_readonly"] is True

        response = client.delete("/api/chat", params={"id": "c1"})
        assert response.status_code == 403

    def test_vote_on_message(self, client):
        sign_in_as_guest(client)
        self.submit(client)

        response = client.patch(
            "/api/vote",
            json={"chatId": "c1", "messageId": "m1", "type": "down"}
        )
        assert response.status_code == 200
        assert response.json()["is_upvoted"] is False

        votes = client.get("/api/vote", params={"chatId": "c1"}).json()
        assert votes == [{"chat_id": "c1", "message_id": "m1", "is_upvoted": False}]

    def test_delete_chat(self, client):
        sign_in_as_guest(client)
        self.submit(client)

        assert client.delete("/api/chat", params={"id": "c1"}).status_code == 200
        assert client.get("/api/chat/c1").status_code == 404

    def test_unknown_action(self, client):
        sign_in_as_guest(client)

        response = client.post("/api/actions/launch-rockets", json={})

        assert response.status_code == 404

    def test_save_chat_model_action_sets_cookie(self, client):
        sign_in_as_guest(client)

        state = client.post(
            "/api/actions/save-chat-model",
            data={"model": "chat-model-reasoning"}
        ).json()

        assert state["status"] == "success"
        assert client.cookies.get("chat-model") == "chat-model-reasoning"


class TestDocumentRoutes:
    """Tests for documents and suggestions."""

    def test_save_and_list_versions(self, client):
        sign_in_as_guest(client)
        body = {"title": "Notes", "kind": "text", "content": "v1"}

        assert client.post("/api/document", params={"id": "d1"}, json=body).status_code == 200
        body["content"] = "v2"
        client.post("/api/document", params={"id": "d1"}, json=body)

        versions = client.get("/api/document", params={"id": "d1"}).json()
        assert [v["content"] for v in versions] == ["v1", "v2"]

        suggestions = client.get("/api/suggestions", params={"documentId": "d1"}).json()
        assert suggestions == []

    def test_missing_document(self, client):
        sign_in_as_guest(client)

        assert client.get("/api/document", params={"id": "nope"}).status_code == 404
