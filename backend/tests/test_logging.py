"""
Tests for log event redaction.
"""

from app.core.logging import REDACTED, redact_secrets


def test_masks_credentials():
    event = redact_secrets(None, "info", {
        "event": "Sign-in",
        "password": "secret123",
        "token": "eyJ...",
        "user_id": "u1",
    })

    assert event["password"] == REDACTED
    assert event["token"] == REDACTED
    assert event["user_id"] == "u1"
    assert event["event"] == "Sign-in"


def test_leaves_clean_events_alone():
    event = {"event": "Chat created", "chat_id": "c1"}

    assert redact_secrets(None, "info", dict(event)) == event
