"""Tests for the structlog processors in app.utils.logging."""

from app.utils.logging import redact_secrets


def test_sensitive_keys_are_redacted():
    event = {"event": "login", "token": "eyJhbGciOi...", "session": "abc", "user_id": "u-1"}

    result = redact_secrets(None, "info", event)

    assert result["token"] == "[REDACTED]"
    assert result["session"] == "[REDACTED]"
    assert result["user_id"] == "u-1"
    assert result["event"] == "login"


def test_event_without_secrets_is_untouched():
    event = {"event": "access_denied", "gate": "role", "required": "Administrator"}
    assert redact_secrets(None, "debug", dict(event)) == event
