"""Unit tests for hookbridge.core.errors module."""

import pytest

from hookbridge.core.errors import (
    ConfigError,
    HookBridgeError,
    InvalidCommandError,
    LoadError,
    NotConfiguredError,
    RegistrationError,
    ReplyChannelError,
    ReplyStateError,
    WebhookError,
)


class TestHookBridgeError:
    """Tests for HookBridgeError base class."""

    def test_accepts_message(self):
        """HookBridgeError can be created with a message."""
        err = HookBridgeError("Something went wrong")
        assert err.message == "Something went wrong"
        assert str(err) == "Something went wrong"

    def test_is_exception(self):
        """HookBridgeError inherits from Exception."""
        assert issubclass(HookBridgeError, Exception)

    @pytest.mark.parametrize(
        "error_class",
        [
            ConfigError,
            InvalidCommandError,
            LoadError,
            NotConfiguredError,
            RegistrationError,
            ReplyChannelError,
            ReplyStateError,
            WebhookError,
        ],
    )
    def test_subclasses(self, error_class):
        """Every HookBridge error can be caught as HookBridgeError."""
        assert issubclass(error_class, HookBridgeError)


class TestNotConfiguredError:
    """Tests for NotConfiguredError."""

    def test_names_table(self):
        """The message is the user-facing rejection text."""
        err = NotConfiguredError("tf2_maps")
        assert err.table == "tf2_maps"
        assert err.message == "Error: Table 'tf2_maps' is not configured for updates."


class TestWebhookError:
    """Tests for WebhookError."""

    def test_defaults(self):
        """status_code and body default to None."""
        err = WebhookError("Connection refused")
        assert err.status_code is None
        assert err.body is None

    def test_carries_response(self):
        """status_code and body are stored for message extraction."""
        err = WebhookError("failed", status_code=400, body=[{"message": "Invalid id"}])
        assert err.status_code == 400
        assert err.body == [{"message": "Invalid id"}]
