"""Typed exception hierarchy for HookBridge."""

from __future__ import annotations

from typing import Any


class HookBridgeError(Exception):
    """Base class for all HookBridge errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(HookBridgeError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(HookBridgeError):
    """Base class for loading errors (config files)."""

    pass


class NotConfiguredError(HookBridgeError):
    """Raised when a command references a table with no registered route."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Error: Table '{table}' is not configured for updates.")


class WebhookError(HookBridgeError):
    """Raised when the outbound webhook call fails at the transport level.

    Covers non-2xx responses, connection failures and timeouts. The decoded
    error body (if the endpoint sent one) is kept so a message can be
    extracted for the user.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RegistrationError(HookBridgeError):
    """Raised when the command catalog cannot be registered with the platform."""


class ReplyStateError(HookBridgeError):
    """Raised when a reply handle is driven out of order (e.g. a second terminal message)."""


class ReplyChannelError(HookBridgeError):
    """Raised by a reply channel when the platform rejects a send or edit."""


class InvalidCommandError(HookBridgeError):
    """Raised when a recognised command arrives with missing or mistyped options."""
