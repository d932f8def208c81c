"""Core types and errors for HookBridge."""

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
from hookbridge.core.types import (
    ColorTag,
    CommandRequest,
    FailureReason,
    OutcomeKind,
    Requester,
    StatusMessage,
    TableRoute,
    UpdateOutcome,
)

__all__ = [
    # Types
    "ColorTag",
    "CommandRequest",
    "FailureReason",
    "OutcomeKind",
    "Requester",
    "StatusMessage",
    "TableRoute",
    "UpdateOutcome",
    # Errors
    "ConfigError",
    "HookBridgeError",
    "InvalidCommandError",
    "LoadError",
    "NotConfiguredError",
    "RegistrationError",
    "ReplyChannelError",
    "ReplyStateError",
    "WebhookError",
]
