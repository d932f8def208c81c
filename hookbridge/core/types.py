"""Core types for HookBridge.

This module defines the data structures that flow through a single update
command: who asked, which table route it resolved to, how the webhook call
turned out, and the status message shown back to the user. All dataclasses
are frozen for immutability.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto


@dataclass(frozen=True)
class Requester:
    """The platform user who invoked a command.

    Attributes:
        id: Platform user ID (snowflake, as a string).
        username: Account username.
        tag: Legacy ``username#discriminator`` form (discriminator ``0`` if unset).
        global_name: Display name, falling back to username.
    """

    id: str
    username: str
    tag: str
    global_name: str

    @classmethod
    def from_parts(
        cls,
        id: str | int,
        username: str,
        discriminator: str | None = None,
        global_name: str | None = None,
    ) -> Requester:
        """Build a Requester, applying the tag and display-name fallbacks."""
        return cls(
            id=str(id),
            username=username,
            tag=f"{username}#{discriminator or '0'}",
            global_name=global_name or username,
        )


@dataclass(frozen=True)
class CommandRequest:
    """One ``update`` invocation: table key, record ID and requester."""

    table: str
    record_id: int
    requester: Requester


@dataclass(frozen=True)
class TableRoute:
    """Maps a table key to the webhook endpoint that updates it."""

    table_key: str
    endpoint_url: str


class OutcomeKind(Enum):
    """Three-way verdict for an update request."""

    SUCCESS = auto()
    SOFT_FAILURE = auto()
    HARD_FAILURE = auto()


class FailureReason(Enum):
    """Why an update did not succeed.

    Attributes:
        EMPTY_RESPONSE: Webhook succeeded but returned no usable data.
        SEMANTIC_FAILURE: Webhook responded, but its message reports a failure.
        TRANSPORT_FAILURE: The webhook call itself failed.
    """

    EMPTY_RESPONSE = "empty_response"
    SEMANTIC_FAILURE = "semantic_failure"
    TRANSPORT_FAILURE = "transport_failure"


EMPTY_RESPONSE_MESSAGE = "The workflow completed but returned no response data."
GENERIC_ERROR_MESSAGE = "There was an error processing your request."
DEFAULT_SUCCESS_MESSAGE = "Request processed."


@dataclass(frozen=True)
class UpdateOutcome:
    """Result of one update request, produced exactly once per command.

    Attributes:
        kind: Success, soft failure or hard failure.
        message: Text shown to the user as the terminal message body.
        reason: Failure category, None on success.
    """

    kind: OutcomeKind
    message: str
    reason: FailureReason | None = None

    @classmethod
    def success(cls, message: str) -> UpdateOutcome:
        return cls(kind=OutcomeKind.SUCCESS, message=message)

    @classmethod
    def empty_response(cls) -> UpdateOutcome:
        return cls(
            kind=OutcomeKind.SOFT_FAILURE,
            message=EMPTY_RESPONSE_MESSAGE,
            reason=FailureReason.EMPTY_RESPONSE,
        )

    @classmethod
    def semantic_failure(cls, message: str) -> UpdateOutcome:
        return cls(
            kind=OutcomeKind.SOFT_FAILURE,
            message=message,
            reason=FailureReason.SEMANTIC_FAILURE,
        )

    @classmethod
    def transport_failure(cls, message: str) -> UpdateOutcome:
        return cls(
            kind=OutcomeKind.HARD_FAILURE,
            message=message,
            reason=FailureReason.TRANSPORT_FAILURE,
        )


class ColorTag(Enum):
    """Status colour, valued by the RGB integer the platform renders."""

    PENDING = "pending"
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"

    @property
    def rgb(self) -> int:
        return _COLOR_VALUES[self]


_COLOR_VALUES = {
    ColorTag.PENDING: 0xFFA500,  # orange
    ColorTag.SUCCESS: 0x00FF00,  # green
    ColorTag.INFO: 0xFFA500,  # orange
    ColorTag.ERROR: 0xFF0000,  # red
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StatusMessage:
    """A single state of the user-facing reply.

    Attributes:
        title: Embed title.
        body: Embed description.
        color: Colour tag for the state.
        timestamp: When this state was produced (UTC).
        fields: Inline (name, value) pairs rendered under the body.
    """

    title: str
    body: str
    color: ColorTag
    timestamp: datetime = field(default_factory=_utcnow)
    fields: tuple[tuple[str, str], ...] = ()

    @property
    def is_terminal(self) -> bool:
        """True for any colour other than pending."""
        return self.color is not ColorTag.PENDING
