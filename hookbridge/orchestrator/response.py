"""Normalization and classification of webhook response bodies.

Webhooks answer in one of two loose shapes, either a list of objects or a
single object, each carrying a ``message`` field. Either may also be empty.
Everything shape-specific happens in this module. The orchestrator only
sees a normalized WebhookReply and an UpdateOutcome.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from hookbridge.core.types import (
    DEFAULT_SUCCESS_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    OutcomeKind,
    UpdateOutcome,
)

FAILURE_KEYWORDS: tuple[str, ...] = ("error", "failed", "not found")

Classifier = Callable[[str], OutcomeKind]
"""Maps a webhook message to SUCCESS or SOFT_FAILURE."""


@dataclass(frozen=True)
class WebhookReply:
    """A webhook body reduced to the one thing the bot shows.

    Attributes:
        message: Extracted message text (or a fixed fallback).
        present: False when the body carried no usable data at all.
    """

    message: str
    present: bool


def _unwrap_message(body: Any) -> str | None:
    """Pull ``message`` out of a list-wrapped or object-wrapped body.

    Only the first list element is consulted. Missing, empty or non-object
    entries yield None.
    """
    if isinstance(body, list):
        first = body[0] if body else None
        candidate = first.get("message") if isinstance(first, dict) else None
    elif isinstance(body, dict):
        candidate = body.get("message")
    else:
        candidate = None

    if not candidate:
        return None
    return candidate if isinstance(candidate, str) else str(candidate)


def normalize_response(body: Any) -> WebhookReply:
    """Reduce a successful webhook body to a WebhookReply.

    Args:
        body: Decoded response body: JSON value, raw text, or None.

    Returns:
        ``present=False`` with the empty-response diagnostic for a missing body,
        an empty list or an empty object. Otherwise the extracted message, or
        "Request processed." when there is none.
    """
    if not body:
        return WebhookReply(message=EMPTY_RESPONSE_MESSAGE, present=False)
    return WebhookReply(
        message=_unwrap_message(body) or DEFAULT_SUCCESS_MESSAGE,
        present=True,
    )


def extract_error_message(body: Any) -> str:
    """Best-effort message from a failed call's error body."""
    return _unwrap_message(body) or GENERIC_ERROR_MESSAGE


class KeywordClassifier:
    """Flags a message as a soft failure if it contains any failure keyword.

    Matching is a case-insensitive substring test. Any object with the
    Classifier signature can replace this one, e.g. to read a structured
    status field instead.
    """

    def __init__(self, keywords: Iterable[str] = FAILURE_KEYWORDS) -> None:
        self.keywords = tuple(k.lower() for k in keywords)
        if not self.keywords:
            raise ValueError("KeywordClassifier needs at least one keyword")

    def __call__(self, message: str) -> OutcomeKind:
        lowered = message.lower()
        if any(keyword in lowered for keyword in self.keywords):
            return OutcomeKind.SOFT_FAILURE
        return OutcomeKind.SUCCESS


def classify_reply(reply: WebhookReply, classifier: Classifier) -> UpdateOutcome:
    """Turn a normalized reply into an UpdateOutcome.

    Absent replies are soft failures without consulting the classifier. Any
    classifier verdict other than SUCCESS is treated as a semantic failure,
    since the webhook did answer.
    """
    if not reply.present:
        return UpdateOutcome.empty_response()
    if classifier(reply.message) is OutcomeKind.SUCCESS:
        return UpdateOutcome.success(reply.message)
    return UpdateOutcome.semantic_failure(reply.message)
