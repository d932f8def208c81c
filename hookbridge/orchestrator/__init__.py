"""Update request orchestration: webhook call, response reconciliation, replies."""

from hookbridge.orchestrator.reply import ReplyChannel, ReplyHandle
from hookbridge.orchestrator.response import (
    FAILURE_KEYWORDS,
    Classifier,
    KeywordClassifier,
    WebhookReply,
    classify_reply,
    extract_error_message,
    normalize_response,
)
from hookbridge.orchestrator.update import (
    UpdateOrchestrator,
    pending_message,
    terminal_message,
)
from hookbridge.orchestrator.webhook import WebhookClient, build_payload

__all__ = [
    "Classifier",
    "FAILURE_KEYWORDS",
    "KeywordClassifier",
    "ReplyChannel",
    "ReplyHandle",
    "UpdateOrchestrator",
    "WebhookClient",
    "WebhookReply",
    "build_payload",
    "classify_reply",
    "extract_error_message",
    "normalize_response",
    "pending_message",
    "terminal_message",
]
