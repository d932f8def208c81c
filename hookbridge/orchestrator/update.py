"""Lifecycle of a single update request.

One ``run()`` call owns one command from the pending status to the terminal
status:

    pending ("Processing Update Request")
        -> POST webhook
        -> success / soft failure / hard failure
        -> terminal status (exactly once)

Nothing raised during the run escapes to the caller. Every failure ends as a
terminal status the user can see.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from hookbridge.core.errors import ReplyChannelError, WebhookError
from hookbridge.core.types import (
    GENERIC_ERROR_MESSAGE,
    ColorTag,
    CommandRequest,
    FailureReason,
    OutcomeKind,
    StatusMessage,
    TableRoute,
    UpdateOutcome,
)
from hookbridge.orchestrator.reply import ReplyChannel, ReplyHandle
from hookbridge.orchestrator.response import (
    Classifier,
    KeywordClassifier,
    classify_reply,
    extract_error_message,
    normalize_response,
)
from hookbridge.orchestrator.webhook import WebhookClient, build_payload

logger = logging.getLogger(__name__)

PENDING_TITLE = "🔄 Processing Update Request"
COMPLETED_TITLE = "Update Request Completed"
ISSUE_TITLE = "❌ Update Request Issue"
FAILED_TITLE = "❌ Update Failed"

EMPTY_RESPONSE_SUGGESTION = (
    "Please check the backend workflow for errors or missing response nodes."
)


def pending_message(request: CommandRequest) -> StatusMessage:
    """Status shown while the webhook is running."""
    return StatusMessage(
        title=PENDING_TITLE,
        body=(
            f"Request to update table `{request.table}` with ID "
            f"`{request.record_id}` has been submitted."
        ),
        color=ColorTag.PENDING,
        fields=(("Status", "Waiting for backend workflow to complete..."),),
    )


def terminal_message(outcome: UpdateOutcome) -> StatusMessage:
    """Render an outcome as the final status.

    Semantic failures are shown in the info colour rather than error: the
    backend answered, it just reported a problem.
    """
    if outcome.kind is OutcomeKind.SUCCESS:
        return StatusMessage(COMPLETED_TITLE, outcome.message, ColorTag.SUCCESS)
    if outcome.reason is FailureReason.SEMANTIC_FAILURE:
        return StatusMessage(COMPLETED_TITLE, outcome.message, ColorTag.INFO)
    if outcome.reason is FailureReason.EMPTY_RESPONSE:
        return StatusMessage(
            ISSUE_TITLE,
            outcome.message,
            ColorTag.ERROR,
            fields=(("Suggestion", EMPTY_RESPONSE_SUGGESTION),),
        )
    return StatusMessage(FAILED_TITLE, outcome.message, ColorTag.ERROR)


def _dump(body: Any) -> str:
    return json.dumps(body, indent=2, default=str)


class UpdateOrchestrator:
    """Runs update requests against their webhooks and reports the result.

    Holds no per-command state, so one instance serves all concurrent
    commands.
    """

    def __init__(
        self,
        webhook: WebhookClient,
        classifier: Classifier | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            webhook: Entered WebhookClient used for every outbound call.
            classifier: Message classifier. Defaults to KeywordClassifier
                with the standard failure keywords.
        """
        self._webhook = webhook
        self._classifier = classifier or KeywordClassifier()

    async def run(
        self,
        request: CommandRequest,
        route: TableRoute,
        channel: ReplyChannel,
    ) -> UpdateOutcome:
        """Run one update request to completion.

        Args:
            request: The command being handled.
            route: Route resolved for request.table.
            channel: Reply surface for this command.

        Returns:
            The outcome that was reported to the user.
        """
        handle = ReplyHandle(channel)
        table, record_id = request.table, request.record_id

        try:
            await handle.begin(pending_message(request))

            logger.info("Sending request to webhook for table %s with ID %s", table, record_id)
            body = await self._webhook.post(route.endpoint_url, build_payload(request))
            logger.info("Full response from webhook: %s", _dump(body))

            outcome = classify_reply(normalize_response(body), self._classifier)
            if outcome.reason is FailureReason.EMPTY_RESPONSE:
                logger.warning("Received empty response from webhook for table %s", table)

        except WebhookError as e:
            logger.error(
                "Error processing update for table %s with ID %s: %s", table, record_id, e
            )
            logger.error(
                "Error response: %s",
                _dump(e.body) if e.body is not None else "No response data",
            )
            outcome = UpdateOutcome.transport_failure(extract_error_message(e.body))

        except ReplyChannelError as e:
            logger.error(
                "Could not send pending status for table %s with ID %s: %s",
                table, record_id, e,
            )
            outcome = UpdateOutcome.transport_failure(GENERIC_ERROR_MESSAGE)

        except Exception:
            logger.exception(
                "Unexpected error processing update for table %s with ID %s",
                table, record_id,
            )
            outcome = UpdateOutcome.transport_failure(GENERIC_ERROR_MESSAGE)

        fallback_outcome = UpdateOutcome.transport_failure(GENERIC_ERROR_MESSAGE)
        fallback = None if outcome == fallback_outcome else terminal_message(fallback_outcome)
        try:
            await handle.finish(terminal_message(outcome), fallback=fallback)
            if fallback is not None and handle.terminal is fallback:
                outcome = fallback_outcome
        except ReplyChannelError as e:
            logger.error(
                "Could not deliver final status for table %s with ID %s: %s",
                table, record_id, e,
            )

        logger.info(
            "Update for table %s with ID %s finished: %s",
            table, record_id, outcome.reason.value if outcome.reason else "success",
        )
        return outcome
