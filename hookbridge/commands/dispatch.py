"""Route-or-reject entry point for an incoming ``update`` command."""

from __future__ import annotations

import logging

from hookbridge.commands.router import CommandRouter
from hookbridge.core.errors import NotConfiguredError, ReplyChannelError
from hookbridge.core.types import CommandRequest, UpdateOutcome
from hookbridge.orchestrator.reply import ReplyChannel
from hookbridge.orchestrator.update import UpdateOrchestrator

logger = logging.getLogger(__name__)


async def dispatch_update(
    request: CommandRequest,
    router: CommandRouter,
    orchestrator: UpdateOrchestrator,
    channel: ReplyChannel,
) -> UpdateOutcome | None:
    """Route a command to its webhook, or reject it if the table is unknown.

    Unconfigured tables get a single private rejection and never reach the
    network.

    Returns:
        The reported outcome, or None if the command was rejected.
    """
    try:
        route = router.route(request.table)
    except NotConfiguredError as e:
        try:
            await channel.reject(e.message)
        except ReplyChannelError as err:
            logger.error("Could not send rejection for table '%s': %s", request.table, err)
        return None

    return await orchestrator.run(request, route, channel)
