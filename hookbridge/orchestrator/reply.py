"""Reply channel protocol and the single-use handle over it."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from hookbridge.core.errors import ReplyChannelError, ReplyStateError
from hookbridge.core.types import StatusMessage

logger = logging.getLogger(__name__)


@runtime_checkable
class ReplyChannel(Protocol):
    """Platform surface for replying to one command invocation.

    Implementations raise ReplyChannelError when the platform rejects a call.
    """

    async def defer(self) -> None:
        """Acknowledge the command so the platform does not time it out."""
        ...

    async def show(self, message: StatusMessage) -> None:
        """Set the reply to the given status (first call creates it)."""
        ...

    async def reject(self, text: str) -> None:
        """Answer with a private plain-text rejection instead of a status."""
        ...


class ReplyHandle:
    """Drives a ReplyChannel through exactly one pending and one terminal state.

    Each slot can be assigned once. The slot is taken before the channel is
    called, so a failed send still counts and cannot be retried into a
    duplicate message. ``finish`` does not require a successful ``begin``,
    which lets a command whose pending send failed still attempt its
    terminal reply.
    """

    def __init__(self, channel: ReplyChannel) -> None:
        self._channel = channel
        self._pending: StatusMessage | None = None
        self._terminal: StatusMessage | None = None

    @property
    def pending(self) -> StatusMessage | None:
        return self._pending

    @property
    def terminal(self) -> StatusMessage | None:
        return self._terminal

    @property
    def finished(self) -> bool:
        return self._terminal is not None

    async def begin(self, pending: StatusMessage) -> None:
        """Defer the interaction and show the pending status.

        Raises:
            ReplyStateError: If already begun or finished, or if the message
                is not a pending status.
            ReplyChannelError: If the platform rejects the deferral or send.
        """
        if pending.is_terminal:
            raise ReplyStateError("begin() requires a pending status message")
        if self._pending is not None or self._terminal is not None:
            raise ReplyStateError("Reply already started")
        self._pending = pending
        await self._channel.defer()
        await self._channel.show(pending)

    async def finish(
        self,
        terminal: StatusMessage,
        fallback: StatusMessage | None = None,
    ) -> None:
        """Show the terminal status.

        If the platform rejects ``terminal`` and a ``fallback`` is given, the
        fallback is sent once in its place. Only one of the two can reach the
        user, since the second send happens only after the first failed.

        Args:
            terminal: Final status to show.
            fallback: Status to show instead if ``terminal`` is rejected.

        Raises:
            ReplyStateError: If a terminal status was already assigned, or if
                either message is a pending status.
            ReplyChannelError: If the platform rejects the send (and the
                fallback, when one is given).
        """
        if not terminal.is_terminal or (fallback is not None and not fallback.is_terminal):
            raise ReplyStateError("finish() requires a terminal status message")
        if self._terminal is not None:
            raise ReplyStateError("Terminal status already sent")
        self._terminal = terminal
        try:
            await self._channel.show(terminal)
        except ReplyChannelError as e:
            if fallback is None:
                raise
            logger.warning("Terminal status rejected, sending fallback: %s", e)
            self._terminal = fallback
            await self._channel.show(fallback)
