"""Unit tests for ReplyHandle single-assignment behaviour."""

import pytest

from hookbridge.core.errors import ReplyChannelError, ReplyStateError
from hookbridge.core.types import ColorTag, StatusMessage
from hookbridge.orchestrator.reply import ReplyChannel, ReplyHandle

PENDING = StatusMessage("Processing", "submitted", ColorTag.PENDING)
DONE = StatusMessage("Done", "Added record 42", ColorTag.SUCCESS)


class TestReplyHandle:
    """Tests for ReplyHandle."""

    def test_recording_channel_satisfies_protocol(self, channel):
        """The test channel is a structural ReplyChannel."""
        assert isinstance(channel, ReplyChannel)

    @pytest.mark.asyncio
    async def test_begin_defers_then_shows(self, channel):
        """begin() defers the interaction before showing the pending status."""
        handle = ReplyHandle(channel)
        await handle.begin(PENDING)

        assert channel.calls == [("defer", None), ("show", PENDING)]
        assert handle.pending == PENDING
        assert not handle.finished

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, channel):
        """A normal run shows one pending and one terminal status."""
        handle = ReplyHandle(channel)
        await handle.begin(PENDING)
        await handle.finish(DONE)

        assert channel.pending == [PENDING]
        assert channel.terminal == [DONE]
        assert handle.terminal == DONE
        assert handle.finished

    @pytest.mark.asyncio
    async def test_second_finish_rejected(self, channel):
        """A second terminal status raises and is never sent."""
        handle = ReplyHandle(channel)
        await handle.begin(PENDING)
        await handle.finish(DONE)

        with pytest.raises(ReplyStateError):
            await handle.finish(StatusMessage("Again", "x", ColorTag.ERROR))

        assert channel.terminal == [DONE]

    @pytest.mark.asyncio
    async def test_second_begin_rejected(self, channel):
        """begin() can only be called once."""
        handle = ReplyHandle(channel)
        await handle.begin(PENDING)

        with pytest.raises(ReplyStateError):
            await handle.begin(PENDING)

        assert channel.pending == [PENDING]

    @pytest.mark.asyncio
    async def test_begin_after_finish_rejected(self, channel):
        """The pending state cannot follow the terminal state."""
        handle = ReplyHandle(channel)
        await handle.finish(DONE)

        with pytest.raises(ReplyStateError):
            await handle.begin(PENDING)

    @pytest.mark.asyncio
    async def test_wrong_colours_rejected(self, channel):
        """begin() needs a pending status and finish() a terminal one."""
        handle = ReplyHandle(channel)

        with pytest.raises(ReplyStateError):
            await handle.begin(DONE)
        with pytest.raises(ReplyStateError):
            await handle.finish(PENDING)

        assert channel.calls == []

    @pytest.mark.asyncio
    async def test_finish_allowed_after_failed_begin(self, make_channel):
        """A failed pending send still leaves room for the terminal status."""
        channel = make_channel(fail_on={"defer"})
        handle = ReplyHandle(channel)

        with pytest.raises(ReplyChannelError):
            await handle.begin(PENDING)
        await handle.finish(DONE)

        assert channel.terminal == [DONE]

    @pytest.mark.asyncio
    async def test_failed_finish_still_consumes_slot(self, make_channel):
        """A terminal send that fails cannot be retried into a duplicate."""
        channel = make_channel(fail_on={"show"})
        handle = ReplyHandle(channel)

        with pytest.raises(ReplyChannelError):
            await handle.finish(DONE)
        with pytest.raises(ReplyStateError):
            await handle.finish(DONE)

        assert handle.terminal == DONE

    @pytest.mark.asyncio
    async def test_fallback_sent_when_terminal_rejected(self, size_limited_channel):
        """A rejected terminal status is replaced by the fallback once."""
        too_long = StatusMessage("Done", "x" * 5000, ColorTag.SUCCESS)
        fallback = StatusMessage("Failed", "generic", ColorTag.ERROR)
        handle = ReplyHandle(size_limited_channel)

        await handle.begin(PENDING)
        await handle.finish(too_long, fallback=fallback)

        assert size_limited_channel.shown == [PENDING, too_long, fallback]
        assert handle.terminal is fallback

    @pytest.mark.asyncio
    async def test_fallback_unused_on_success(self, channel):
        """The fallback is never sent when the terminal status goes through."""
        handle = ReplyHandle(channel)

        await handle.finish(DONE, fallback=StatusMessage("Failed", "x", ColorTag.ERROR))

        assert channel.terminal == [DONE]

    @pytest.mark.asyncio
    async def test_failed_fallback_raises(self, make_channel):
        """If the fallback is rejected too, the channel error propagates."""
        channel = make_channel(fail_on={"show"})
        handle = ReplyHandle(channel)

        with pytest.raises(ReplyChannelError):
            await handle.finish(DONE, fallback=StatusMessage("Failed", "x", ColorTag.ERROR))

        assert len(channel.terminal) == 2

    @pytest.mark.asyncio
    async def test_pending_fallback_rejected(self, channel):
        """The fallback must itself be a terminal status."""
        handle = ReplyHandle(channel)

        with pytest.raises(ReplyStateError):
            await handle.finish(DONE, fallback=PENDING)

        assert channel.calls == []
