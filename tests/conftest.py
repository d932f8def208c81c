"""Shared pytest fixtures and configuration for pytest."""

from collections.abc import Callable

import httpx
import pytest

from hookbridge.core.errors import ReplyChannelError
from hookbridge.core.types import CommandRequest, Requester, StatusMessage, TableRoute

WEBHOOK_URL = "https://automation.example.com/webhook/rgl-seasons"


class RecordingChannel:
    """ReplyChannel that records every call in order.

    Attributes:
        calls: ("defer", None), ("show", StatusMessage) or ("reject", text) tuples.
        fail_on: Names of calls that should raise ReplyChannelError.
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, object]] = []
        self.fail_on = fail_on or set()

    def _record(self, name: str, value: object) -> None:
        self.calls.append((name, value))
        if name in self.fail_on:
            raise ReplyChannelError(f"{name} failed")

    async def defer(self) -> None:
        self._record("defer", None)

    async def show(self, message: StatusMessage) -> None:
        self._record("show", message)

    async def reject(self, text: str) -> None:
        self._record("reject", text)

    @property
    def shown(self) -> list[StatusMessage]:
        return [m for name, m in self.calls if name == "show"]  # type: ignore[misc]

    @property
    def pending(self) -> list[StatusMessage]:
        return [m for m in self.shown if not m.is_terminal]

    @property
    def terminal(self) -> list[StatusMessage]:
        return [m for m in self.shown if m.is_terminal]

    @property
    def rejections(self) -> list[str]:
        return [t for name, t in self.calls if name == "reject"]  # type: ignore[misc]


class SizeLimitedChannel(RecordingChannel):
    """RecordingChannel that rejects statuses whose body is over a size limit.

    Stands in for a platform that refuses oversized messages. Rejected sends
    are still recorded.
    """

    def __init__(self, max_body: int) -> None:
        super().__init__()
        self.max_body = max_body

    async def show(self, message: StatusMessage) -> None:
        self.calls.append(("show", message))
        if len(message.body) > self.max_body:
            raise ReplyChannelError("message body too long")


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def requester() -> Requester:
    return Requester.from_parts(id=1234567890, username="scout", global_name="Scout")


@pytest.fixture
def update_request(requester: Requester) -> CommandRequest:
    return CommandRequest(table="tf2_rgl_seasons", record_id=42, requester=requester)


@pytest.fixture
def route() -> TableRoute:
    return TableRoute(table_key="tf2_rgl_seasons", endpoint_url=WEBHOOK_URL)


@pytest.fixture
def mock_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Factory for httpx.AsyncClient instances backed by a MockTransport handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def make_channel() -> Callable[..., RecordingChannel]:
    """Factory for RecordingChannel instances with failure injection."""
    return RecordingChannel


@pytest.fixture
def size_limited_channel() -> SizeLimitedChannel:
    """Channel that rejects bodies over 4096 characters."""
    return SizeLimitedChannel(max_body=4096)
