"""Async HTTP client for per-table update webhooks."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from hookbridge.core.errors import WebhookError
from hookbridge.core.types import CommandRequest

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 840.0

# Error bodies are truncated before decoding to bound memory on huge responses
MAX_ERROR_BODY_SIZE: int = 10 * 1024  # 10 KB


def build_payload(request: CommandRequest) -> dict[str, Any]:
    """Build the JSON body sent to a webhook for an update request."""
    user = request.requester
    return {
        "table": request.table,
        "id": request.record_id,
        "user": {
            "id": user.id,
            "username": user.username,
            "tag": user.tag,
            "globalName": user.global_name,
        },
    }


def _decode_body(response: httpx.Response, limit: int | None = None) -> Any:
    """Decode a response body as JSON, falling back to text.

    Returns None for an empty body.
    """
    content = response.content if limit is None else response.content[:limit]
    text = content.decode(errors="replace").strip()
    if not text:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class WebhookClient:
    """Posts update requests to webhooks, one call per request, no retries.

    Usage:
        async with WebhookClient(timeout=840.0) as webhook:
            body = await webhook.post(route.endpoint_url, build_payload(request))

    The underlying httpx.AsyncClient is shared by all concurrent commands.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds.
            client: Pre-built httpx client (e.g. with a mock transport). The
                caller keeps ownership of a client passed in here.
        """
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> WebhookClient:
        """Enter async context, create httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context, close httpx client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the owned HTTP client. Safe to call multiple times."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def post(self, url: str, payload: dict[str, Any]) -> Any:
        """POST a JSON payload and return the decoded response body.

        Args:
            url: Webhook endpoint URL.
            payload: JSON-serializable request body.

        Returns:
            Parsed JSON body, raw text for non-JSON bodies, or None if empty.

        Raises:
            WebhookError: On a non-2xx status (with the decoded error body),
                connection failure, timeout, or other HTTP error.
        """
        if self._client is None:
            raise WebhookError("Webhook client not initialized. Use 'async with' context manager.")

        try:
            response = await self._client.post(url, json=payload)
        except httpx.TimeoutException as e:
            logger.warning("Webhook request timed out after %ss", self._timeout)
            raise WebhookError(f"Webhook request timed out: {e}") from e
        except httpx.ConnectError as e:
            logger.warning("Connection to webhook failed: %s", e)
            raise WebhookError(f"Failed to connect to webhook: {e}") from e
        except httpx.HTTPError as e:
            raise WebhookError(f"HTTP error occurred: {e}") from e

        if not response.is_success:
            raise WebhookError(
                f"Webhook request failed with status {response.status_code}",
                status_code=response.status_code,
                body=_decode_body(response, limit=MAX_ERROR_BODY_SIZE),
            )

        return _decode_body(response)
