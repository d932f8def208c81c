"""Slash command catalog and registration.

The catalog is registered with a bulk-overwrite PUT, so registering the same
definitions twice leaves exactly the same commands in place.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from hookbridge.config.schema import TableConfig
from hookbridge.core.errors import RegistrationError

logger = logging.getLogger(__name__)

# Discord application command option types
OPTION_STRING = 3
OPTION_INTEGER = 4

UPDATE_COMMAND_NAME = "update"

# Error bodies from the registration endpoint are truncated before logging
MAX_ERROR_BODY_SIZE: int = 10 * 1024  # 10 KB


def build_update_command(tables: Mapping[str, TableConfig]) -> dict[str, Any]:
    """Build the ``update`` command definition.

    Args:
        tables: Configured tables; each becomes one choice of the ``table``
            option, in config order.

    Returns:
        Command definition in Discord's JSON shape.
    """
    return {
        "name": UPDATE_COMMAND_NAME,
        "description": "Update a database table with new data",
        "options": [
            {
                "name": "table",
                "type": OPTION_STRING,
                "description": "The table to update",
                "required": True,
                "choices": [
                    {"name": table.label, "value": key}
                    for key, table in tables.items()
                ],
            },
            {
                "name": "id",
                "type": OPTION_INTEGER,
                "description": "ID of the record to add or update",
                "required": True,
            },
        ],
    }


def build_catalog(tables: Mapping[str, TableConfig]) -> list[dict[str, Any]]:
    """Build the full command catalog for registration."""
    return [build_update_command(tables)]


class CommandRegistrar:
    """Registers the command catalog for an application.

    Usage:
        async with CommandRegistrar(api_base, app_id, token) as registrar:
            await registrar.register(build_catalog(config.tables))
    """

    def __init__(
        self,
        api_base: str,
        application_id: str,
        token: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = f"{api_base.rstrip('/')}/applications/{application_id}/commands"
        self._token = token
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> CommandRegistrar:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def register(self, catalog: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Replace the application's global commands with the catalog.

        Args:
            catalog: Command definitions.

        Returns:
            The registered commands as echoed by the platform.

        Raises:
            RegistrationError: On HTTP failure, a non-2xx response, or a
                reply that is not a JSON list.
        """
        if self._client is None:
            raise RegistrationError("Registrar not initialized. Use 'async with' context manager.")

        logger.info("Started refreshing application (/) commands.")
        try:
            response = await self._client.put(
                self._url,
                json=catalog,
                headers={"Authorization": f"Bot {self._token}"},
            )
        except httpx.HTTPError as e:
            raise RegistrationError(f"Command registration request failed: {e}") from e

        if response.status_code >= 400:
            detail = response.content[:MAX_ERROR_BODY_SIZE].decode(errors="replace")
            raise RegistrationError(
                f"Command registration failed with status {response.status_code}: {detail}"
            )

        if not response.content:
            registered: Any = []
        else:
            try:
                registered = response.json()
            except ValueError as e:
                raise RegistrationError(
                    f"Command registration returned invalid JSON: {e}"
                ) from e
        if not isinstance(registered, list):
            raise RegistrationError(
                f"Command registration returned {type(registered).__name__}, expected a list"
            )
        logger.info(
            "Successfully registered application commands: %s",
            [c.get("name") for c in registered if isinstance(c, dict)],
        )
        return registered
