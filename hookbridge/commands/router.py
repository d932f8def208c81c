"""Table routing for the ``update`` command.

The router is a pure lookup: the route table is injected once at
construction and frozen, so concurrent command tasks can share it without
locking.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from hookbridge.core.errors import NotConfiguredError
from hookbridge.core.types import TableRoute

logger = logging.getLogger(__name__)


class CommandRouter:
    """Maps table keys to their webhook routes.

    Usage:
        router = CommandRouter(build_routes(config))
        route = router.route("tf2_rgl_seasons")
    """

    def __init__(self, routes: Mapping[str, TableRoute]) -> None:
        for key, route in routes.items():
            if route.table_key != key:
                raise ValueError(
                    f"Route for '{key}' is keyed under '{route.table_key}'"
                )
        self._routes: Mapping[str, TableRoute] = MappingProxyType(dict(routes))

    @property
    def tables(self) -> tuple[str, ...]:
        """Configured table keys, sorted."""
        return tuple(sorted(self._routes))

    def route(self, table: str) -> TableRoute:
        """Look up the route for a table.

        Args:
            table: Table key from the command.

        Returns:
            The matching TableRoute.

        Raises:
            NotConfiguredError: If no route exists for the table (including
                the empty string).
        """
        route = self._routes.get(table) if table else None
        if route is None:
            logger.info("Rejected update for unconfigured table '%s'", table)
            raise NotConfiguredError(table)
        return route
