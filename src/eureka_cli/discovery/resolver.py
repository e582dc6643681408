"""Resolver — picks the registry lookup that matches the given filters."""
from __future__ import annotations

from dataclasses import dataclass

import structlog

from eureka_cli.discovery.protocol import InstanceRecord, RegistryClient

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QueryFilter:
    """Optional app name and instance id. None and "" both mean "not given"."""

    app_name: str | None = None
    instance_id: str | None = None


class Resolver:
    """
    Maps a QueryFilter to exactly one registry query; first match wins:

        neither given  -> list_all
        id only        -> find_by_id (any application)
        app only       -> find_by_app
        both           -> find_by_app_and_id (both must match the same instance)

    No client-side filtering: each branch is a different registry endpoint.
    An empty result is a normal outcome, not an error.
    """

    def __init__(self, client: RegistryClient) -> None:
        self._client = client

    async def resolve(self, query: QueryFilter) -> list[InstanceRecord]:
        app_name = query.app_name or ""
        instance_id = query.instance_id or ""

        if not app_name and not instance_id:
            instances = await self._client.list_all()
        elif not app_name:
            instances = await self._client.find_by_id(instance_id)
        elif not instance_id:
            instances = await self._client.find_by_app(app_name)
        else:
            instances = await self._client.find_by_app_and_id(app_name, instance_id)

        logger.debug("resolved", app_name=app_name, instance_id=instance_id, count=len(instances))
        return instances

    async def find(self, app_name: str, instance_id: str) -> InstanceRecord | None:
        """Exact (app, id) lookup; first record or None."""
        instances = await self.resolve(QueryFilter(app_name, instance_id))
        return instances[0] if instances else None
