"""In-memory registry: fixed set of instances, mutable between calls."""
from __future__ import annotations

from typing import Any, Iterable

from eureka_cli.discovery.protocol import InstanceRecord


def static_registry(instances: Iterable[InstanceRecord] = ()) -> StaticRegistry:
    """Out-of-the-box registry for offline use and tests."""
    return StaticRegistry(instances)


class StaticRegistry:
    """
    Registry held in memory. App names match case-insensitively, like Eureka.
    Every lookup is recorded in .calls as (method, *args).
    """

    def __init__(self, instances: Iterable[InstanceRecord] = ()) -> None:
        self._instances: list[InstanceRecord] = list(instances)
        self.calls: list[tuple[Any, ...]] = []

    async def __aenter__(self) -> StaticRegistry:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    def put(self, instance: InstanceRecord) -> None:
        """Add the instance, replacing any record with the same app and id."""
        self.remove(instance.app_name, instance.id)
        self._instances.append(instance)

    def remove(self, app_name: str, instance_id: str) -> None:
        self._instances = [
            i for i in self._instances
            if not (_same_app(i.app_name, app_name) and i.id == instance_id)
        ]

    async def list_all(self) -> list[InstanceRecord]:
        self.calls.append(("list_all",))
        return list(self._instances)

    async def find_by_id(self, instance_id: str) -> list[InstanceRecord]:
        self.calls.append(("find_by_id", instance_id))
        return [i for i in self._instances if i.id == instance_id]

    async def find_by_app(self, app_name: str) -> list[InstanceRecord]:
        self.calls.append(("find_by_app", app_name))
        return [i for i in self._instances if _same_app(i.app_name, app_name)]

    async def find_by_app_and_id(self, app_name: str, instance_id: str) -> list[InstanceRecord]:
        self.calls.append(("find_by_app_and_id", app_name, instance_id))
        return [
            i for i in self._instances
            if _same_app(i.app_name, app_name) and i.id == instance_id
        ]


def _same_app(a: str, b: str) -> bool:
    return a.upper() == b.upper()
