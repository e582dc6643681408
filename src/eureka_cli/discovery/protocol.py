"""Registry protocol: look up instances by app name and/or instance id."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

UP = "UP"


@dataclass(frozen=True)
class InstanceRecord:
    """One registered instance as the registry reported it at query time."""

    app_name: str
    id: str
    status: str
    ip_address: str
    port: int

    @property
    def is_up(self) -> bool:
        return self.status == UP

    @property
    def url(self) -> str:
        return f"http://{self.ip_address}:{self.port}"

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> InstanceRecord:
        """
        Build from a registry instance object.
        Port comes either as {"$": 8080, "@enabled": "true"} or as a bare value.
        """
        port = data.get("port", 0)
        if isinstance(port, dict):
            port = port.get("$", 0)
        return cls(
            app_name=str(data.get("app", "")),
            id=str(data.get("instanceId", "")),
            status=str(data.get("status", "")),
            ip_address=str(data.get("ipAddr", "")),
            port=int(port or 0),
        )


@runtime_checkable
class RegistryClient(Protocol):
    """
    How to query the registry. Each call is one request/response exchange;
    no match is an empty list, transport failures raise RegistryError.
    """

    async def list_all(self) -> list[InstanceRecord]:
        ...

    async def find_by_id(self, instance_id: str) -> list[InstanceRecord]:
        """Global lookup, not scoped to an application."""
        ...

    async def find_by_app(self, app_name: str) -> list[InstanceRecord]:
        ...

    async def find_by_app_and_id(self, app_name: str, instance_id: str) -> list[InstanceRecord]:
        ...


@runtime_checkable
class RegistrySession(RegistryClient, Protocol):
    """RegistryClient that owns resources for one command: `async with` it."""

    async def __aenter__(self) -> RegistrySession:
        ...

    async def __aexit__(self, *exc_info: Any) -> None:
        ...
