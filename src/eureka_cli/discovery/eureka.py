"""
EurekaClient — RegistryClient over the Eureka REST API (HTTP + JSON).
One httpx.AsyncClient per EurekaClient; use as an async context manager.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator
from urllib.parse import quote

import httpx
import structlog

from eureka_cli.core.config import RegistryConfig
from eureka_cli.discovery.errors import RegistryResponseError, RegistryUnavailableError
from eureka_cli.discovery.protocol import InstanceRecord

logger = structlog.get_logger(__name__)


class EurekaClient:
    """
    Endpoints:
        GET /apps                  all instances
        GET /apps/{app}            instances of one application
        GET /apps/{app}/{id}       one instance of one application
        GET /instances/{id}        one instance, any application
    404 means "no such instance" and maps to an empty list.
    """

    def __init__(
        self,
        config: RegistryConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or RegistryConfig()
        self._http = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers={"Accept": "application/json"},
            timeout=self._config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> EurekaClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_all(self) -> list[InstanceRecord]:
        path = "/apps"
        data = await self._get(path)
        with _payload_errors(path):
            apps = _as_list(data.get("applications", {}).get("application"))
            return [record for app in apps for record in _records(app.get("instance"))]

    async def find_by_id(self, instance_id: str) -> list[InstanceRecord]:
        path = f"/instances/{_segment(instance_id)}"
        data = await self._get(path)
        with _payload_errors(path):
            return _records(data.get("instance"))

    async def find_by_app(self, app_name: str) -> list[InstanceRecord]:
        path = f"/apps/{_segment(app_name)}"
        data = await self._get(path)
        with _payload_errors(path):
            return _records(data.get("application", {}).get("instance"))

    async def find_by_app_and_id(self, app_name: str, instance_id: str) -> list[InstanceRecord]:
        path = f"/apps/{_segment(app_name)}/{_segment(instance_id)}"
        data = await self._get(path)
        with _payload_errors(path):
            return _records(data.get("instance"))

    async def _get(self, path: str) -> dict[str, Any]:
        """GET path relative to base_url. Returns {} on 404."""
        logger.debug("registry_request", url=self._config.base_url + path)
        try:
            response = await self._http.get(path)
        except httpx.TimeoutException as e:
            raise RegistryUnavailableError(f"GET {path} timed out") from e
        except httpx.TransportError as e:
            raise RegistryUnavailableError(f"GET {path} failed: {e}") from e

        if response.status_code == 404:
            logger.debug("registry_not_found", path=path)
            return {}
        if response.is_error:
            raise RegistryResponseError(
                f"GET {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            data = response.json()
        except ValueError as e:
            raise RegistryResponseError(
                f"GET {path} returned a body that is not JSON",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise RegistryResponseError(
                f"GET {path} returned {type(data).__name__}, expected an object",
                status_code=response.status_code,
            )
        return data


def _segment(value: str) -> str:
    return quote(value, safe="")


def _as_list(value: Any) -> list[Any]:
    """Eureka collapses one-element lists into a bare object; undo that."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _records(value: Any) -> list[InstanceRecord]:
    return [InstanceRecord.from_payload(item) for item in _as_list(value)]


@contextmanager
def _payload_errors(path: str) -> Iterator[None]:
    try:
        yield
    except (AttributeError, TypeError, ValueError) as e:
        raise RegistryResponseError(f"GET {path} returned an unexpected payload: {e}") from e
