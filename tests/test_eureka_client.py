"""EurekaClient against a mocked Eureka REST API."""
from __future__ import annotations

import httpx
import pytest

from eureka_cli.core import RegistryConfig
from eureka_cli.discovery import (
    EurekaClient,
    RegistryResponseError,
    RegistrySession,
    RegistryUnavailableError,
    static_registry,
)
from tests.factories import make_instance


def instance_json(app="ORDERS", instance_id="i-1", status="UP", ip="10.0.0.5", port=8080) -> dict:
    return {
        "instanceId": instance_id,
        "hostName": ip,
        "app": app,
        "ipAddr": ip,
        "status": status,
        "port": {"$": port, "@enabled": "true"},
        "securePort": {"$": 443, "@enabled": "false"},
    }


def client_for(routes: dict[str, httpx.Response], seen: list[httpx.Request] | None = None) -> EurekaClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return routes.get(request.url.path, httpx.Response(404))

    config = RegistryConfig(host="eureka.local", port=8761)
    return EurekaClient(config, transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_list_all_flattens_applications() -> None:
    payload = {
        "applications": {
            "versions__delta": "1",
            "application": [
                {"name": "ORDERS", "instance": [instance_json(), instance_json(instance_id="i-2", status="DOWN")]},
                # single instance collapsed into an object
                {"name": "BILLING", "instance": instance_json(app="BILLING", instance_id="b-1", port=9090)},
            ],
        }
    }
    async with client_for({"/eureka/apps": httpx.Response(200, json=payload)}) as client:
        instances = await client.list_all()

    assert instances == [
        make_instance(),
        make_instance(instance_id="i-2", status="DOWN"),
        make_instance(app_name="BILLING", instance_id="b-1", port=9090),
    ]


@pytest.mark.anyio
async def test_list_all_with_empty_registry() -> None:
    payload = {"applications": {"versions__delta": "1", "apps__hashcode": "", "application": []}}
    async with client_for({"/eureka/apps": httpx.Response(200, json=payload)}) as client:
        assert await client.list_all() == []


@pytest.mark.anyio
async def test_find_by_app() -> None:
    payload = {"application": {"name": "ORDERS", "instance": [instance_json(), instance_json(instance_id="i-2")]}}
    async with client_for({"/eureka/apps/ORDERS": httpx.Response(200, json=payload)}) as client:
        instances = await client.find_by_app("ORDERS")
    assert [i.id for i in instances] == ["i-1", "i-2"]


@pytest.mark.anyio
async def test_find_by_app_and_id() -> None:
    payload = {"instance": instance_json(status="STARTING")}
    async with client_for({"/eureka/apps/ORDERS/i-1": httpx.Response(200, json=payload)}) as client:
        instances = await client.find_by_app_and_id("ORDERS", "i-1")
    assert instances == [make_instance(status="STARTING")]


@pytest.mark.anyio
async def test_find_by_id_uses_global_instance_endpoint() -> None:
    payload = {"instance": instance_json()}
    async with client_for({"/eureka/instances/i-1": httpx.Response(200, json=payload)}) as client:
        instances = await client.find_by_id("i-1")
    assert instances == [make_instance()]


@pytest.mark.anyio
async def test_bare_port_value() -> None:
    data = instance_json()
    data["port"] = "8080"
    async with client_for({"/eureka/instances/i-1": httpx.Response(200, json={"instance": data})}) as client:
        instances = await client.find_by_id("i-1")
    assert instances[0].port == 8080


@pytest.mark.anyio
async def test_not_found_is_empty() -> None:
    async with client_for({}) as client:
        assert await client.find_by_app_and_id("ghost-app", "ghost-id") == []
        assert await client.find_by_app("ghost-app") == []
        assert await client.find_by_id("ghost-id") == []


@pytest.mark.anyio
async def test_requests_json() -> None:
    seen: list[httpx.Request] = []
    async with client_for({}, seen) as client:
        await client.find_by_id("i-1")
    assert seen[0].headers["accept"] == "application/json"
    assert str(seen[0].url) == "http://eureka.local:8761/eureka/instances/i-1"


@pytest.mark.anyio
async def test_server_error_raises() -> None:
    async with client_for({"/eureka/apps": httpx.Response(500)}) as client:
        with pytest.raises(RegistryResponseError) as exc_info:
            await client.list_all()
    assert exc_info.value.status_code == 500
    assert exc_info.value.code == "BAD_RESPONSE"


@pytest.mark.anyio
async def test_non_json_body_raises() -> None:
    body = httpx.Response(200, text="<applications/>", headers={"content-type": "application/xml"})
    async with client_for({"/eureka/apps": body}) as client:
        with pytest.raises(RegistryResponseError):
            await client.list_all()


@pytest.mark.anyio
async def test_unexpected_payload_raises() -> None:
    async with client_for({"/eureka/apps": httpx.Response(200, json={"applications": "nope"})}) as client:
        with pytest.raises(RegistryResponseError):
            await client.list_all()


@pytest.mark.anyio
@pytest.mark.parametrize("exc_type", [httpx.ConnectError, httpx.ReadTimeout])
async def test_transport_failure_raises_unavailable(exc_type) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    async with EurekaClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(RegistryUnavailableError) as exc_info:
            await client.list_all()
    assert exc_info.value.code == "REGISTRY_UNAVAILABLE"


@pytest.mark.anyio
async def test_clients_are_registry_sessions() -> None:
    async with EurekaClient() as client:
        assert isinstance(client, RegistrySession)
    assert isinstance(static_registry(), RegistrySession)
