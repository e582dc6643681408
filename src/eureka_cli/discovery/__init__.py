from eureka_cli.discovery.errors import RegistryError, RegistryResponseError, RegistryUnavailableError
from eureka_cli.discovery.eureka import EurekaClient
from eureka_cli.discovery.protocol import InstanceRecord, RegistryClient, RegistrySession
from eureka_cli.discovery.resolver import QueryFilter, Resolver
from eureka_cli.discovery.static import StaticRegistry, static_registry
from eureka_cli.discovery.waiter import Found, NotFoundImmediate, TimedOut, WaitOutcome, Waiter

__all__ = [
    "EurekaClient",
    "Found",
    "InstanceRecord",
    "NotFoundImmediate",
    "QueryFilter",
    "RegistryClient",
    "RegistryError",
    "RegistryResponseError",
    "RegistrySession",
    "RegistryUnavailableError",
    "Resolver",
    "StaticRegistry",
    "TimedOut",
    "WaitOutcome",
    "Waiter",
    "static_registry",
]
