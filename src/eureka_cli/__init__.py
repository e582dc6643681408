"""
eureka-cli — command-line client for a Eureka service registry.
Query instances, print an instance URL, wait for an instance to come UP.
"""
from eureka_cli.core import RegistryConfig
from eureka_cli.discovery import (
    EurekaClient,
    InstanceRecord,
    QueryFilter,
    RegistryClient,
    RegistryError,
    Resolver,
    Waiter,
)

__all__ = [
    "EurekaClient",
    "InstanceRecord",
    "QueryFilter",
    "RegistryClient",
    "RegistryConfig",
    "RegistryError",
    "Resolver",
    "Waiter",
]
