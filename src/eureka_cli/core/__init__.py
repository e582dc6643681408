from eureka_cli.core.config import Config, RegistryConfig
from eureka_cli.core.log import configure_logging

__all__ = [
    "Config",
    "RegistryConfig",
    "configure_logging",
]
