"""Registry connection settings: environment first, explicit overrides on top."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Callable

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8761
DEFAULT_REQUEST_TIMEOUT = 5.0

ENV_PREFIX = "EUREKA_SERVER_"


class Config:
    """Helpers for reading settings from the process environment."""

    @classmethod
    def load_from_env(cls, prefix: str, **defaults: Any) -> dict[str, Any]:
        """
        Variables under prefix, prefix stripped and lower-cased, laid over defaults.
        Empty values count as unset.
        """
        found = {
            key[len(prefix):].lower(): value
            for key, value in os.environ.items()
            if key.startswith(prefix) and value
        }
        return {**defaults, **found}


_COERCE: dict[str, Callable[[str], Any]] = {
    "port": int,
    "request_timeout": float,
}


@dataclass(frozen=True)
class RegistryConfig:
    """Where the registry lives and how long a single request may take."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}/eureka"

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> RegistryConfig:
        """
        Env vars: EUREKA_SERVER_HOST, EUREKA_SERVER_PORT, EUREKA_SERVER_REQUEST_TIMEOUT.
        Overrides that are not None (CLI options) win over the environment.
        Raises ValueError when a variable does not parse.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for name, raw in Config.load_from_env(prefix).items():
            if name not in known:
                continue
            coerce = _COERCE.get(name, str)
            try:
                values[name] = coerce(raw)
            except ValueError:
                raise ValueError(f"{prefix}{name.upper()}={raw!r} is not a valid {coerce.__name__}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
