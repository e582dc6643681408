"""Registry errors: the registry could not be reached or answered with garbage."""
from __future__ import annotations


class RegistryError(Exception):
    """Registry call failed. Absence of an instance is not an error (empty list)."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class RegistryUnavailableError(RegistryError):
    """Connection refused, DNS failure, request timeout."""

    def __init__(self, message: str) -> None:
        super().__init__("REGISTRY_UNAVAILABLE", message)


class RegistryResponseError(RegistryError):
    """Unexpected HTTP status or a body that is not a registry payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__("BAD_RESPONSE", message)
