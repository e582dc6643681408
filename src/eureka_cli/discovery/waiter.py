"""
Waiter — block until one instance reports UP or a deadline passes.

The poll loop runs as a single asyncio task raced against the deadline;
whichever finishes first decides the outcome and the loop is cancelled
before wait() returns.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Union

import structlog

from eureka_cli.discovery.errors import RegistryError
from eureka_cli.discovery.protocol import InstanceRecord
from eureka_cli.discovery.resolver import Resolver

logger = structlog.get_logger(__name__)

DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class Found:
    """Instance is UP. elapsed is None when no polling took place (zero timeout)."""

    instance: InstanceRecord
    elapsed: float | None = None


@dataclass(frozen=True)
class TimedOut:
    """Deadline passed while polling."""

    timeout: float


@dataclass(frozen=True)
class NotFoundImmediate:
    """Zero timeout: the single lookup found no UP instance."""


WaitOutcome = Union[Found, TimedOut, NotFoundImmediate]


class Waiter:
    """
    Polls the exact (app, id) lookup: immediately, then poll_interval seconds
    after each completed query. Queries never overlap.

    Registry errors inside the loop count as "not UP yet" and polling goes on;
    only the deadline stops it. The zero-timeout lookup lets them propagate.
    """

    def __init__(self, resolver: Resolver, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        self._resolver = resolver
        self._poll_interval = poll_interval

    async def wait(self, app_name: str, instance_id: str, timeout: float) -> WaitOutcome:
        if not app_name:
            raise ValueError("app_name is required")
        if not instance_id:
            raise ValueError("instance_id is required")
        if timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {timeout}")

        if timeout == 0:
            instance = await self._resolver.find(app_name, instance_id)
            if instance is not None and instance.is_up:
                return Found(instance)
            return NotFoundImmediate()

        log = logger.bind(app_name=app_name, instance_id=instance_id)
        start = time.monotonic()
        poll = asyncio.ensure_future(self._poll(app_name, instance_id))
        try:
            done, _ = await asyncio.wait({poll}, timeout=timeout)
        finally:
            if not poll.done():
                # Waits without re-raising the poll task's own CancelledError,
                # so a cancellation of wait() itself still propagates.
                poll.cancel()
                await asyncio.wait({poll})

        if poll in done:
            elapsed = time.monotonic() - start
            log.info("instance_up", elapsed=round(elapsed, 3))
            return Found(poll.result(), elapsed)

        log.info("wait_timed_out", timeout=timeout)
        return TimedOut(timeout)

    async def _poll(self, app_name: str, instance_id: str) -> InstanceRecord:
        attempt = 0
        while True:
            attempt += 1
            instance = await self._check(app_name, instance_id, attempt)
            if instance is not None:
                return instance
            await asyncio.sleep(self._poll_interval)

    async def _check(self, app_name: str, instance_id: str, attempt: int) -> InstanceRecord | None:
        """One lookup; the instance if it is UP, else None."""
        try:
            instance = await self._resolver.find(app_name, instance_id)
        except RegistryError as e:
            logger.warning("poll_failed", attempt=attempt, error=str(e))
            return None
        if instance is None:
            logger.debug("poll_not_found", attempt=attempt)
            return None
        if not instance.is_up:
            logger.debug("poll_not_up", attempt=attempt, status=instance.status)
            return None
        return instance
