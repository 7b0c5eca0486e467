"""Compensating writes for multi-record operations.

PocketBase has no transaction spanning separate API calls, so submission
intake and approval fan-out record an undo action for every write they make.
If a later write fails, the undo actions run in reverse order and a
FanOutError is raised describing the failed step.

Usage:
    async with CompensatingWrites("approving submission abc") as tx:
        tx.begin("creating camp for 2025-06-01")
        camp_id = await camps.create(...)
        tx.record(f"camp {camp_id}", partial(camps.delete, camp_id))
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from .errors import FanOutError, HoopCampsError, StoreError

logger = logging.getLogger(__name__)


@dataclass
class _Undo:
    description: str
    action: Callable[[], Awaitable[Any]]


class CompensatingWrites:
    """Async context manager that rolls back recorded writes on failure."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.current_step = "starting"
        self._undo: list[_Undo] = []

    def begin(self, step: str) -> None:
        """Name the write about to happen (used in the error on failure)."""
        self.current_step = step

    def record(self, description: str, undo: Callable[[], Awaitable[Any]]) -> None:
        """Register the undo action for a write that just succeeded."""
        self._undo.append(_Undo(description, undo))

    @property
    def recorded(self) -> list[str]:
        return [u.description for u in self._undo]

    async def compensate(self) -> list[str]:
        """Run undo actions newest first. Returns descriptions that could not be undone."""
        leftovers: list[str] = []
        while self._undo:
            undo = self._undo.pop()
            try:
                await undo.action()
                logger.info(f"Compensated {undo.description} ({self.operation})")
            except Exception as e:
                logger.error(f"Could not compensate {undo.description} ({self.operation}): {e}")
                leftovers.append(undo.description)
        return leftovers

    async def __aenter__(self) -> CompensatingWrites:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc is None:
            self._undo.clear()
            return False

        logger.warning(f"{self.operation} failed while {self.current_step}: {exc}")
        leftovers = await self.compensate()

        # Business errors raised mid-way keep their own type once the writes are undone
        if isinstance(exc, FanOutError):
            return False
        if isinstance(exc, HoopCampsError) and not isinstance(exc, StoreError):
            return False
        if not isinstance(exc, Exception):
            return False

        raise FanOutError(self.current_step, exc, compensated=not leftovers, leftovers=leftovers) from exc
