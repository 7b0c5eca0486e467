"""Shared helpers for PocketBase repositories.

The PocketBase SDK is synchronous; repositories run its calls in a worker
thread and translate ClientResponseError into StoreError so callers only
deal with HoopCamps errors."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from pocketbase.client import ClientResponseError  # type: ignore[attr-defined]

from ..errors import NotFoundError, StoreError
from ..logging_config import TRACE

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_store(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking PocketBase SDK call in a thread and normalize its errors."""
    if "query_params" in kwargs:
        logger.log(TRACE, f"{getattr(fn, '__name__', 'call')} query_params={kwargs['query_params']}")
    try:
        return await asyncio.to_thread(fn, *args, **kwargs)
    except ClientResponseError as e:
        status = getattr(e, "status", None)
        data = getattr(e, "data", None)
        message = data.get("message") if isinstance(data, dict) and data.get("message") else str(e)
        if status == 404:
            raise NotFoundError(message) from e
        raise StoreError(message, status=status, data=data) from e


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK record or a plain dict."""
    if isinstance(record, dict):
        return record.get(name, default)
    value = getattr(record, name, default)
    return default if value is None else value


def get_expanded(record: Any, name: str) -> Any:
    """Return an expanded relation, or None when the relation was not expanded."""
    expand = get_field(record, "expand") or {}
    if isinstance(expand, dict):
        return expand.get(name)
    return getattr(expand, name, None)


def quote(value: str) -> str:
    """Quote a string for use inside a PocketBase filter expression."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def any_of(field: str, values: list[str]) -> str:
    """Build `(field = "a" || field = "b")` for set membership."""
    return "(" + " || ".join(f"{field} = {quote(v)}" for v in values) + ")"


def to_date(value: Any) -> date | None:
    """PocketBase stores dates as `2025-06-01 00:00:00.000Z`; keep only the day."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).replace("T", " ").split(" ")[0])


def to_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip().replace(" ", "T").replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unparseable datetime from store: {value}")
        return None


def to_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    return Decimal(str(value))


def money(value: Decimal | None) -> float | None:
    """Number fields in PocketBase are floats."""
    return None if value is None else float(value)
