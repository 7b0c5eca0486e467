"""Tests for compensating writes across multi-record operations."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from hoopcamps.compensation import CompensatingWrites
from hoopcamps.errors import FanOutError, StoreError, ValidationFailed


@pytest.mark.asyncio
async def test_success_runs_no_undo():
    undo = AsyncMock()

    async with CompensatingWrites("test") as tx:
        tx.begin("write one")
        tx.record("one", undo)

    undo.assert_not_awaited()


@pytest.mark.asyncio
async def test_failure_undoes_in_reverse_order():
    calls: list[str] = []

    def undo(name: str) -> AsyncMock:
        return AsyncMock(side_effect=lambda: calls.append(name))

    with pytest.raises(FanOutError) as exc_info:
        async with CompensatingWrites("saving camp") as tx:
            tx.begin("first")
            tx.record("first", undo("first"))
            tx.begin("second")
            tx.record("second", undo("second"))
            tx.begin("third")
            raise StoreError("boom", status=400)

    assert calls == ["second", "first"]
    err = exc_info.value
    assert err.step == "third"
    assert err.compensated is True
    assert err.status == 400
    assert "Failed while third" in str(err)


@pytest.mark.asyncio
async def test_failed_undo_is_reported_as_leftover():
    with pytest.raises(FanOutError) as exc_info:
        async with CompensatingWrites("saving camp") as tx:
            tx.record("row 1", AsyncMock(side_effect=RuntimeError("gone")))
            tx.record("row 2", AsyncMock())
            tx.begin("row 3")
            raise RuntimeError("network")

    assert exc_info.value.compensated is False
    assert exc_info.value.leftovers == ["row 1"]


@pytest.mark.asyncio
async def test_business_errors_keep_their_type_after_undo():
    undo = AsyncMock()

    with pytest.raises(ValidationFailed):
        async with CompensatingWrites("saving camp") as tx:
            tx.record("row", undo)
            raise ValidationFailed("nope")

    undo.assert_awaited_once()


@pytest.mark.asyncio
async def test_recorded_descriptions():
    async with CompensatingWrites("test") as tx:
        tx.record("a", AsyncMock())
        tx.record("b", AsyncMock())
        assert tx.recorded == ["a", "b"]
    assert tx.recorded == []
