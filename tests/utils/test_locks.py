"""Tests for KeyedLock"""
import asyncio

import pytest

from src.utils.locks import KeyedLock


@pytest.mark.asyncio
async def test_same_key_is_serialized():
    lock = KeyedLock()
    events = []

    async def worker(name):
        async with lock.hold("product-1"):
            events.append(f"{name}-start")
            await asyncio.sleep(0.01)
            events.append(f"{name}-end")

    await asyncio.gather(worker("a"), worker("b"))

    assert events in (
        ["a-start", "a-end", "b-start", "b-end"],
        ["b-start", "b-end", "a-start", "a-end"],
    )


@pytest.mark.asyncio
async def test_different_keys_run_concurrently():
    lock = KeyedLock()
    inside = asyncio.Event()

    async def holder():
        async with lock.hold("a"):
            await asyncio.wait_for(inside.wait(), timeout=1)

    async def other():
        async with lock.hold("b"):
            inside.set()

    await asyncio.gather(holder(), other())


@pytest.mark.asyncio
async def test_entries_are_released():
    lock = KeyedLock()
    async with lock.hold("a"):
        assert len(lock) == 1
    assert len(lock) == 0


@pytest.mark.asyncio
async def test_released_after_error():
    lock = KeyedLock()
    with pytest.raises(RuntimeError):
        async with lock.hold("a"):
            raise RuntimeError("boom")
    assert len(lock) == 0
