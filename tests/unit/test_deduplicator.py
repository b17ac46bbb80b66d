"""Unit tests for in-flight request deduplication."""

import asyncio

import pytest

from throttle_debounce.services.deduplicator import RequestDeduplicator


@pytest.mark.asyncio
async def test_entry_removed_when_task_settles():
    dedup = RequestDeduplicator()
    release = asyncio.Event()

    async def work():
        await release.wait()
        return 5

    task = asyncio.ensure_future(work())
    dedup.track("k", task)
    assert "k" in dedup
    assert len(dedup) == 1
    assert dedup.get("k") is task

    release.set()
    assert await task == 5
    await asyncio.sleep(0)

    assert "k" not in dedup
    assert dedup.get("k") is None


@pytest.mark.asyncio
async def test_entry_removed_when_task_fails():
    dedup = RequestDeduplicator()

    async def work():
        raise ValueError("nope")

    task = asyncio.ensure_future(work())
    dedup.track("k", task)

    with pytest.raises(ValueError):
        await dedup.join("k")
    await asyncio.sleep(0)

    assert len(dedup) == 0


@pytest.mark.asyncio
async def test_stale_release_keeps_newer_entry():
    dedup = RequestDeduplicator()
    first_release = asyncio.Event()
    second_release = asyncio.Event()

    async def wait_for(event):
        await event.wait()

    first = asyncio.ensure_future(wait_for(first_release))
    second = asyncio.ensure_future(wait_for(second_release))
    dedup.track("k", first)
    dedup.track("k", second)

    first_release.set()
    await first
    await asyncio.sleep(0)
    assert dedup.get("k") is second

    second_release.set()
    await second
    await asyncio.sleep(0)
    assert "k" not in dedup


@pytest.mark.asyncio
async def test_join_shares_result_and_survives_caller_cancellation():
    dedup = RequestDeduplicator()
    release = asyncio.Event()

    async def work():
        await release.wait()
        return "shared"

    task = asyncio.ensure_future(work())
    dedup.track("k", task)

    impatient = asyncio.ensure_future(dedup.join("k"))
    patient = asyncio.ensure_future(dedup.join("k"))
    await asyncio.sleep(0)
    impatient.cancel()
    await asyncio.sleep(0)

    release.set()
    assert await patient == "shared"
    assert task.cancelled() is False
