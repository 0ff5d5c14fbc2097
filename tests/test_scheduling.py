from __future__ import annotations

import asyncio

import pytest

from watchroom.infrastructure.scheduling import PeriodicTask


@pytest.mark.asyncio
async def test_periodic_task_runs_until_shutdown():
    runs = 0

    async def tick():
        nonlocal runs
        runs += 1

    task = PeriodicTask("tick", 0.01, tick)
    task.start()
    assert task.running
    await asyncio.sleep(0.1)
    await task.shutdown()
    assert not task.running
    seen = runs
    assert seen >= 2
    await asyncio.sleep(0.05)
    assert runs == seen


@pytest.mark.asyncio
async def test_failing_run_does_not_stop_schedule():
    calls = 0

    async def flaky():
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("first run fails")

    task = PeriodicTask("flaky", 0.01, flaky)
    task.start()
    await asyncio.sleep(0.1)
    await task.shutdown()
    assert calls >= 2


@pytest.mark.asyncio
async def test_start_is_idempotent_and_shutdown_safe():
    async def noop():
        return None

    task = PeriodicTask("noop", 60, noop)
    await task.shutdown()
    task.start()
    first = task._task
    task.start()
    assert task._task is first
    await task.shutdown()


def test_interval_must_be_positive():
    async def noop():
        return None

    with pytest.raises(ValueError):
        PeriodicTask("bad", 0, noop)


def test_module_docstring_is_set():
    from watchroom.infrastructure import scheduling

    assert scheduling.__doc__ and "PeriodicTask" in scheduling.__doc__
