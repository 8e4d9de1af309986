"""Tests for the periodic task primitive."""

import threading

from qbt_autopilot.scheduler import PeriodicTask


def test_run_cycle_swallows_exceptions() -> None:
    def boom() -> None:
        raise RuntimeError("boom")

    task = PeriodicTask("boom", 60, boom)

    assert task.run_cycle() is False
    assert task.run_cycle() is False
    assert task.cycles == 2


def test_task_re_arms_after_failures() -> None:
    calls = []
    done = threading.Event()

    def flaky() -> None:
        calls.append(1)
        if len(calls) >= 3:
            done.set()
        raise RuntimeError("transient")

    task = PeriodicTask("flaky", 0.01, flaky)
    task.start()
    try:
        assert done.wait(timeout=5)
    finally:
        task.stop(timeout=5)

    assert not task.is_running
    assert len(calls) >= 3


def test_trigger_runs_next_cycle_immediately() -> None:
    second = threading.Event()
    calls = []

    def work() -> None:
        calls.append(1)
        if len(calls) == 2:
            second.set()

    task = PeriodicTask("slow", 3600, work)
    task.start()
    try:
        task.trigger()
        assert second.wait(timeout=5)
    finally:
        task.stop(timeout=5)


def test_start_twice_is_noop() -> None:
    started = threading.Event()
    task = PeriodicTask("once", 3600, started.set)
    task.start()
    first_thread = task._thread
    task.start()
    try:
        assert task._thread is first_thread
        assert started.wait(timeout=5)
    finally:
        task.stop(timeout=5)
