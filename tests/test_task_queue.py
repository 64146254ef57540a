"""
tests/test_task_queue.py

SchedulerTaskQueue runs one-shot jobs on its worker pool.
"""

from __future__ import annotations

import threading

import pytest
from fastapi import BackgroundTasks

from app.services.task_queue import (
    FastAPIBackgroundTaskExecutor,
    SchedulerTaskQueue,
    TaskQueueUnavailableError,
)


def test_submitted_task_runs_once_with_arguments() -> None:
    queue = SchedulerTaskQueue(worker_count=1)
    done = threading.Event()
    seen: list[tuple[int, str]] = []

    def task(value: int, *, label: str) -> None:
        seen.append((value, label))
        done.set()

    queue.start()
    try:
        queue.submit(task, 42, label="job")
        assert done.wait(timeout=5)
    finally:
        queue.shutdown(wait=True)

    assert seen == [(42, "job")]
    assert not queue.running


def test_worker_slots_run_jobs_concurrently() -> None:
    queue = SchedulerTaskQueue(worker_count=2)
    barrier = threading.Barrier(2, timeout=5)
    finished = threading.Semaphore(0)

    def task() -> None:
        barrier.wait()
        finished.release()

    queue.start()
    try:
        queue.submit(task)
        queue.submit(task)
        assert finished.acquire(timeout=5)
        assert finished.acquire(timeout=5)
    finally:
        queue.shutdown(wait=True)


def test_submit_requires_running_queue() -> None:
    queue = SchedulerTaskQueue()

    with pytest.raises(TaskQueueUnavailableError):
        queue.submit(lambda: None)
    assert queue.worker_count == 2


def test_background_executor_defers_to_fastapi() -> None:
    background_tasks = BackgroundTasks()

    FastAPIBackgroundTaskExecutor(background_tasks).submit(print, "hello")

    assert len(background_tasks.tasks) == 1
