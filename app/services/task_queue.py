"""
app/services/task_queue.py

Executors that run ingestion jobs off the request path.

``SchedulerTaskQueue`` is the long-lived worker pool started with the app;
``FastAPIBackgroundTaskExecutor`` defers work until the response is sent.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from typing import Any, Protocol

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import BackgroundTasks

logger = logging.getLogger(__name__)


class IngestionTaskExecutor(Protocol):
    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        ...


class TaskQueueUnavailableError(RuntimeError):
    """Raised when work is submitted to a queue that is not running."""


class FastAPIBackgroundTaskExecutor:
    def __init__(self, background_tasks: BackgroundTasks) -> None:
        self._background_tasks = background_tasks

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        self._background_tasks.add_task(task, *args, **kwargs)


class SchedulerTaskQueue:
    """
    One-shot jobs on an APScheduler ``BackgroundScheduler``.

    The thread pool size caps how many jobs run at once; further jobs wait
    for a free slot and never expire while waiting.
    """

    def __init__(self, *, worker_count: int = 2) -> None:
        self._worker_count = max(1, worker_count)
        self._scheduler = BackgroundScheduler(
            timezone="UTC",
            executors={"default": ThreadPoolExecutor(max_workers=self._worker_count)},
            job_defaults={"misfire_grace_time": None, "coalesce": False},
        )

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def worker_count(self) -> int:
        return self._worker_count

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.start()
        logger.info("Task queue started workers=%d", self._worker_count)

    def shutdown(self, *, wait: bool = True) -> None:
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=wait)
        logger.info("Task queue stopped")

    def submit(self, task: Callable[..., None], *args: Any, **kwargs: Any) -> None:
        if not self._scheduler.running:
            raise TaskQueueUnavailableError("Task queue is not running.")
        # No trigger: APScheduler runs the job once, as soon as a worker is free.
        self._scheduler.add_job(
            task,
            args=list(args),
            kwargs=kwargs,
            id=uuid.uuid4().hex,
            name=getattr(task, "__name__", "ingestion_task"),
        )
