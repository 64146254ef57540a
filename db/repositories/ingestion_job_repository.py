"""
Ingestion job persistence.

Status changes go through ``_transition`` so ``JOB_TRANSITIONS`` is the only
place the lifecycle is defined. Callers own the commit.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from db.models.ingestion_job import JOB_TRANSITIONS, IngestionJob, IngestionJobStatus
from db.repositories.errors import JobStateError


class IngestionJobRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_job(self, *, file_id: uuid.UUID, mapping_ids: Sequence[uuid.UUID]) -> IngestionJob:
        job = IngestionJob(
            status=IngestionJobStatus.QUEUED,
            file_id=file_id,
            # JSON column; ids kept as strings in request order.
            mapping_ids=[str(mapping_id) for mapping_id in mapping_ids],
        )
        self._session.add(job)
        self._session.flush()
        self._session.refresh(job)
        return job

    def get_job(self, job_id: uuid.UUID) -> IngestionJob | None:
        return self._session.get(IngestionJob, job_id)

    def list_jobs(self, *, limit: int = 100, status: str | None = None) -> list[IngestionJob]:
        """Newest first, optionally filtered by status."""
        stmt = select(IngestionJob).order_by(IngestionJob.created_at.desc(), IngestionJob.id)
        if status:
            stmt = stmt.where(IngestionJob.status == status)
        return list(self._session.scalars(stmt.limit(max(1, limit))))

    def mark_active(self, *, job_id: uuid.UUID) -> IngestionJob | None:
        return self._transition(job_id, IngestionJobStatus.ACTIVE, started_at=_now())

    def mark_completed(
        self,
        *,
        job_id: uuid.UUID,
        result_payload: dict[str, Any] | None = None,
    ) -> IngestionJob | None:
        return self._transition(
            job_id,
            IngestionJobStatus.COMPLETED,
            completed_at=_now(),
            result_payload=result_payload,
        )

    def mark_failed(
        self,
        *,
        job_id: uuid.UUID,
        error_message: str,
        result_payload: dict[str, Any] | None = None,
    ) -> IngestionJob | None:
        changes: dict[str, Any] = {"completed_at": _now(), "error_message": error_message}
        if result_payload is not None:
            changes["result_payload"] = result_payload
        return self._transition(job_id, IngestionJobStatus.FAILED, **changes)

    def _transition(self, job_id: uuid.UUID, target: str, **changes: Any) -> IngestionJob | None:
        """
        Move a job to ``target`` and apply ``changes``.

        Returns None for an unknown job; raises JobStateError when the current
        status does not allow ``target``.
        """

        job = self.get_job(job_id)
        if job is None:
            return None
        if target not in JOB_TRANSITIONS.get(job.status, frozenset()):
            raise JobStateError(job_id=job_id, current=job.status, target=target)

        job.status = target
        for attribute, value in changes.items():
            setattr(job, attribute, value)
        self._session.flush()
        return job


def _now() -> datetime:
    return datetime.now(timezone.utc)
