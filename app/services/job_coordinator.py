"""
app/services/job_coordinator.py

Queued CSV processing: job creation, background execution and status lookup.

One ``JobCoordinator`` is built per application and kept on ``app.state``.
Each worker run opens its own session from the session factory.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session, sessionmaker

from app.domain.ingestion import JobSnapshot
from app.repositories.ingestion_store import IngestionStore, SqlAlchemyIngestionStore
from app.services.ingestion_pipeline import IngestionPipeline
from app.services.task_queue import IngestionTaskExecutor
from db.models.ingestion_job import IngestionJob
from db.models.source_file import SourceFileStatus
from db.repositories.ingestion_job_repository import IngestionJobRepository

logger = logging.getLogger(__name__)

PipelineFactory = Callable[[IngestionStore], IngestionPipeline]


class JobLookupError(LookupError):
    """
    Raised when a job, its source file or its mappings cannot be found.
    """


class JobSchedulingError(RuntimeError):
    """
    Raised when the task executor refuses a job. The job is already marked failed.
    """

    def __init__(self, message: str, *, job_id: uuid.UUID) -> None:
        super().__init__(message)
        self.job_id = job_id


def to_snapshot(job: IngestionJob) -> JobSnapshot:
    return JobSnapshot(
        id=job.id,
        status=job.status,
        file_id=job.file_id,
        mapping_ids=[uuid.UUID(str(value)) for value in job.mapping_ids or []],
        created_at=job.created_at,
        started_at=job.started_at,
        completed_at=job.completed_at,
        result=job.result_payload,
        error=job.error_message,
    )


class JobCoordinator:
    """
    Coordinates job creation, background execution, and status persistence.
    """

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session],
        executor: IngestionTaskExecutor | None = None,
        pipeline_factory: PipelineFactory | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._executor = executor
        self._pipeline_factory = pipeline_factory or IngestionPipeline.from_settings

    def enqueue(
        self,
        file_id: uuid.UUID,
        mapping_ids: Sequence[uuid.UUID],
        *,
        executor: IngestionTaskExecutor | None = None,
    ) -> JobSnapshot:
        """
        Record a queued job and hand it to the executor; returns immediately.

        If the executor refuses the job it is marked failed and
        ``JobSchedulingError`` is raised with the executor error as its cause.
        """

        target = executor or self._executor
        if target is None:
            raise RuntimeError("No task executor configured for ingestion jobs.")

        with self._session_factory() as db:
            repository = IngestionJobRepository(db)
            job = repository.create_job(file_id=file_id, mapping_ids=mapping_ids)
            db.commit()
            snapshot = to_snapshot(job)

            try:
                target.submit(self._run_job, job.id)
            except Exception as exc:
                logger.exception("Failed to schedule ingestion job id=%s", job.id)
                repository.mark_failed(
                    job_id=job.id,
                    error_message="Failed to schedule CSV processing job.",
                )
                db.commit()
                raise JobSchedulingError(
                    f"Failed to schedule ingestion job {job.id}: {exc}",
                    job_id=job.id,
                ) from exc

        logger.info("Ingestion job queued id=%s file_id=%s", snapshot.id, file_id)
        return snapshot

    def status(self, job_id: uuid.UUID) -> JobSnapshot | None:
        with self._session_factory() as db:
            job = IngestionJobRepository(db).get_job(job_id)
            return to_snapshot(job) if job is not None else None

    def list_jobs(self, *, limit: int = 100, status: str | None = None) -> list[JobSnapshot]:
        with self._session_factory() as db:
            jobs = IngestionJobRepository(db).list_jobs(limit=limit, status=status)
            return [to_snapshot(job) for job in jobs]

    def _run_job(self, job_id: uuid.UUID) -> None:
        with self._session_factory() as db:
            repository = IngestionJobRepository(db)
            file_id: uuid.UUID | None = None
            try:
                active_job = repository.mark_active(job_id=job_id)
                if active_job is None:
                    raise JobLookupError(f"Ingestion job not found: {job_id}")
                db.commit()
                file_id = active_job.file_id
                mapping_ids = [uuid.UUID(str(value)) for value in active_job.mapping_ids]

                store = SqlAlchemyIngestionStore(db)
                source_file = store.find_file_by_id(file_id)
                if source_file is None:
                    raise JobLookupError(f"File not found with ID: {file_id}")
                mappings = store.find_mappings_by_ids(mapping_ids)
                if not mappings:
                    raise JobLookupError("No mappings found")

                result = self._pipeline_factory(store).run(source_file, mappings)

                completed_job = repository.mark_completed(
                    job_id=job_id,
                    result_payload=result.to_dict(),
                )
                if completed_job is None:
                    raise JobLookupError(f"Ingestion job not found: {job_id}")
                db.commit()
                logger.info(
                    "Ingestion job completed id=%s processed=%d failed=%d",
                    job_id,
                    result.processed,
                    result.failed,
                )
            except Exception as exc:
                self._mark_job_failed(db=db, job_id=job_id, file_id=file_id, exc=exc)

    def _mark_job_failed(
        self,
        *,
        db: Session,
        job_id: uuid.UUID,
        file_id: uuid.UUID | None,
        exc: Exception,
    ) -> None:
        repository = IngestionJobRepository(db)
        error_message = f"{type(exc).__name__}: {exc}"
        logger.exception("Ingestion job failed id=%s error=%s", job_id, error_message)
        try:
            db.rollback()
            if file_id is not None:
                SqlAlchemyIngestionStore(db).update_file_status(file_id, SourceFileStatus.ERROR)
            failed_job = repository.mark_failed(
                job_id=job_id,
                error_message=error_message[:2000],
            )
            if failed_job is None:
                logger.error("Unable to mark ingestion job as failed because it was not found id=%s", job_id)
            db.commit()
        except Exception:
            db.rollback()
            logger.exception("Failed to persist failed ingestion job state id=%s", job_id)
