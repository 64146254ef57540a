"""
Repository for uploaded source file metadata.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from db.models.source_file import SourceFile, SourceFileStatus


class SourceFileRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_file(
        self,
        *,
        file_name: str,
        file_path: str,
        status: str = SourceFileStatus.UPLOADED,
    ) -> SourceFile:
        source_file = SourceFile(
            file_name=file_name,
            file_path=file_path,
            status=status,
        )
        self._session.add(source_file)
        self._session.flush()
        self._session.refresh(source_file)
        return source_file

    def get_file(self, file_id: uuid.UUID) -> SourceFile | None:
        return self._session.get(SourceFile, file_id)

    def list_files(self, *, limit: int | None = None) -> list[SourceFile]:
        stmt: Select[tuple[SourceFile]] = select(SourceFile).order_by(
            SourceFile.uploaded_at.desc(),
        )
        if limit is not None:
            stmt = stmt.limit(max(1, limit))
        return list(self._session.scalars(stmt).all())

    def update_status(self, *, file_id: uuid.UUID, status: str) -> SourceFile | None:
        source_file = self.get_file(file_id)
        if source_file is None:
            return None
        source_file.status = status
        self._session.flush()
        return source_file
