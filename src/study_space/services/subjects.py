from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain import Subject
from ..errors import BlobNotFoundError
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubjectService:
    context: ServiceContext

    def list_subjects(self) -> list[Subject]:
        return self.context.subjects.items

    def add(self, name: str) -> Subject:
        if not name.strip():
            raise ValueError("Subject name must not be empty.")
        return self.context.subjects.create(name=name.strip())

    def rename(self, subject_id: int, name: str) -> Subject | None:
        if not name.strip():
            raise ValueError("Subject name must not be empty.")
        return self.context.subjects.update(subject_id, name=name.strip())

    def delete(self, subject_id: int, *, remove_note: bool = False) -> None:
        """Delete a subject. Its note blob is kept unless ``remove_note`` is set."""

        self.context.subjects.delete(subject_id)
        if not remove_note:
            return
        try:
            self.context.notes.remove(str(subject_id))
        except BlobNotFoundError:
            logger.info("Subject %s had no note to remove", subject_id)
