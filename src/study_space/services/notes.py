from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..errors import BlobNotFoundError, BlobStorageError
from .context import ServiceContext

logger = logging.getLogger(__name__)

NOTE_CONTENT_TYPE = "text/plain;charset=utf-8"


@dataclass(slots=True)
class NoteService:
    """Free-text subject notes stored in the notes bucket under the subject id."""

    context: ServiceContext
    _saved: Dict[int, str] = field(default_factory=dict)

    def load(self, subject_id: int) -> str:
        key = str(subject_id)
        try:
            data = self.context.notes.download(key)
        except BlobNotFoundError:
            # First visit to this subject's note.
            data = b""
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.error("Note for subject %s is not valid UTF-8", subject_id)
            raise BlobStorageError(
                f"Note '{key}' in bucket '{self.context.notes.bucket}' is not valid UTF-8 text."
            ) from exc
        self._saved[subject_id] = content
        return content

    def save(self, subject_id: int, content: str) -> None:
        self.context.notes.upload(
            str(subject_id),
            content.encode("utf-8"),
            overwrite=True,
            no_cache=True,
            content_type=NOTE_CONTENT_TYPE,
        )
        self._saved[subject_id] = content
        logger.debug("Saved note for subject %s (%d chars)", subject_id, len(content))

    def last_saved(self, subject_id: int) -> Optional[str]:
        return self._saved.get(subject_id)

    def has_unsaved_changes(self, subject_id: int, content: str) -> bool:
        saved = self._saved.get(subject_id)
        return saved is None or saved != content
