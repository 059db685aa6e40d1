"""Exception hierarchy shared by the data, AI and service layers."""

from __future__ import annotations

from typing import Any


class StudySpaceError(RuntimeError):
    """Base class for every error surfaced to the user."""


class SupabaseNotConfiguredError(StudySpaceError):
    """Raised when Supabase settings are missing the URL or anon key."""


class PersistenceError(StudySpaceError):
    """Raised when a PostgREST call fails."""


class RecordNotCreatedError(PersistenceError):
    """Raised when an insert succeeds at the transport level but returns no row."""


class NoRowsAffectedError(PersistenceError):
    """Raised when a mutation by id touched zero rows."""

    def __init__(self, operation: str, collection: str, record_id: Any) -> None:
        self.operation = operation
        self.collection = collection
        self.record_id = record_id
        super().__init__(
            f"Failed to {operation} document in '{collection}' with id {record_id}. "
            "The item was not found or you don't have permission."
        )


class BlobNotFoundError(StudySpaceError):
    """Raised when a storage key does not exist."""


class BlobStorageError(StudySpaceError):
    """Raised for storage failures other than a missing key."""


class AIServiceError(StudySpaceError):
    """Raised when the AI service fails or returns an unusable response."""


class InvalidCredentialsError(AIServiceError):
    """Raised when the AI service rejects the configured API key."""


class AINotConfiguredError(AIServiceError):
    """Raised when no AI API key is configured."""


class RecordNotFoundError(StudySpaceError):
    """Raised when an id is not present in the locally loaded collection."""
