from __future__ import annotations

import logging
from dataclasses import dataclass

from storage3.utils import StorageException

from ..errors import BlobNotFoundError, BlobStorageError
from .supabase import SupabaseGateway

logger = logging.getLogger(__name__)

_NOT_FOUND_MARKERS = ("not found", "does not exist", "404")


def _error_message(exc: Exception) -> str:
    payload = exc.args[0] if exc.args else None
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("error") or payload)
    return str(getattr(exc, "message", None) or exc)


def is_not_found(exc: Exception) -> bool:
    message = _error_message(exc).lower()
    return any(marker in message for marker in _NOT_FOUND_MARKERS)


@dataclass(slots=True)
class BlobStore:
    """Key/value byte storage backed by one Supabase storage bucket."""

    gateway: SupabaseGateway
    bucket: str

    def download(self, key: str) -> bytes:
        try:
            return self.gateway.bucket(self.bucket).download(key)
        except StorageException as exc:
            if is_not_found(exc):
                logger.info("Blob %s/%s not found", self.bucket, key)
                raise BlobNotFoundError(f"'{key}' does not exist in bucket '{self.bucket}'.") from exc
            message = f"Storage error downloading '{key}' from '{self.bucket}': {_error_message(exc)}"
            logger.error(message)
            raise BlobStorageError(message) from exc

    def upload(
        self,
        key: str,
        data: bytes,
        *,
        overwrite: bool = True,
        no_cache: bool = True,
        content_type: str = "application/octet-stream",
    ) -> None:
        file_options = {"content-type": content_type, "upsert": "true" if overwrite else "false"}
        if no_cache:
            file_options["cache-control"] = "0"
        try:
            self.gateway.bucket(self.bucket).upload(key, data, file_options=file_options)
        except StorageException as exc:
            message = f"Storage error uploading '{key}' to '{self.bucket}': {_error_message(exc)}"
            logger.error(message)
            raise BlobStorageError(message) from exc

    def public_url(self, key: str) -> str:
        return self.gateway.bucket(self.bucket).get_public_url(key)

    def remove(self, key: str) -> None:
        try:
            self.gateway.bucket(self.bucket).remove([key])
        except StorageException as exc:
            if is_not_found(exc):
                raise BlobNotFoundError(f"'{key}' does not exist in bucket '{self.bucket}'.") from exc
            message = f"Storage error removing '{key}' from '{self.bucket}': {_error_message(exc)}"
            logger.error(message)
            raise BlobStorageError(message) from exc
