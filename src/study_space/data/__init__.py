"""Data access layer."""

from __future__ import annotations

from .blobs import BlobStore
from .collections import PersistenceBackend, Row, SupabaseCollection
from .supabase import SupabaseGateway

__all__ = ["BlobStore", "PersistenceBackend", "Row", "SupabaseCollection", "SupabaseGateway"]
