"""In-memory collections kept in lock-step with their Supabase tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Protocol, Type, TypeVar

from .data.collections import PersistenceBackend, Row
from .domain import UpdatePolicy
from .errors import NoRowsAffectedError

logger = logging.getLogger(__name__)

SERVER_FIELDS = frozenset({"id", "created_at"})


class Record(Protocol):
    id: int

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> Any: ...

    def to_record(self) -> Dict[str, Any]: ...


T = TypeVar("T", bound=Record)


@dataclass
class SyncedCollection(Generic[T]):
    """Local ordered list of ``entity_type`` mirrored against a persistence backend.

    Every mutation goes to the backend first; the local list only changes once
    the backend call has returned. New records are prepended (most recent
    first) regardless of the ordering used by :meth:`load`.
    """

    entity_type: Type[T]
    backend: PersistenceBackend
    update_policy: UpdatePolicy = UpdatePolicy.OPTIMISTIC
    _items: List[T] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.backend.table_name

    @property
    def items(self) -> List[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def get(self, record_id: int) -> Optional[T]:
        for item in self._items:
            if item.id == record_id:
                return item
        return None

    def load(
        self,
        order_field: Optional[str] = None,
        *,
        descending: bool = False,
        keep: Optional[Callable[[T], bool]] = None,
    ) -> List[T]:
        rows = self.backend.list(order_field, descending)
        entities = [self.entity_type.from_record(row) for row in rows]
        if keep is not None:
            entities = [entity for entity in entities if keep(entity)]
        self._items = entities
        logger.debug("Loaded %d rows from %s", len(entities), self.name)
        return self.items

    def create(self, **values: Any) -> T:
        self._check_fields(values)
        created = self.entity_type.from_record(self.backend.insert(self._serialize(values)))
        self._items.insert(0, created)
        logger.debug("Created %s id=%s", self.name, created.id)
        return created

    def update(self, record_id: int, **changes: Any) -> Optional[T]:
        self._check_fields(changes)
        payload = self._serialize(changes)
        affected = self.backend.update(record_id, payload)
        if affected == 0:
            if self.update_policy is UpdatePolicy.STRICT:
                raise NoRowsAffectedError("update", self.name, record_id)
            logger.warning(
                "Attempted to update a document in '%s' with id %s, but no rows were affected. "
                "The item may not exist or access policies might be preventing access.",
                self.name,
                record_id,
            )
        for index, item in enumerate(self._items):
            if item.id == record_id:
                merged = self.entity_type.from_record(self._row(item) | payload)
                self._items[index] = merged
                return merged
        return None

    def delete(self, record_id: int) -> None:
        affected = self.backend.delete(record_id)
        if affected == 0:
            raise NoRowsAffectedError("delete", self.name, record_id)
        self._items = [item for item in self._items if item.id != record_id]
        logger.debug("Deleted %s id=%s", self.name, record_id)

    # Helpers -----------------------------------------------------------------

    def _check_fields(self, values: Dict[str, Any]) -> None:
        allowed = {spec.name for spec in fields(self.entity_type)} - SERVER_FIELDS
        unknown = sorted(set(values) - allowed)
        if unknown:
            raise ValueError(f"Unknown or read-only fields for {self.name}: {', '.join(unknown)}")

    def _serialize(self, values: Dict[str, Any]) -> Row:
        return {name: _wire(value) for name, value in values.items()}

    def _row(self, item: T) -> Row:
        return {**item.to_record(), "id": item.id, "created_at": getattr(item, "created_at", None)}


def _wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
