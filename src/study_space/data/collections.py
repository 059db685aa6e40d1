from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, TypeVar

from postgrest.exceptions import APIError
from postgrest.types import CountMethod

from ..errors import PersistenceError, RecordNotCreatedError
from .supabase import SupabaseGateway

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
_R = TypeVar("_R")


class PersistenceBackend(Protocol):
    """Per-collection persistence contract: full list, insert, update and delete by numeric id."""

    table_name: str

    def list(self, order_field: Optional[str] = None, descending: bool = False) -> List[Row]: ...

    def insert(self, fields: Row) -> Row: ...

    def update(self, record_id: int, fields: Row) -> int: ...

    def delete(self, record_id: int) -> int: ...


@dataclass(slots=True)
class SupabaseCollection:
    gateway: SupabaseGateway
    table_name: str

    def _execute(self, operation: str, request: Callable[[], _R]) -> _R:
        context = f"{operation}('{self.table_name}')"
        try:
            return request()
        except APIError as exc:
            message = f"Supabase error in {context}: {exc.message}"
            logger.error(message)
            raise PersistenceError(message) from exc

    def list(self, order_field: Optional[str] = None, descending: bool = False) -> List[Row]:
        def request():
            query = self.gateway.table(self.table_name).select("*")
            if order_field:
                query = query.order(order_field, desc=descending)
            return query.execute()

        response = self._execute("list", request)
        return list(response.data or [])

    def insert(self, fields: Row) -> Row:
        response = self._execute(
            "insert",
            lambda: self.gateway.table(self.table_name).insert(fields).execute(),
        )
        if not response.data:
            raise RecordNotCreatedError(f"Document creation in '{self.table_name}' did not return a result.")
        return response.data[0]

    def update(self, record_id: int, fields: Row) -> int:
        response = self._execute(
            "update",
            lambda: self.gateway.table(self.table_name)
            .update(fields, count=CountMethod.exact)
            .eq("id", record_id)
            .execute(),
        )
        return _affected(response)

    def delete(self, record_id: int) -> int:
        response = self._execute(
            "delete",
            lambda: self.gateway.table(self.table_name)
            .delete(count=CountMethod.exact)
            .eq("id", record_id)
            .execute(),
        )
        return _affected(response)


def _affected(response: Any) -> int:
    if response.count is not None:
        return int(response.count)
    return len(response.data or [])
