"""Supabase-backed :class:`~pos.services.datastore.EntityCollection`."""

from __future__ import annotations

import logging
import os
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from django.conf import settings
from supabase import Client, SupabaseException, create_client

from .datastore import DataStore, Record

logger = logging.getLogger(__name__)

_client: Client | None = None

_RANGE_OPERATORS = ("gte", "gt", "lte", "lt")


def get_supabase_client() -> Optional[Client]:
    """Return a cached Supabase client if available.

    The client is initialised using the ``SUPABASE_URL`` and ``SUPABASE_KEY``
    environment variables. If configuration is missing or the connection
    fails, ``None`` is returned and the error is logged.
    """

    global _client
    if _client is not None:
        return _client

    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY")
    if not url or not key:
        logger.warning("Supabase is not configured")
        return None
    try:  # pragma: no cover - network interaction
        _client = create_client(url, key)
    except SupabaseException:  # pragma: no cover - network interaction
        logger.exception("Failed to initialise Supabase client")
        return None
    return _client


def _jsonable(value: Any) -> Any:
    """Convert ``value`` into something PostgREST can serialise."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class SupabaseCollection:
    """Read and write one Supabase table as plain records."""

    def __init__(self, client: Client, table: str):
        self.client = client
        self.table = table

    def filter(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]:
        query = self.client.table(self.table).select("*")
        for key, value in (criteria or {}).items():
            field, _, op = key.rpartition("__")
            if op not in _RANGE_OPERATORS:
                field, op = key, "eq"
            query = getattr(query, op)(field, _jsonable(value))
        resp = query.execute()
        return list(resp.data or [])

    def update(
        self,
        record_id: Any,
        fields: Mapping[str, Any],
        expected: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Record]:
        query = self.client.table(self.table).update(_jsonable(dict(fields))).eq("id", record_id)
        for field, value in (expected or {}).items():
            if value is None:
                query = query.is_(field, "null")
            else:
                query = query.eq(field, _jsonable(value))
        resp = query.execute()
        rows = resp.data or []
        return rows[0] if rows else None

    def create(self, fields: Mapping[str, Any]) -> Record:
        resp = self.client.table(self.table).insert(_jsonable(dict(fields))).execute()
        rows = resp.data or []
        if not rows:
            raise SupabaseException(f"Insert into {self.table} returned no rows")
        return rows[0]


def supabase_data_store(client: Optional[Client] = None) -> DataStore:
    """Return a store over the tables named in ``settings.POS_SUPABASE_TABLES``."""
    client = client or get_supabase_client()
    if client is None:
        raise SupabaseException("Supabase is not configured")
    tables: Dict[str, str] = getattr(settings, "POS_SUPABASE_TABLES", {})
    return DataStore(
        menu_items=SupabaseCollection(client, tables.get("menu_items", "menu_items")),
        ingredients=SupabaseCollection(client, tables.get("ingredients", "ingredients")),
        sales=SupabaseCollection(client, tables.get("sales", "sales")),
    )


__all__ = ["SupabaseCollection", "get_supabase_client", "supabase_data_store"]
