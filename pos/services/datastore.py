"""Record-level access to menu items, ingredients and sales.

Services in this package never talk to the ORM or to Supabase directly. They
receive a :class:`DataStore` whose collections expose three operations:

* ``filter(criteria)`` returning a list of plain ``dict`` records; a key
  such as ``sale_date__gte`` compares with ``>=`` (also ``__gt``, ``__lte``,
  ``__lt``) instead of equality,
* ``update(record_id, fields, expected=None)`` applying a partial update,
  optionally only while the ``expected`` field values still hold,
* ``create(fields)`` inserting and returning a record.

``update`` returns ``None`` when no row matched, which is how a conditional
update reports that another writer got there first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Type

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models, transaction

from ..models import Ingredient, MenuItem, Sale

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class EntityCollection(Protocol):
    def filter(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]: ...

    def update(
        self,
        record_id: Any,
        fields: Mapping[str, Any],
        expected: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Record]: ...

    def create(self, fields: Mapping[str, Any]) -> Record: ...


@dataclass
class DataStore:
    """The three collections the sale services read and write."""

    menu_items: EntityCollection
    ingredients: EntityCollection
    sales: EntityCollection


def first_or_none(collection: EntityCollection, record_id: Any) -> Optional[Record]:
    """Return the record with ``id == record_id`` or ``None``."""
    rows = collection.filter({"id": record_id})
    return rows[0] if rows else None


class DjangoCollection:
    """:class:`EntityCollection` backed by a Django model."""

    def __init__(self, model: Type[models.Model]):
        self.model = model

    def _values(self, pk: Any) -> Optional[Record]:
        return self.model.objects.filter(pk=pk).values().first()

    def filter(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]:
        try:
            return list(self.model.objects.filter(**dict(criteria or {})).values())
        except (ValueError, TypeError, ValidationError):
            # A lookup value the column cannot hold matches nothing.
            logger.debug("Unmatchable %s lookup %r", self.model.__name__, criteria)
            return []

    def update(
        self,
        record_id: Any,
        fields: Mapping[str, Any],
        expected: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Record]:
        with transaction.atomic():
            qs = self.model.objects.filter(pk=record_id)
            if expected:
                qs = qs.filter(**dict(expected))
            if not qs.update(**dict(fields)):
                return None
        return self._values(record_id)

    def create(self, fields: Mapping[str, Any]) -> Record:
        obj = self.model.objects.create(**dict(fields))
        return self._values(obj.pk)


def django_data_store() -> DataStore:
    """Return a store reading and writing through the ``pos`` models."""
    return DataStore(
        menu_items=DjangoCollection(MenuItem),
        ingredients=DjangoCollection(Ingredient),
        sales=DjangoCollection(Sale),
    )


def get_data_store() -> DataStore:
    """Return the store configured by ``settings.POS_DATA_STORE``."""
    backend = getattr(settings, "POS_DATA_STORE", "django")
    if backend == "django":
        return django_data_store()
    if backend == "supabase":
        from .supabase_store import supabase_data_store

        return supabase_data_store()
    raise ValueError(f"Unknown POS_DATA_STORE backend: {backend}")


__all__ = [
    "DataStore",
    "DjangoCollection",
    "EntityCollection",
    "Record",
    "django_data_store",
    "first_or_none",
    "get_data_store",
]
