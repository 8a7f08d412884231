# Overview: Generic per-entity stores (CRUD plus substring search) for the warehouse entities.

"""
Entity stores

Each simple entity (employees, products, suppliers, supplies, warehouses and
storage zones) gets one EntityStore bound to its model. Stores only enforce
null and existence checks.

Accounting fact rows get a ReadOnlyEntityStore: lookups and search only.
Fact rows are created, changed and removed only through accounting_service.

Search:
- get_filtered() is a case-insensitive substring match over the store's
  search columns. Non-text columns are cast to text first.
- The search text is always a bound parameter and LIKE wildcards in it are
  escaped, so "%" and "_" match literally.
"""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from sqlalchemy import String, cast, func, or_

from ..extensions import db
from ..models import Employee, Product, ProductAccounting, StorageZone, Supplier, Supply, Warehouse
from ..validation import InvalidArgumentError, InvalidOperationError, require_positive_id
from .concurrency import atomic, lock_for_update

T = TypeVar("T", bound=db.Model)


class ReadOnlyEntityStore(Generic[T]):
    def __init__(self, model: type[T], *, label: str, search_fields: Sequence[str]):
        self.model = model
        self.label = label
        self.search_fields = tuple(search_fields)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.label}>"

    def _query(self):
        return db.session.query(self.model)

    def _search_expressions(self):
        expressions = []
        for name in self.search_fields:
            column = getattr(self.model, name)
            if not isinstance(column.type, String):
                column = cast(column, String)
            expressions.append(func.lower(column))
        return expressions

    def get_all(self) -> list[T]:
        return self._query().order_by(self.model.id.asc()).all()

    def get_by_id(self, entity_id: int) -> T | None:
        entity_id = require_positive_id(entity_id, f"{self.label} id")
        return db.session.get(self.model, entity_id)

    def exists(self, entity_id: int) -> bool:
        entity_id = require_positive_id(entity_id, f"{self.label} id")
        found = db.session.query(self.model.id).filter(self.model.id == entity_id).first()
        return found is not None

    def get_filtered(self, search_text: str | None) -> list[T]:
        if search_text is None or not search_text.strip():
            return []
        needle = search_text.strip().lower()
        conditions = [expr.contains(needle, autoescape=True) for expr in self._search_expressions()]
        return self._query().filter(or_(*conditions)).order_by(self.model.id.asc()).all()


class EntityStore(ReadOnlyEntityStore[T]):
    def add(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError(f"{self.label} must not be None")
        if not isinstance(entity, self.model):
            raise InvalidArgumentError(f"Expected {self.model.__name__}, got {type(entity).__name__}")

        with atomic():
            if entity.id is not None:
                if self.exists(entity.id):
                    raise InvalidOperationError(f"{self.label} {entity.id} already exists")
            db.session.add(entity)
            db.session.flush()
        return entity

    def update(self, entity: T) -> T:
        if entity is None:
            raise InvalidArgumentError(f"{self.label} must not be None")
        if not isinstance(entity, self.model):
            raise InvalidArgumentError(f"Expected {self.model.__name__}, got {type(entity).__name__}")
        if entity.id is None:
            raise InvalidArgumentError(f"{self.label} must have an id to be updated")

        with atomic():
            existing = lock_for_update(self._query().filter(self.model.id == entity.id)).first()
            if existing is None:
                raise InvalidOperationError(f"{self.label} {entity.id} not found")
            merged = db.session.merge(entity)
        return merged

    def delete(self, entity_id: int) -> None:
        entity_id = require_positive_id(entity_id, f"{self.label} id")
        with atomic():
            entity = lock_for_update(self._query().filter(self.model.id == entity_id)).first()
            if entity is None:
                raise InvalidOperationError(f"{self.label} {entity_id} not found")
            db.session.delete(entity)


employees = EntityStore(Employee, label="Employee", search_fields=("first_name", "last_name", "position"))
products = EntityStore(Product, label="Product", search_fields=("name", "product_type"))
suppliers = EntityStore(
    Supplier,
    label="Supplier",
    search_fields=("company_name", "contact_person", "phone", "address"),
)
supplies = EntityStore(
    Supply,
    label="Supply",
    search_fields=("id", "product_id", "supplier_id", "supply_date", "quantity"),
)
warehouses = EntityStore(Warehouse, label="Warehouse", search_fields=("name", "address"))
storage_zones = EntityStore(StorageZone, label="StorageZone", search_fields=("id", "zone_name", "zone_type"))
product_accounting = ReadOnlyEntityStore(
    ProductAccounting,
    label="ProductAccounting",
    search_fields=(
        "id",
        "accounting_date",
        "employee_id",
        "supply_id",
        "storage_id",
        "last_movement_date",
        "movement_status",
    ),
)
