# Overview: Service-layer operations for product accounting; read query shapes plus validated mutations.

from __future__ import annotations

from datetime import date

from flask import current_app
from sqlalchemy import func, literal
from sqlalchemy.orm import aliased

from ..extensions import db
from ..models import Employee, ProductAccounting, StorageZone, Supply
from ..tabular import ResultTable
from ..validation import (
    InvalidArgumentError,
    InvalidOperationError,
    require_date,
    require_non_negative,
    require_not_future,
    require_positive_id,
    require_positive_quantity,
)
from .concurrency import atomic, lock_for_update
from .existence_service import EntityKind, exists, missing_references
"""
Product Accounting Invariants (authoritative)

Fact rows:
- quantity > 0, checked on insert and on update when quantity is supplied.
- accounting_date <= today (UTC), checked on insert and on update when supplied.
- employee_id, supply_id and storage_id must reference existing rows at write
  time. They are not re-validated on reads; a referenced entity deleted later
  leaves the fact row untouched.
- id is assigned by the database. Inserts never supply one.

Reads:
- Every read is a single parameterized statement; no caller value is ever
  concatenated into SQL.
- Results are ordered by product_accounting.id ascending (aggregates by
  storage_id ascending).
- A query that matches nothing returns an empty ResultTable, never an error.

Mutations:
- Static argument checks run first and raise InvalidArgumentError without
  touching the database.
- Existence checks and the write run inside one atomic() transaction.
  Referenced entities are not locked: an employee/supply/zone deleted by a
  concurrent request between the check and the commit is a tolerated race.
- Partial update writes only the columns the caller supplied.
"""


# Fields a partial update may touch, and the entity each foreign id points at.
_REFERENCE_FIELDS = (
    ("employee_id", EntityKind.EMPLOYEE),
    ("supply_id", EntityKind.SUPPLY),
    ("storage_id", EntityKind.STORAGE_ZONE),
)

MOVEMENT_STATUS_MAX_LENGTH = 50


def _employee_name(employee):
    return employee.first_name + literal(" ") + employee.last_name


def _simple_columns() -> list:
    return [
        ProductAccounting.id,
        ProductAccounting.accounting_date,
        ProductAccounting.quantity,
        ProductAccounting.employee_id,
        ProductAccounting.supply_id,
        ProductAccounting.storage_id,
    ]


def _joined_query():
    # Outer joins keep fact rows whose employee or zone has since been deleted.
    return db.session.query(
        ProductAccounting.id,
        ProductAccounting.accounting_date,
        ProductAccounting.quantity,
        ProductAccounting.employee_id,
        _employee_name(Employee).label("employee_name"),
        Employee.position.label("employee_position"),
        ProductAccounting.supply_id,
        ProductAccounting.storage_id,
        StorageZone.zone_name,
        StorageZone.zone_type,
        ProductAccounting.last_movement_date,
        ProductAccounting.movement_status,
    ).select_from(ProductAccounting)\
     .outerjoin(Employee, Employee.id == ProductAccounting.employee_id)\
     .outerjoin(StorageZone, StorageZone.id == ProductAccounting.storage_id)


def _as_float(value) -> float | None:
    return float(value) if value is not None else None


# ==================== READS ====================

def get_all_records() -> ResultTable:
    """Every fact row with its employee and storage zone projection."""
    query = _joined_query().order_by(ProductAccounting.id.asc())
    return ResultTable.from_query(query)


def get_records_by_employee(employee_id: int) -> ResultTable:
    """
    Fact rows recorded by one employee, joined like get_all_records().

    An unknown employee yields an empty table, not an error.
    """
    employee_id = require_positive_id(employee_id, "employee_id")
    query = _joined_query()\
        .filter(ProductAccounting.employee_id == employee_id)\
        .order_by(ProductAccounting.id.asc())
    return ResultTable.from_query(query)


def get_aggregate_records(min_record_count: int, start_date) -> ResultTable:
    """
    Per storage zone: row count, total and average quantity.

    Only rows with accounting_date >= start_date are counted (WHERE), and
    only zones with at least min_record_count such rows are kept (HAVING).
    Raising min_record_count can only drop zones, never add them.
    """
    min_record_count = require_non_negative(min_record_count, "min_record_count")
    start_day = require_not_future(start_date, "start_date")

    record_count = func.count(ProductAccounting.id)
    rows = db.session.query(
        ProductAccounting.storage_id,
        StorageZone.zone_name,
        record_count.label("record_count"),
        func.sum(ProductAccounting.quantity).label("total_quantity"),
        func.avg(ProductAccounting.quantity).label("average_quantity"),
    ).select_from(ProductAccounting)\
     .outerjoin(StorageZone, StorageZone.id == ProductAccounting.storage_id)\
     .filter(ProductAccounting.accounting_date >= start_day)\
     .group_by(ProductAccounting.storage_id, StorageZone.zone_name)\
     .having(record_count >= min_record_count)\
     .order_by(ProductAccounting.storage_id.asc())\
     .all()

    return ResultTable(
        columns=("storage_id", "zone_name", "record_count", "total_quantity", "average_quantity"),
        rows=[
            {
                "storage_id": row.storage_id,
                "zone_name": row.zone_name,
                "record_count": int(row.record_count or 0),
                "total_quantity": int(row.total_quantity or 0),
                "average_quantity": _as_float(row.average_quantity),
            }
            for row in rows
        ],
    )


def get_simple_product_accounting_records() -> ResultTable:
    """The fact table's own columns, no joins."""
    query = db.session.query(*_simple_columns()).order_by(ProductAccounting.id.asc())
    return ResultTable.from_query(query)


def get_correlated_subquery(supply_id: int) -> ResultTable:
    """
    Fact rows for one supply, each with supply_date and employee_name looked
    up by scalar subqueries correlated to that row's supply_id / employee_id.

    The subqueries are re-evaluated per outer row; a row whose employee no
    longer exists gets employee_name = None.
    """
    supply_id = require_positive_id(supply_id, "supply_id")

    supply_date = db.session.query(Supply.supply_date)\
        .filter(Supply.id == ProductAccounting.supply_id)\
        .correlate(ProductAccounting)\
        .scalar_subquery()

    employee_name = db.session.query(_employee_name(Employee))\
        .filter(Employee.id == ProductAccounting.employee_id)\
        .correlate(ProductAccounting)\
        .scalar_subquery()

    query = db.session.query(
        *_simple_columns(),
        supply_date.label("supply_date"),
        employee_name.label("employee_name"),
    ).filter(ProductAccounting.supply_id == supply_id)\
     .order_by(ProductAccounting.id.asc())
    return ResultTable.from_query(query)


def get_non_correlated_subquery(supply_id: int) -> ResultTable:
    """
    Fact rows for one supply whose quantity is strictly above that supply's
    average quantity.

    The average is a non-correlated scalar subquery over an alias of the
    fact table: it does not reference the outer row, so the database
    computes it once and reuses it as the threshold for every row. It is
    also returned as supply_average_quantity.
    """
    supply_id = require_positive_id(supply_id, "supply_id")

    scope = aliased(ProductAccounting, name="supply_scope")
    average_quantity = db.session.query(func.avg(scope.quantity))\
        .filter(scope.supply_id == supply_id)\
        .scalar_subquery()

    rows = db.session.query(
        *_simple_columns(),
        average_quantity.label("supply_average_quantity"),
    ).filter(
        ProductAccounting.supply_id == supply_id,
        ProductAccounting.quantity > average_quantity,
    ).order_by(ProductAccounting.id.asc())\
     .all()

    columns = ("id", "accounting_date", "quantity", "employee_id", "supply_id", "storage_id", "supply_average_quantity")
    table_rows = []
    for row in rows:
        data = dict(row._mapping)
        data["supply_average_quantity"] = _as_float(data["supply_average_quantity"])
        table_rows.append(data)
    return ResultTable(columns=columns, rows=table_rows)


# ==================== EXISTENCE PROBES ====================

def employee_exists(employee_id: int) -> bool:
    return exists(EntityKind.EMPLOYEE, employee_id)


def supply_exists(supply_id: int) -> bool:
    return exists(EntityKind.SUPPLY, supply_id)


def storage_zone_exists(storage_id: int) -> bool:
    return exists(EntityKind.STORAGE_ZONE, storage_id)


def record_exists(record_id: int) -> bool:
    record_id = require_positive_id(record_id, "record id")
    found = db.session.query(ProductAccounting.id).filter(ProductAccounting.id == record_id).first()
    return found is not None


# ==================== MUTATIONS ====================

def _raise_if_missing(references: list[tuple[EntityKind, int]], action: str) -> None:
    missing = missing_references(references)
    if missing:
        current_app.logger.warning("Rejected %s: missing references %s", action, ", ".join(missing))
        raise InvalidOperationError(
            f"Referenced entities do not exist: {', '.join(missing)}",
            missing=missing,
        )


def _lock_record(record_id: int):
    query = db.session.query(ProductAccounting.id).filter(ProductAccounting.id == record_id)
    return lock_for_update(query).first()


def insert_record(
    *,
    accounting_date,
    quantity: int,
    employee_id: int,
    supply_id: int,
    storage_id: int,
    last_movement_date=None,
    movement_status: str | None = None,
) -> int:
    """
    Create a fact row and return its database-assigned id.

    Raises:
        InvalidArgumentError: quantity <= 0, future accounting_date, any id <= 0,
            or a movement_status that is not a string of at most 50 characters
        InvalidOperationError: employee, supply or storage zone does not exist
            (every missing one is listed); nothing is written
    """
    accounting_day = require_not_future(accounting_date, "accounting_date")
    quantity = require_positive_quantity(quantity)
    employee_id = require_positive_id(employee_id, "employee_id")
    supply_id = require_positive_id(supply_id, "supply_id")
    storage_id = require_positive_id(storage_id, "storage_id")

    movement_day: date | None = None
    if last_movement_date is not None:
        movement_day = require_date(last_movement_date, "last_movement_date")
    if movement_status is not None:
        if not isinstance(movement_status, str):
            raise InvalidArgumentError("movement_status must be a string")
        if len(movement_status) > MOVEMENT_STATUS_MAX_LENGTH:
            raise InvalidArgumentError(f"movement_status must be at most {MOVEMENT_STATUS_MAX_LENGTH} characters")

    with atomic():
        _raise_if_missing(
            [
                (EntityKind.EMPLOYEE, employee_id),
                (EntityKind.SUPPLY, supply_id),
                (EntityKind.STORAGE_ZONE, storage_id),
            ],
            "insert",
        )

        record = ProductAccounting(
            accounting_date=accounting_day,
            quantity=quantity,
            employee_id=employee_id,
            supply_id=supply_id,
            storage_id=storage_id,
            last_movement_date=movement_day,
            movement_status=movement_status,
        )
        db.session.add(record)
        db.session.flush()
        record_id = record.id

    current_app.logger.info("Inserted product accounting record %s", record_id)
    return record_id


def update_record(
    record_id: int,
    *,
    accounting_date=None,
    quantity: int | None = None,
    employee_id: int | None = None,
    supply_id: int | None = None,
    storage_id: int | None = None,
) -> None:
    """
    Partially update a fact row.

    A field left as None is not supplied and keeps its stored value; none of
    these columns is nullable, so None is never a new value. The UPDATE
    statement sets only the supplied columns.

    Raises:
        InvalidArgumentError: record_id <= 0, or a supplied field is invalid
        InvalidOperationError: record not found, or a supplied foreign id
            does not exist
    """
    record_id = require_positive_id(record_id, "record id")

    changes: dict = {}
    if accounting_date is not None:
        changes["accounting_date"] = require_not_future(accounting_date, "accounting_date")
    if quantity is not None:
        changes["quantity"] = require_positive_quantity(quantity)
    if employee_id is not None:
        changes["employee_id"] = require_positive_id(employee_id, "employee_id")
    if supply_id is not None:
        changes["supply_id"] = require_positive_id(supply_id, "supply_id")
    if storage_id is not None:
        changes["storage_id"] = require_positive_id(storage_id, "storage_id")

    references = [(kind, changes[name]) for name, kind in _REFERENCE_FIELDS if name in changes]

    with atomic():
        if _lock_record(record_id) is None:
            raise InvalidOperationError(
                f"ProductAccounting {record_id} not found",
                missing=[f"ProductAccounting {record_id}"],
            )

        _raise_if_missing(references, f"update of record {record_id}")

        if not changes:
            current_app.logger.debug("Update of record %s supplied no fields; nothing written", record_id)
            return

        db.session.query(ProductAccounting)\
            .filter(ProductAccounting.id == record_id)\
            .update(changes, synchronize_session=False)

    current_app.logger.info("Updated product accounting record %s: %s", record_id, ", ".join(sorted(changes)))


def delete_record(record_id: int) -> None:
    """
    Remove a fact row. Nothing else is touched.

    Raises:
        InvalidArgumentError: record_id <= 0
        InvalidOperationError: no such record
    """
    record_id = require_positive_id(record_id, "record id")

    with atomic():
        if _lock_record(record_id) is None:
            raise InvalidOperationError(
                f"ProductAccounting {record_id} not found",
                missing=[f"ProductAccounting {record_id}"],
            )
        db.session.query(ProductAccounting)\
            .filter(ProductAccounting.id == record_id)\
            .delete(synchronize_session=False)

    current_app.logger.info("Deleted product accounting record %s", record_id)
