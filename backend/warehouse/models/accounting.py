from __future__ import annotations

from ..extensions import db


class ProductAccounting(db.Model):
    """
    Product-accounting fact row: a quantity of a supply held in a storage zone
    on a given date, recorded by an employee.

    REFERENTIAL INTEGRITY:
    employee_id, supply_id and storage_id are plain integer columns with no
    store-level foreign keys. They are checked for existence by the
    accounting service at write time only; deleting a referenced entity later
    leaves the fact row in place.

    Rows are written only through services.accounting_service.
    """
    __tablename__ = "product_accounting"
    __table_args__ = (
        db.Index("ix_product_accounting_storage_date", "storage_id", "accounting_date"),
        db.CheckConstraint("quantity > 0", name="ck_product_accounting_quantity_positive"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    accounting_date = db.Column(db.Date, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    employee_id = db.Column(db.Integer, nullable=False, index=True)
    supply_id = db.Column(db.Integer, nullable=False, index=True)
    storage_id = db.Column(db.Integer, nullable=False, index=True)

    last_movement_date = db.Column(db.Date, nullable=True)
    movement_status = db.Column(db.String(50), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<ProductAccounting id={self.id} date={self.accounting_date} qty={self.quantity} "
            f"employee_id={self.employee_id} supply_id={self.supply_id} storage_id={self.storage_id}>"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "accounting_date": self.accounting_date.isoformat() if self.accounting_date else None,
            "quantity": self.quantity,
            "employee_id": self.employee_id,
            "supply_id": self.supply_id,
            "storage_id": self.storage_id,
            "last_movement_date": self.last_movement_date.isoformat() if self.last_movement_date else None,
            "movement_status": self.movement_status,
        }
