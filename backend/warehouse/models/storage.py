from __future__ import annotations

from ..extensions import db

# Zone type constants
ZONE_TYPE_GENERAL = "GENERAL"
ZONE_TYPE_DRY = "DRY"
ZONE_TYPE_REFRIGERATED = "REFRIGERATED"


class Warehouse(db.Model):
    __tablename__ = "warehouses"
    __table_args__ = (
        db.UniqueConstraint("name", name="uq_warehouses_name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(120), nullable=False)
    address = db.Column(db.String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Warehouse id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
        }


class StorageZone(db.Model):
    __tablename__ = "storage_zones"
    __table_args__ = (
        db.UniqueConstraint("warehouse_id", "zone_name", name="uq_storage_zones_warehouse_name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    warehouse_id = db.Column(db.Integer, db.ForeignKey("warehouses.id"), nullable=False, index=True)
    zone_name = db.Column(db.String(120), nullable=False)
    zone_type = db.Column(db.String(32), nullable=False, default=ZONE_TYPE_GENERAL)
    capacity = db.Column(db.Integer, nullable=False, default=0)

    warehouse = db.relationship("Warehouse", backref=db.backref("zones", lazy=True))

    def __repr__(self) -> str:
        return f"<StorageZone id={self.id} name={self.zone_name!r} warehouse_id={self.warehouse_id}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "warehouse_id": self.warehouse_id,
            "zone_name": self.zone_name,
            "zone_type": self.zone_type,
            "capacity": self.capacity,
        }
