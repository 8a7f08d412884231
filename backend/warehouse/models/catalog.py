from __future__ import annotations

from ..extensions import db

# Product type constants
PRODUCT_TYPE_FOOD = "FOOD"
PRODUCT_TYPE_OTHER = "OTHER"


class Product(db.Model):
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    expiry_date = db.Column(db.Date, nullable=True)
    product_type = db.Column(db.String(32), nullable=False, default=PRODUCT_TYPE_OTHER)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Raw image bytes; excluded from to_dict()
    photo = db.Column(db.LargeBinary, nullable=True)

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} type={self.product_type}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "product_type": self.product_type,
            "is_active": self.is_active,
            "has_photo": self.photo is not None,
        }


class Supplier(db.Model):
    __tablename__ = "suppliers"
    __table_args__ = ({"sqlite_autoincrement": True},)

    id = db.Column(db.Integer, primary_key=True)

    company_name = db.Column(db.String(255), nullable=False)
    contact_person = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    address = db.Column(db.String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Supplier id={self.id} company={self.company_name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_name": self.company_name,
            "contact_person": self.contact_person,
            "phone": self.phone,
            "address": self.address,
        }


class Supply(db.Model):
    """A delivery of one product from one supplier."""
    __tablename__ = "supplies"
    __table_args__ = (
        db.Index("ix_supplies_product_date", "product_id", "supply_date"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey("suppliers.id"), nullable=False, index=True)

    supply_date = db.Column(db.Date, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    product = db.relationship("Product", backref=db.backref("supplies", lazy=True))
    supplier = db.relationship("Supplier", backref=db.backref("supplies", lazy=True))

    def __repr__(self) -> str:
        return f"<Supply id={self.id} product_id={self.product_id} supplier_id={self.supplier_id} date={self.supply_date}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "supplier_id": self.supplier_id,
            "supply_date": self.supply_date.isoformat() if self.supply_date else None,
            "quantity": self.quantity,
        }
