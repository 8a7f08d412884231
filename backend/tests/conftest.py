"""
Pytest fixtures for warehouse accounting tests.

Provides an in-memory database, a per-test clean session, and a small set of
reference entities (warehouse, zones, employees, supplies) to record against.
"""

from datetime import date

import pytest

from warehouse import create_app
from warehouse.extensions import db
from warehouse.models import Employee, Product, StorageZone, Supplier, Supply, Warehouse
from warehouse.models.catalog import PRODUCT_TYPE_FOOD
from warehouse.models.storage import ZONE_TYPE_DRY, ZONE_TYPE_REFRIGERATED
from warehouse.services import accounting_service


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'LOG_LEVEL': 'DEBUG',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def warehouse(db_session):
    wh = Warehouse(name="Central", address="1 Dock Road")
    db_session.add(wh)
    db_session.commit()
    return wh


@pytest.fixture(scope='function')
def zone_dry(db_session, warehouse):
    zone = StorageZone(warehouse_id=warehouse.id, zone_name="Dry A", zone_type=ZONE_TYPE_DRY, capacity=500)
    db_session.add(zone)
    db_session.commit()
    return zone


@pytest.fixture(scope='function')
def zone_cold(db_session, warehouse):
    zone = StorageZone(warehouse_id=warehouse.id, zone_name="Cold B", zone_type=ZONE_TYPE_REFRIGERATED, capacity=200)
    db_session.add(zone)
    db_session.commit()
    return zone


@pytest.fixture(scope='function')
def employee_anna(db_session):
    employee = Employee(first_name="Anna", last_name="Petrova", position="Storekeeper")
    db_session.add(employee)
    db_session.commit()
    return employee


@pytest.fixture(scope='function')
def employee_ivan(db_session):
    employee = Employee(first_name="Ivan", last_name="Sokolov", position="Forklift operator")
    db_session.add(employee)
    db_session.commit()
    return employee


@pytest.fixture(scope='function')
def product(db_session):
    item = Product(name="Canned beans", product_type=PRODUCT_TYPE_FOOD)
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture(scope='function')
def supplier(db_session):
    item = Supplier(company_name="Green Valley Foods", contact_person="M. Orlov", phone="+1-555-0100")
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture(scope='function')
def supply_a(db_session, product, supplier):
    supply = Supply(product_id=product.id, supplier_id=supplier.id, supply_date=date(2024, 1, 1), quantity=100)
    db_session.add(supply)
    db_session.commit()
    return supply


@pytest.fixture(scope='function')
def supply_b(db_session, product, supplier):
    supply = Supply(product_id=product.id, supplier_id=supplier.id, supply_date=date(2024, 2, 15), quantity=60)
    db_session.add(supply)
    db_session.commit()
    return supply


@pytest.fixture(scope='function')
def record_factory(employee_anna, supply_a, zone_dry):
    """Insert a fact row through the engine; defaults point at the standard fixtures."""
    def _make(**overrides):
        values = {
            "accounting_date": date(2024, 3, 1),
            "quantity": 10,
            "employee_id": employee_anna.id,
            "supply_id": supply_a.id,
            "storage_id": zone_dry.id,
        }
        values.update(overrides)
        return accounting_service.insert_record(**values)
    return _make
