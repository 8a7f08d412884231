# Overview: Flask CLI command groups for schema bootstrap, demo data and accounting reports.

# backend/warehouse/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create all tables that do not exist yet.
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - python -m flask system seed-demo
#   Insert a small demo dataset (skipped when employees already exist).
#
# Accounting reports:
# - python -m flask accounting aggregate --min-count 2 --since 2024-01-01
#   Per storage zone row count, total and average quantity.

from datetime import date, timedelta

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import Employee, Product, StorageZone, Supplier, Supply, Warehouse
from .models.catalog import PRODUCT_TYPE_FOOD
from .models.storage import ZONE_TYPE_DRY, ZONE_TYPE_REFRIGERATED
from .services import accounting_service
from .validation import AccountingError
from .time_utils import utc_today


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables (existing tables are left alone)."""
    db.create_all()
    click.echo("PASS Schema created.")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system seed-demo' for sample data.")


@system_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Insert one warehouse with zones, staff, supplies and accounting records."""
    if db.session.query(Employee.id).first() is not None:
        click.echo("SKIP Employees already exist; demo data not inserted.")
        return

    warehouse = Warehouse(name="Central Warehouse", address="1 Dock Road")
    db.session.add(warehouse)
    db.session.flush()

    zones = [
        StorageZone(warehouse_id=warehouse.id, zone_name="Dry A", zone_type=ZONE_TYPE_DRY, capacity=500),
        StorageZone(warehouse_id=warehouse.id, zone_name="Cold B", zone_type=ZONE_TYPE_REFRIGERATED, capacity=200),
    ]
    employees = [
        Employee(first_name="Anna", last_name="Petrova", position="Storekeeper"),
        Employee(first_name="Ivan", last_name="Sokolov", position="Forklift operator"),
    ]
    product = Product(name="Canned beans", product_type=PRODUCT_TYPE_FOOD)
    supplier = Supplier(company_name="Green Valley Foods", contact_person="M. Orlov", phone="+1-555-0100")
    db.session.add_all(zones + employees + [product, supplier])
    db.session.flush()

    supply = Supply(product_id=product.id, supplier_id=supplier.id, supply_date=utc_today() - timedelta(days=30), quantity=120)
    db.session.add(supply)
    db.session.commit()

    start = utc_today() - timedelta(days=20)
    created = 0
    for offset, quantity in enumerate((10, 25, 40, 5)):
        accounting_service.insert_record(
            accounting_date=start + timedelta(days=offset),
            quantity=quantity,
            employee_id=employees[offset % 2].id,
            supply_id=supply.id,
            storage_id=zones[offset % 2].id,
        )
        created += 1

    click.echo(f"PASS Demo data inserted ({created} accounting records).")


@click.group('accounting')
def accounting_group():
    """Product accounting reports."""


@accounting_group.command('aggregate')
@click.option('--min-count', default=0, show_default=True, type=int, help='Minimum rows per zone')
@click.option('--since', 'since', type=click.DateTime(formats=["%Y-%m-%d"]), default=None, help='Earliest accounting date (YYYY-MM-DD)')
@with_appcontext
def aggregate(min_count, since):
    """Print row count, total and average quantity per storage zone."""
    start: date = since.date() if since else date(1970, 1, 1)
    try:
        table = accounting_service.get_aggregate_records(min_count, start)
    except AccountingError as e:
        raise click.ClickException(str(e))

    if not len(table):
        click.echo("No zones match.")
        return

    for row in table:
        click.echo(
            f"{row['storage_id']:>5}  {row['zone_name'] or '-':<20} "
            f"count={row['record_count']:<5} total={row['total_quantity']:<7} avg={row['average_quantity']:.2f}"
        )


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(accounting_group)
