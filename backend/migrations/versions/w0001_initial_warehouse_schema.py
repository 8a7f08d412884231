"""initial warehouse accounting schema

Revision ID: w0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the warehouse schema from scratch:
- employees, products, suppliers, supplies: reference entities
- warehouses, storage_zones: storage topology
- product_accounting: accounting fact table

product_accounting.employee_id / supply_id / storage_id deliberately have no
foreign-key constraints. Existence is checked by the accounting service at
write time, and deleting a referenced entity must not touch fact rows.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'w0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # ============================================================================
    # employees
    # ============================================================================
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_employees_last_first', 'employees', ['last_name', 'first_name'])

    # ============================================================================
    # products / suppliers / supplies
    # ============================================================================
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('product_type', sa.String(length=32), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('photo', sa.LargeBinary(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_products_name', 'products', ['name'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_name', sa.String(length=255), nullable=False),
        sa.Column('contact_person', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'supplies',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), nullable=False),
        sa.Column('supply_date', sa.Date(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_supplies_product_id', 'supplies', ['product_id'])
    op.create_index('ix_supplies_supplier_id', 'supplies', ['supplier_id'])
    op.create_index('ix_supplies_product_date', 'supplies', ['product_id', 'supply_date'])

    # ============================================================================
    # warehouses / storage_zones
    # ============================================================================
    op.create_table(
        'warehouses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', name='uq_warehouses_name'),
        sqlite_autoincrement=True
    )

    op.create_table(
        'storage_zones',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('warehouse_id', sa.Integer(), nullable=False),
        sa.Column('zone_name', sa.String(length=120), nullable=False),
        sa.Column('zone_type', sa.String(length=32), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['warehouse_id'], ['warehouses.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('warehouse_id', 'zone_name', name='uq_storage_zones_warehouse_name'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_storage_zones_warehouse_id', 'storage_zones', ['warehouse_id'])

    # ============================================================================
    # product_accounting: fact table (no FK constraints, see module docstring)
    # ============================================================================
    op.create_table(
        'product_accounting',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('accounting_date', sa.Date(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=False),
        sa.Column('supply_id', sa.Integer(), nullable=False),
        sa.Column('storage_id', sa.Integer(), nullable=False),
        sa.Column('last_movement_date', sa.Date(), nullable=True),
        sa.Column('movement_status', sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('quantity > 0', name='ck_product_accounting_quantity_positive'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_product_accounting_employee_id', 'product_accounting', ['employee_id'])
    op.create_index('ix_product_accounting_supply_id', 'product_accounting', ['supply_id'])
    op.create_index('ix_product_accounting_storage_id', 'product_accounting', ['storage_id'])
    op.create_index('ix_product_accounting_storage_date', 'product_accounting', ['storage_id', 'accounting_date'])


def downgrade():
    op.drop_index('ix_product_accounting_storage_date', table_name='product_accounting')
    op.drop_index('ix_product_accounting_storage_id', table_name='product_accounting')
    op.drop_index('ix_product_accounting_supply_id', table_name='product_accounting')
    op.drop_index('ix_product_accounting_employee_id', table_name='product_accounting')
    op.drop_table('product_accounting')

    op.drop_index('ix_storage_zones_warehouse_id', table_name='storage_zones')
    op.drop_table('storage_zones')
    op.drop_table('warehouses')

    op.drop_index('ix_supplies_product_date', table_name='supplies')
    op.drop_index('ix_supplies_supplier_id', table_name='supplies')
    op.drop_index('ix_supplies_product_id', table_name='supplies')
    op.drop_table('supplies')
    op.drop_table('suppliers')

    op.drop_index('ix_products_name', table_name='products')
    op.drop_table('products')

    op.drop_index('ix_employees_last_first', table_name='employees')
    op.drop_table('employees')
