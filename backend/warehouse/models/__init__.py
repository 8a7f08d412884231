from .staff import Employee
from .catalog import Product, Supplier, Supply
from .storage import Warehouse, StorageZone
from .accounting import ProductAccounting

__all__ = [
    'Employee',
    'Product', 'Supplier', 'Supply',
    'Warehouse', 'StorageZone',
    'ProductAccounting',
]
