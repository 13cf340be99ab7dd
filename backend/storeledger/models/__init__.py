from .catalog import Category, Brand, Product, KitItem
from .customers import Customer
from .sales import Sale, SaleLine
from .inventory import StockMove
from .finance import Receivable, Payable
from .purchasing import PurchaseOrderItem, PurchaseOrder, PurchaseOrderLine

__all__ = [
    'Category', 'Brand', 'Product', 'KitItem',
    'Customer',
    'Sale', 'SaleLine',
    'StockMove',
    'Receivable', 'Payable',
    'PurchaseOrderItem', 'PurchaseOrder', 'PurchaseOrderLine',
]
