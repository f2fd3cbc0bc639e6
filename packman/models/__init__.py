"""
Packman Models.

- StockItem: A stocked product and its packaging structure
- AllocatedStock: A lot with quantities tracked per UOM
"""

from packman.models.allocation import AllocatedStock
from packman.models.enums import AllocationStatus, ItemStatus, ItemType
from packman.models.stock_item import StockItem

__all__ = [
    'ItemType',
    'ItemStatus',
    'AllocationStatus',
    'StockItem',
    'AllocatedStock',
]
