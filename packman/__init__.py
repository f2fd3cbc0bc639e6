"""
Django Packman — Packaged stock at every unit of measure.

A stock item is kept at up to three packaging levels (box → strip → tablet).
Taking stock out at one level cascades to the others.

Usage:
    from packman import packaging, PackagingError

    allocation = packaging.allocate(5, paracetamol)   # 5 box, 50 strip, 500 tablet
    packaging.consume(2, 'strip', allocation)          # 4.8 box, 48 strip, 480 tablet
    packaging.unit_price(paracetamol, 'strip', 3)      # cost of 3 strips
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'packaging':
        from packman.service import Packaging
        return Packaging
    elif name == 'PackagingError':
        from packman.exceptions import PackagingError
        return PackagingError
    elif name == 'StockItem':
        from packman.models.stock_item import StockItem
        return StockItem
    elif name == 'AllocatedStock':
        from packman.models.allocation import AllocatedStock
        return AllocatedStock
    elif name == 'AllocationStatus':
        from packman.models.enums import AllocationStatus
        return AllocationStatus
    elif name == 'StockItemDefinition':
        from packman.hierarchy import StockItemDefinition
        return StockItemDefinition
    elif name == 'UomQuantity':
        from packman.hierarchy import UomQuantity
        return UomQuantity
    elif name == 'resolve_hierarchy':
        from packman.hierarchy import resolve_hierarchy
        return resolve_hierarchy
    elif name == 'cascade_reduce':
        from packman.cascade import cascade_reduce
        return cascade_reduce
    elif name == 'resolve_unit_price':
        from packman.pricing import resolve_unit_price
        return resolve_unit_price
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'packaging',
    'PackagingError',
    'StockItem',
    'AllocatedStock',
    'AllocationStatus',
    'StockItemDefinition',
    'UomQuantity',
    'resolve_hierarchy',
    'cascade_reduce',
    'resolve_unit_price',
]

__version__ = '0.1.0'
