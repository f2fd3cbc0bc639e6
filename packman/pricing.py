"""
Unit price resolution — cost of a quantity at a given packaging level.
"""

from __future__ import annotations

from decimal import Decimal

from packman.exceptions import PackagingError
from packman.hierarchy import StockItemDefinition, to_decimal


def resolve_unit_price(item: StockItemDefinition | None, target_uom: str, target_qty) -> Decimal:
    """
    Cost price of ``target_uom`` times ``target_qty``.

    Levels are matched by UOM in order level0, level1, level2; no rounding
    is applied.

    Raises:
        PackagingError('ITEM_NOT_FOUND'): item is None
        PackagingError('UOM_NOT_FOUND'): no level has target_uom
    """
    if item is None:
        raise PackagingError('ITEM_NOT_FOUND')

    for level in item.levels():
        if level is not None and level.uom == target_uom:
            return level.cost_price * to_decimal(target_qty)

    raise PackagingError('UOM_NOT_FOUND', uom=target_uom)
