"""
Quantity cascade — consume stock at one packaging level, adjust the others.

Given the hierarchy box(1) → strip(10) → tablet(10), taking 2 strips
also takes 2/10 box and 2*10 tablets:

    box 5 → 4.8, strip 50 → 48, tablet 500 → 480

Rules:
    - Levels above the target (coarser units) are reduced by qty / factor,
      with no negative guard.
    - Levels below the target (finer units) are reduced by qty * factor and
      must not go negative.
    - Results are rounded to 2 places; if any quantity ends up <= 0 the
      whole set is zeroed.
"""

from __future__ import annotations

import copy
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from packman.exceptions import PackagingError
from packman.hierarchy import (
    DividendEntry,
    UomQuantity,
    cumulative_factor,
    find_uom,
    to_decimal,
)

logger = logging.getLogger('packman')

CENT = Decimal('0.01')


def round_quantity(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _entry_for(quantities: list[UomQuantity], uom: str) -> UomQuantity | None:
    for entry in quantities:
        if entry.uom == uom:
            return entry
    return None


def cascade_reduce(
    quantities: Iterable[UomQuantity],
    target_uom: str,
    target_qty,
    hierarchy: list[DividendEntry],
) -> list[UomQuantity]:
    """
    Deduct ``target_qty`` of ``target_uom`` and cascade to every other level.

    The caller's ``quantities`` are never mutated.

    Args:
        quantities: Current on-hand quantities, one entry per UOM
        target_uom: UOM the deduction is expressed in
        target_qty: Quantity to deduct
        hierarchy: Output of resolve_hierarchy() for the item

    Returns:
        New list of UomQuantity

    Raises:
        PackagingError('UOM_NOT_FOUND'): target_uom is not a defined level
        PackagingError('UOM_NOT_IN_QUANTITIES'): no quantity entry for target_uom
        PackagingError('INSUFFICIENT_QUANTITY'): target or a lower level would go short
    """
    if not hierarchy:
        return copy.deepcopy(list(quantities))

    updated = copy.deepcopy(list(quantities))
    for entry in updated:
        entry.quantity = to_decimal(entry.quantity)
    target_qty = to_decimal(target_qty)

    target_index = find_uom(hierarchy, target_uom)

    target = _entry_for(updated, target_uom)
    if target is None:
        raise PackagingError('UOM_NOT_IN_QUANTITIES', uom=target_uom)

    if target.quantity < target_qty:
        raise PackagingError(
            'INSUFFICIENT_QUANTITY',
            message=f'Only {target.quantity} {target_uom} available',
            uom=target_uom,
            available=target.quantity,
            requested=target_qty,
        )

    target.quantity -= target_qty

    # Coarser levels
    for index in range(target_index):
        entry = _entry_for(updated, hierarchy[index].uom)
        if entry is None:
            continue
        factor = cumulative_factor(hierarchy, index, target_index)
        entry.quantity -= target_qty / factor

    # Finer levels
    for index in range(target_index + 1, len(hierarchy)):
        entry = _entry_for(updated, hierarchy[index].uom)
        if entry is None:
            continue
        factor = cumulative_factor(hierarchy, target_index, index)
        needed = target_qty * factor
        if entry.quantity - needed < 0:
            raise PackagingError(
                'INSUFFICIENT_QUANTITY',
                message=f'Only {entry.quantity} {entry.uom} available',
                uom=entry.uom,
                available=entry.quantity,
                requested=needed,
            )
        entry.quantity -= needed

    for entry in updated:
        entry.quantity = round_quantity(entry.quantity)

    if any(entry.quantity <= 0 for entry in updated):
        logger.warning(
            "packaging.zero_floor",
            extra={
                "uom": target_uom,
                "qty": str(target_qty),
                "quantities": [e.as_dict() for e in updated],
            },
        )
        for entry in updated:
            entry.quantity = round_quantity(0)

    return updated


def expand_quantities(hierarchy: list[DividendEntry], uom: str, quantity) -> list[UomQuantity]:
    """
    Express ``quantity`` of ``uom`` at every defined level.

    Uses the same cumulative factors as cascade_reduce(): 2 strips in
    box(1) → strip(10) → tablet(10) is 0.2 box, 2 strip, 20 tablet.

    Raises:
        PackagingError('UOM_NOT_FOUND'): uom is not a defined level
    """
    if not hierarchy:
        return []

    quantity = to_decimal(quantity)
    base_index = find_uom(hierarchy, uom)

    result = []
    for index, entry in enumerate(hierarchy):
        if index < base_index:
            value = quantity / cumulative_factor(hierarchy, index, base_index)
        elif index > base_index:
            value = quantity * cumulative_factor(hierarchy, base_index, index)
        else:
            value = quantity
        result.append(UomQuantity(entry.uom, round_quantity(value)))
    return result
