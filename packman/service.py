"""
Packaging Service — The single public interface for packaged stock operations.

Usage:
    from packman import packaging, PackagingError

    packaging.hierarchy(item)                       # [box x1, strip x10, tablet x10]
    packaging.unit_price(item, 'strip', 3)          # Decimal('30')
    allocation = packaging.allocate(5, item)        # 5 box, 50 strip, 500 tablet
    packaging.consume(2, 'strip', allocation)       # 4.8 box, 48 strip, 480 tablet
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Iterable

from django.db import transaction

from packman.adapters.orm import get_item_lookup
from packman.cascade import cascade_reduce, expand_quantities, round_quantity
from packman.conf import packman_settings
from packman.exceptions import PackagingError
from packman.hierarchy import (
    DividendEntry,
    StockItemDefinition,
    UomQuantity,
    resolve_hierarchy,
    to_decimal,
)
from packman.models.allocation import AllocatedStock
from packman.models.enums import AllocationStatus
from packman.models.stock_item import StockItem
from packman.pricing import resolve_unit_price
from packman.protocols.lookup import ItemLookup

logger = logging.getLogger('packman')


class Packaging:
    """
    Single interface for packaged stock operations.

    ``item`` arguments accept a StockItemDefinition, a StockItem (anything
    with ``as_definition()``), a stored document dict, None, or an id that
    is resolved through the configured ItemLookup (or ``lookup=``).

    Parameter convention for state changes: (quantity, uom, target, ...)
    Follows natural language: "Consume 2 strips from this allocation"
    """

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def resolve(cls, item, lookup: ItemLookup | None = None) -> StockItemDefinition | None:
        """Packaging definition for ``item``, or None if it cannot be found."""
        if item is None:
            return None
        if isinstance(item, StockItemDefinition):
            return item
        if hasattr(item, 'as_definition'):
            return item.as_definition()
        if isinstance(item, dict):
            return StockItemDefinition.from_document(item)
        return (lookup or get_item_lookup()).get_item(item)

    @classmethod
    def hierarchy(cls, item, lookup: ItemLookup | None = None) -> list[DividendEntry]:
        """Defined packaging levels, level0 first. Unknown item → []."""
        return resolve_hierarchy(cls.resolve(item, lookup))

    @classmethod
    def reduce(cls, quantities: Iterable, uom: str, quantity, item,
               lookup: ItemLookup | None = None) -> list[UomQuantity]:
        """
        Cascade a deduction over ``quantities`` without persisting anything.

        ``quantities`` may hold UomQuantity instances or ``{"uom", "quantity"}``
        dicts. See cascade_reduce() for the rules and errors.
        """
        return cascade_reduce(
            cls._as_quantities(quantities),
            uom,
            quantity,
            cls.hierarchy(item, lookup),
        )

    @classmethod
    def unit_price(cls, item, uom: str, quantity, lookup: ItemLookup | None = None) -> Decimal:
        """
        Cost of ``quantity`` at the ``uom`` level.

        Raises:
            PackagingError('ITEM_NOT_FOUND'): If the item cannot be resolved
            PackagingError('UOM_NOT_FOUND'): If no level has that UOM
        """
        return resolve_unit_price(cls.resolve(item, lookup), uom, quantity)

    @classmethod
    def quantities_for(cls, item, uom: str, quantity,
                       lookup: ItemLookup | None = None) -> list[UomQuantity]:
        """``quantity`` of ``uom`` expressed at every defined level."""
        return expand_quantities(cls.hierarchy(item, lookup), uom, quantity)

    # ══════════════════════════════════════════════════════════════
    # ALLOCATIONS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def allocate(cls, quantity, item, uom: str | None = None, user=None,
                 reference: str = '', expiry_date=None, **metadata) -> AllocatedStock:
        """
        Allocate stock and seed its quantities at every packaging level.

        Args:
            quantity: Quantity in ``uom``
            item: StockItem instance or its pk
            uom: Allocation UOM (default: the item's first defined level)
            user: User making the allocation
            reference: Free text, e.g. purchase record number

        Raises:
            PackagingError('INVALID_QUANTITY'): If quantity <= 0
            PackagingError('ITEM_NOT_FOUND'): If item is not a StockItem
            PackagingError('UOM_NOT_FOUND'): If uom is not a defined level
            PackagingError('INVALID_QUANTITY'): If any level would be seeded
                below 0.01 (e.g. 4 tablets of a 1000-tablet box)
        """
        quantity = to_decimal(quantity)
        cls._validate_quantity(quantity)

        stock_item = item
        if not isinstance(item, StockItem):
            try:
                stock_item = StockItem.objects.filter(pk=item).first()
            except (TypeError, ValueError):
                stock_item = None
            if stock_item is None:
                raise PackagingError('ITEM_NOT_FOUND', item=item)

        hierarchy = resolve_hierarchy(stock_item.as_definition())
        if uom is None:
            uom = hierarchy[0].uom if hierarchy else stock_item.level0_uom

        if hierarchy:
            quantities = expand_quantities(hierarchy, uom, quantity)
        else:
            quantities = [UomQuantity(uom, round_quantity(quantity))]

        # A level seeded at 0.00 would zero the whole allocation on first consume
        for entry in quantities:
            if entry.quantity <= 0:
                raise PackagingError(
                    'INVALID_QUANTITY',
                    message=f'{quantity} {uom} is less than 0.01 {entry.uom}',
                    uom=entry.uom,
                    requested=quantity,
                )

        allocation = AllocatedStock(
            stock_item=stock_item,
            quantity=quantity,
            uom=uom,
            reference=reference,
            allocated_by=user,
            expiry_date=expiry_date,
            metadata=metadata,
        )
        allocation.quantities = quantities
        allocation.save()

        logger.info(
            "packaging.allocate",
            extra={
                "stock_item": str(stock_item),
                "qty": str(quantity),
                "uom": uom,
                "allocation_id": allocation.pk,
            },
        )
        return allocation

    @classmethod
    def consume(cls, quantity, uom: str, allocation: AllocatedStock,
                user=None, reason: str = '') -> AllocatedStock:
        """
        Take ``quantity`` of ``uom`` out of an allocation, cascading to all levels.

        If the cascade zeroes the allocation, its status becomes DEPLETED.

        Raises:
            PackagingError('INVALID_QUANTITY'): If quantity <= 0
            PackagingError('INVALID_STATUS'): If the allocation is cancelled
            PackagingError: Any cascade_reduce() error; nothing is saved

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on the allocation
            - Cascades from the locked row's quantities
        """
        quantity = to_decimal(quantity)
        cls._validate_quantity(quantity)

        with transaction.atomic():
            locked = (
                AllocatedStock.objects
                .select_for_update()
                .select_related('stock_item')
                .get(pk=allocation.pk)
            )

            if locked.status == AllocationStatus.CANCELLED:
                raise PackagingError('INVALID_STATUS', status=locked.status)

            updated = cascade_reduce(
                locked.quantities,
                uom,
                quantity,
                cls._allocation_hierarchy(locked),
            )
            locked.quantities = updated
            if updated and all(entry.quantity == 0 for entry in updated):
                locked.status = AllocationStatus.DEPLETED
            locked.save(update_fields=['quantities_by_uom', 'status', 'updated_at'])

            logger.info(
                "packaging.consume",
                extra={
                    "allocation_id": locked.pk,
                    "qty": str(quantity),
                    "uom": uom,
                    "reason": reason,
                    "user": getattr(user, 'pk', None),
                    "status": locked.status,
                },
            )
            return locked

    # ══════════════════════════════════════════════════════════════
    # HELPERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _validate_quantity(cls, quantity: Decimal) -> None:
        if packman_settings.VALIDATE_INPUT_QUANTITIES and quantity <= 0:
            raise PackagingError('INVALID_QUANTITY', requested=quantity)

    @classmethod
    def _allocation_hierarchy(cls, allocation: AllocatedStock) -> list[DividendEntry]:
        """
        Hierarchy to consume against.

        Items with no defined level were allocated as a single entry in the
        allocation UOM; that entry is consumed as a one-level hierarchy.
        """
        hierarchy = resolve_hierarchy(allocation.stock_item.as_definition())
        if not hierarchy:
            hierarchy = [DividendEntry(allocation.uom, Decimal('1'))]
        return hierarchy

    @classmethod
    def _as_quantities(cls, quantities: Iterable[Any]) -> list[UomQuantity]:
        return [
            entry if isinstance(entry, UomQuantity) else UomQuantity.from_dict(entry)
            for entry in quantities
        ]
