"""
Packaging hierarchy — the ordered list of defined UOM levels of a stock item.

A stock item is stocked at up to three packaging levels:

    level0  base packaging            (box)
    level1  packagingStructure.level1 (strip, multiplier 10)
    level2  packagingStructure.level2 (tablet, multiplier 10)

Only *defined* levels take part in conversions. The hierarchy is derived
fresh on every call and never cached.

Examples:
    >>> item = StockItemDefinition.from_document({
    ...     'level0': {'uom': 'box', 'costPrice': 100},
    ...     'packagingStructure': {
    ...         'level1': {'uom': 'strip', 'costPrice': 10, 'multiplier': 10},
    ...     },
    ... })
    >>> [(e.uom, e.m_factor) for e in resolve_hierarchy(item)]
    [('box', Decimal('1')), ('strip', Decimal('10'))]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from packman.exceptions import PackagingError


LEVELS = ('level0', 'level1', 'level2')


def to_decimal(value: Any, path: str | None = None) -> Decimal:
    """
    Coerce int/float/str/None to Decimal (floats go through str: 0.1 stays 0.1).

    Raises:
        PackagingError('INVALID_PACKAGING'): Non-numeric packaging value at ``path``
        PackagingError('INVALID_QUANTITY'): Non-numeric quantity (no ``path``)
    """
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        if path is None:
            raise PackagingError('INVALID_QUANTITY', requested=value) from e
        raise PackagingError(
            'INVALID_PACKAGING',
            message=f'{path} must be a number',
            field=path,
            value=value,
        ) from e


@dataclass(frozen=True)
class PackagingLevel:
    """One packaging tier. ``multiplier`` is None for level0."""

    uom: str = ''
    cost_price: Decimal = Decimal('0')
    sale_price: Decimal = Decimal('0')
    multiplier: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict | None, base: bool = False,
                  prefix: str = 'level0') -> PackagingLevel | None:
        """
        Build from a stored level document (camelCase or snake_case keys).

        ``prefix`` is the level's dotted path, used in INVALID_PACKAGING errors.
        """
        if not data:
            return None
        multiplier = None
        if not base:
            multiplier = to_decimal(data.get('multiplier'), f'{prefix}.multiplier')
        return cls(
            uom=(data.get('uom') or '').strip(),
            cost_price=to_decimal(
                data.get('costPrice', data.get('cost_price')), f'{prefix}.cost_price',
            ),
            sale_price=to_decimal(
                data.get('salePrice', data.get('sale_price')), f'{prefix}.sale_price',
            ),
            multiplier=multiplier,
        )


@dataclass(frozen=True)
class StockItemDefinition:
    """A stocked product's packaging structure."""

    level0: PackagingLevel = field(default_factory=PackagingLevel)
    level1: PackagingLevel | None = None
    level2: PackagingLevel | None = None

    @classmethod
    def from_document(cls, doc: dict) -> StockItemDefinition:
        """
        Build from the stored document shape:

            {"level0": {...}, "packagingStructure": {"level1": {...}, "level2": {...}}}
        """
        structure = doc.get('packagingStructure') or doc.get('packaging_structure') or {}
        return cls(
            level0=PackagingLevel.from_dict(doc.get('level0'), base=True) or PackagingLevel(),
            level1=PackagingLevel.from_dict(
                structure.get('level1'), prefix='packagingStructure.level1',
            ),
            level2=PackagingLevel.from_dict(
                structure.get('level2'), prefix='packagingStructure.level2',
            ),
        )

    def levels(self) -> list[PackagingLevel | None]:
        """Levels in evaluation order, absent ones included as None."""
        return [self.level0, self.level1, self.level2]


@dataclass(frozen=True)
class DividendEntry:
    """A defined level in the hierarchy: its UOM and multiplier."""

    uom: str
    m_factor: Decimal


@dataclass
class UomQuantity:
    """On-hand quantity for one UOM."""

    uom: str
    quantity: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> UomQuantity:
        return cls(uom=data.get('uom') or '', quantity=to_decimal(data.get('quantity')))

    def as_dict(self) -> dict[str, str]:
        return {'uom': self.uom, 'quantity': str(self.quantity)}


def is_defined_level(level: PackagingLevel | None, base: bool = False) -> bool:
    """
    True if the level takes part in the hierarchy.

    level0 needs a UOM and a cost price; level1/level2 also need a multiplier.
    Zero counts as missing.
    """
    if level is None:
        return False
    if not (level.uom and level.cost_price):
        return False
    return base or bool(level.multiplier)


def resolve_hierarchy(item: StockItemDefinition | None) -> list[DividendEntry]:
    """
    Ordered defined levels of ``item``, level0 first.

    A missing item (None) yields an empty list, which callers treat as
    "nothing to cascade".
    """
    if item is None:
        return []

    entries = []
    if is_defined_level(item.level0, base=True):
        entries.append(DividendEntry(item.level0.uom, Decimal('1')))
    for level in (item.level1, item.level2):
        if is_defined_level(level):
            entries.append(DividendEntry(level.uom, level.multiplier))
    return entries


def find_uom(hierarchy: list[DividendEntry], uom: str) -> int:
    """
    Index of ``uom`` in the hierarchy.

    Raises:
        PackagingError('UOM_NOT_FOUND'): If no defined level has that UOM
    """
    for index, entry in enumerate(hierarchy):
        if entry.uom == uom:
            return index
    raise PackagingError('UOM_NOT_FOUND', uom=uom)


def cumulative_factor(hierarchy: list[DividendEntry], start: int, end: int) -> Decimal:
    """Product of m_factor for indices in (start, end]."""
    factor = Decimal('1')
    for entry in hierarchy[start + 1:end + 1]:
        factor *= entry.m_factor
    return factor


def validate_packaging(item: StockItemDefinition) -> None:
    """
    Reject negative packaging numbers.

    Raises:
        PackagingError('INVALID_PACKAGING'): On the first negative cost price,
            sale price or multiplier, with ``field`` set to its dotted path
    """
    for name, level in zip(LEVELS, item.levels()):
        if level is None:
            continue
        prefix = name if name == 'level0' else f'packagingStructure.{name}'
        for attr in ('multiplier', 'cost_price', 'sale_price'):
            value = getattr(level, attr)
            if value is not None and value < 0:
                raise PackagingError(
                    'INVALID_PACKAGING',
                    message=f'{name} {attr} cannot be negative',
                    field=f'{prefix}.{attr}',
                    value=value,
                )
