"""
Tests for packaging hierarchy resolution and validation.
"""

from decimal import Decimal

import pytest

from packman import PackagingError
from packman.hierarchy import (
    PackagingLevel,
    StockItemDefinition,
    UomQuantity,
    cumulative_factor,
    find_uom,
    is_defined_level,
    resolve_hierarchy,
    to_decimal,
    validate_packaging,
)


class TestResolveHierarchy:
    """Tests for resolve_hierarchy()."""

    def test_all_levels_defined(self, tablet_item):
        """Three defined levels come back in level0, level1, level2 order."""
        entries = resolve_hierarchy(tablet_item)

        assert [e.uom for e in entries] == ['box', 'strip', 'tablet']
        assert [e.m_factor for e in entries] == [Decimal('1'), Decimal('10'), Decimal('10')]

    def test_missing_item_is_empty(self):
        """Not found → nothing to cascade."""
        assert resolve_hierarchy(None) == []

    def test_zero_multiplier_skips_level(self):
        """level1 with multiplier 0 is left out even with uom and cost price."""
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'box', 'costPrice': 10},
            'packagingStructure': {
                'level1': {'uom': 'strip', 'costPrice': 2, 'multiplier': 0},
            },
        })

        entries = resolve_hierarchy(item)

        assert len(entries) == 1
        assert entries[0].uom == 'box'

    def test_missing_multiplier_skips_level(self):
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'box', 'costPrice': 10},
            'packagingStructure': {'level1': {'uom': 'strip', 'costPrice': 2}},
        })

        assert [e.uom for e in resolve_hierarchy(item)] == ['box']

    def test_level0_without_cost_price_skipped(self):
        """level0 needs a cost price too; lower levels still count."""
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'box', 'costPrice': 0},
            'packagingStructure': {
                'level1': {'uom': 'strip', 'costPrice': 2, 'multiplier': 10},
            },
        })

        entries = resolve_hierarchy(item)

        assert [(e.uom, e.m_factor) for e in entries] == [('strip', Decimal('10'))]

    def test_level2_without_level1(self):
        """Levels are independent: level2 can follow level0 directly."""
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'bottle', 'costPrice': 50},
            'packagingStructure': {
                'level1': {'uom': '', 'costPrice': 0, 'multiplier': 1},
                'level2': {'uom': 'ml', 'costPrice': 1, 'multiplier': 100},
            },
        })

        assert [e.uom for e in resolve_hierarchy(item)] == ['bottle', 'ml']

    def test_empty_definition(self):
        assert resolve_hierarchy(StockItemDefinition()) == []


class TestDefinedLevel:
    """Tests for is_defined_level()."""

    def test_none(self):
        assert not is_defined_level(None)

    def test_base_level_ignores_multiplier(self):
        level = PackagingLevel(uom='box', cost_price=Decimal('5'))
        assert is_defined_level(level, base=True)
        assert not is_defined_level(level)

    def test_blank_uom(self):
        level = PackagingLevel(uom='', cost_price=Decimal('5'), multiplier=Decimal('2'))
        assert not is_defined_level(level)


class TestFromDocument:
    """Tests for StockItemDefinition.from_document()."""

    def test_camel_case_keys(self, tablet_item):
        assert tablet_item.level0.cost_price == Decimal('100')
        assert tablet_item.level0.multiplier is None
        assert tablet_item.level2.sale_price == Decimal('1.5')

    def test_snake_case_keys(self):
        item = StockItemDefinition.from_document({
            'level0': {'uom': ' box ', 'cost_price': '12.5'},
            'packaging_structure': {
                'level1': {'uom': 'strip', 'cost_price': 2, 'multiplier': 4},
            },
        })

        assert item.level0.uom == 'box'
        assert item.level0.cost_price == Decimal('12.5')
        assert item.level1.multiplier == Decimal('4')
        assert item.level2 is None

    def test_floats_keep_their_decimal_text(self):
        assert to_decimal(0.1) == Decimal('0.1')
        assert to_decimal(None) == Decimal('0')

    def test_non_numeric_multiplier(self):
        with pytest.raises(PackagingError) as exc:
            StockItemDefinition.from_document({
                'level0': {'uom': 'box', 'costPrice': 100},
                'packagingStructure': {
                    'level1': {'uom': 'strip', 'costPrice': 10, 'multiplier': 'ten'},
                },
            })

        assert exc.value.code == 'INVALID_PACKAGING'
        assert exc.value.data['field'] == 'packagingStructure.level1.multiplier'

    def test_non_numeric_base_price(self):
        with pytest.raises(PackagingError) as exc:
            StockItemDefinition.from_document({'level0': {'uom': 'box', 'costPrice': 'n/a'}})

        assert exc.value.code == 'INVALID_PACKAGING'
        assert exc.value.data['field'] == 'level0.cost_price'

    def test_non_numeric_quantity(self):
        with pytest.raises(PackagingError) as exc:
            UomQuantity.from_dict({'uom': 'box', 'quantity': 'five'})

        assert exc.value.code == 'INVALID_QUANTITY'


class TestHelpers:
    """Tests for find_uom() and cumulative_factor()."""

    def test_find_uom(self, tablet_hierarchy):
        assert find_uom(tablet_hierarchy, 'tablet') == 2

    def test_find_unknown_uom(self, tablet_hierarchy):
        with pytest.raises(PackagingError) as exc:
            find_uom(tablet_hierarchy, 'pallet')

        assert exc.value.code == 'UOM_NOT_FOUND'
        assert exc.value.data['uom'] == 'pallet'

    def test_cumulative_factor(self, tablet_hierarchy):
        """Product of multipliers in (start, end]."""
        assert cumulative_factor(tablet_hierarchy, 0, 2) == Decimal('100')
        assert cumulative_factor(tablet_hierarchy, 1, 2) == Decimal('10')
        assert cumulative_factor(tablet_hierarchy, 1, 1) == Decimal('1')

    def test_uom_quantity_dict(self):
        entry = UomQuantity.from_dict({'uom': 'strip', 'quantity': 4.8})

        assert entry.quantity == Decimal('4.8')
        assert entry.as_dict() == {'uom': 'strip', 'quantity': '4.8'}


class TestValidatePackaging:
    """Tests for validate_packaging()."""

    def test_valid(self, tablet_item):
        validate_packaging(tablet_item)

    def test_negative_multiplier(self):
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'box', 'costPrice': 10},
            'packagingStructure': {
                'level1': {'uom': 'strip', 'costPrice': 2, 'multiplier': -10},
            },
        })

        with pytest.raises(PackagingError) as exc:
            validate_packaging(item)

        assert exc.value.code == 'INVALID_PACKAGING'
        assert exc.value.data['field'] == 'packagingStructure.level1.multiplier'

    def test_negative_base_price(self):
        item = StockItemDefinition.from_document({
            'level0': {'uom': 'box', 'costPrice': 10, 'salePrice': -1},
        })

        with pytest.raises(PackagingError) as exc:
            validate_packaging(item)

        assert exc.value.data['field'] == 'level0.sale_price'
