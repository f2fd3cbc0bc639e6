"""
Pytest fixtures for Packman tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from packman.adapters import reset_item_lookup
from packman.hierarchy import DividendEntry, StockItemDefinition, UomQuantity
from packman.models import StockItem


User = get_user_model()


@pytest.fixture(autouse=True)
def _reset_lookup():
    """Drop the cached item lookup between tests."""
    reset_item_lookup()
    yield
    reset_item_lookup()


@pytest.fixture
def tablet_document():
    """Stored document for a box → strip → tablet item."""
    return {
        'level0': {'uom': 'box', 'costPrice': 100, 'salePrice': 150},
        'packagingStructure': {
            'level1': {'uom': 'strip', 'costPrice': 10, 'salePrice': 15, 'multiplier': 10},
            'level2': {'uom': 'tablet', 'costPrice': 1, 'salePrice': 1.5, 'multiplier': 10},
        },
    }


@pytest.fixture
def tablet_item(tablet_document):
    """Definition with all three levels defined."""
    return StockItemDefinition.from_document(tablet_document)


@pytest.fixture
def tablet_hierarchy():
    """1 box = 10 strips, 1 strip = 10 tablets."""
    return [
        DividendEntry('box', Decimal('1')),
        DividendEntry('strip', Decimal('10')),
        DividendEntry('tablet', Decimal('10')),
    ]


@pytest.fixture
def full_stock():
    """5 box, 50 strip, 500 tablet."""
    return [
        UomQuantity('box', Decimal('5')),
        UomQuantity('strip', Decimal('50')),
        UomQuantity('tablet', Decimal('500')),
    ]


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='pharmacist',
        password='testpass123'
    )


@pytest.fixture
def paracetamol(db):
    """Stock item: box → strip(10) → tablet(10)."""
    return StockItem.objects.create(
        code='PCM-500',
        name='Paracetamol 500mg',
        level0_uom='box',
        level0_cost_price=Decimal('100'),
        level0_sale_price=Decimal('150'),
        level1_uom='strip',
        level1_cost_price=Decimal('10'),
        level1_sale_price=Decimal('15'),
        level1_multiplier=Decimal('10'),
        level2_uom='tablet',
        level2_cost_price=Decimal('1'),
        level2_sale_price=Decimal('1.50'),
        level2_multiplier=Decimal('10'),
        min_quantity=Decimal('1'),
        max_quantity=Decimal('100'),
    )


@pytest.fixture
def syringe(db):
    """Stock item sold only by the piece (level0 only)."""
    return StockItem.objects.create(
        code='SYR-5ML',
        name='Syringe 5ml',
        level0_uom='piece',
        level0_cost_price=Decimal('2.50'),
        level1_uom='',
        level1_cost_price=Decimal('0'),
        level2_uom='',
        level2_cost_price=Decimal('0'),
    )
