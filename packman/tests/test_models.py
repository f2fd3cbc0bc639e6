"""
Tests for Packman models and admin.
"""

from decimal import Decimal

import pytest
from django.contrib import admin
from django.core.exceptions import ValidationError

from packman.admin import AllocatedStockAdmin, StockItemAdmin
from packman.models import AllocatedStock, AllocationStatus, StockItem
from packman.service import Packaging


pytestmark = pytest.mark.django_db


class TestStockItem:
    """Tests for StockItem."""

    def test_as_definition(self, paracetamol):
        definition = paracetamol.as_definition()

        assert definition.level0.uom == 'box'
        assert definition.level0.multiplier is None
        assert definition.level1.cost_price == Decimal('10')
        assert definition.level2.sale_price == Decimal('1.50')

    def test_active_queryset(self, paracetamol, syringe):
        syringe.status = 'inactive'
        syringe.save()

        assert list(StockItem.objects.active()) == [paracetamol]

    def test_clean_rejects_negative_multiplier(self, paracetamol):
        paracetamol.level1_multiplier = Decimal('-2')

        with pytest.raises(ValidationError) as exc:
            paracetamol.full_clean()

        assert 'level1_multiplier' in exc.value.message_dict

    def test_clean_rejects_min_above_max(self, paracetamol):
        paracetamol.min_quantity = Decimal('500')

        with pytest.raises(ValidationError) as exc:
            paracetamol.full_clean()

        assert 'min_quantity' in exc.value.message_dict

    def test_clean_accepts_valid_item(self, paracetamol):
        paracetamol.full_clean()


class TestAllocatedStock:
    """Tests for AllocatedStock quantity helpers."""

    def test_quantity_of_missing_uom(self, paracetamol):
        allocation = AllocatedStock.objects.create(
            stock_item=paracetamol,
            quantity=Decimal('1'),
            uom='box',
            quantities_by_uom=[{'uom': 'box', 'quantity': 1}],
        )

        assert allocation.quantity_of('box') == Decimal('1')
        assert allocation.quantity_of('strip') == Decimal('0')


class TestAdmin:
    """Tests for the admin registrations."""

    def test_registered(self):
        assert admin.site.is_registered(StockItem)
        assert admin.site.is_registered(AllocatedStock)

    def test_hierarchy_display(self, paracetamol, syringe):
        model_admin = StockItemAdmin(StockItem, admin.site)

        assert model_admin.hierarchy_display(paracetamol) == 'box ×1 → strip ×10 → tablet ×10'
        assert model_admin.hierarchy_display(syringe) == 'piece ×1'

    def test_quantities_display(self, paracetamol):
        allocation = Packaging.allocate(2, paracetamol)
        model_admin = AllocatedStockAdmin(AllocatedStock, admin.site)

        assert model_admin.quantities_display(allocation) == '2.00 box, 20.00 strip, 200.00 tablet'

    def test_cancel_action(self, paracetamol, rf):
        active = Packaging.allocate(2, paracetamol)
        depleted = Packaging.allocate(1, paracetamol)
        Packaging.consume(1, 'box', depleted)
        model_admin = AllocatedStockAdmin(AllocatedStock, admin.site)
        model_admin.message_user = lambda request, message: None

        model_admin.cancel_allocations(rf.get('/'), AllocatedStock.objects.all())

        active.refresh_from_db()
        depleted.refresh_from_db()
        assert active.status == AllocationStatus.CANCELLED
        assert depleted.status == AllocationStatus.DEPLETED
