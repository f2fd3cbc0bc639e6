"""
Packman Admin.

- StockItem: list + edit, with the resolved packaging hierarchy shown
- AllocatedStock: read-only (quantities only change via the packaging service)
  with a "cancel" action
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from packman.hierarchy import resolve_hierarchy
from packman.models import AllocatedStock, AllocationStatus, StockItem

logger = logging.getLogger(__name__)


# =========================================================================
# STOCK ITEM ADMIN
# =========================================================================

@admin.register(StockItem)
class StockItemAdmin(admin.ModelAdmin):
    """StockItem admin — editable."""

    list_display = ['code', 'name', 'type', 'status', 'hierarchy_display']
    list_filter = ['type', 'status']
    search_fields = ['code', 'name']
    readonly_fields = ['hierarchy_display', 'created_at', 'updated_at']
    fieldsets = [
        (None, {
            'fields': ['code', 'name', 'description', 'type', 'status',
                       'min_quantity', 'max_quantity'],
        }),
        (_('Base packaging'), {
            'fields': ['level0_uom', 'level0_cost_price', 'level0_sale_price'],
        }),
        (_('Packaging structure'), {
            'fields': [
                ('level1_uom', 'level1_multiplier', 'level1_cost_price', 'level1_sale_price'),
                ('level2_uom', 'level2_multiplier', 'level2_cost_price', 'level2_sale_price'),
                'hierarchy_display',
            ],
        }),
        (_('Dates'), {
            'fields': ['created_at', 'updated_at'],
        }),
    ]

    @admin.display(description=_('Hierarchy'))
    def hierarchy_display(self, obj):
        if obj is None or obj.pk is None:
            return '-'
        entries = resolve_hierarchy(obj.as_definition())
        if not entries:
            return '-'
        return ' → '.join(f'{e.uom} ×{e.m_factor.normalize():f}' for e in entries)


# =========================================================================
# ALLOCATED STOCK ADMIN (read-only with cancel action)
# =========================================================================

@admin.register(AllocatedStock)
class AllocatedStockAdmin(admin.ModelAdmin):
    """AllocatedStock admin — read-only with cancel action."""

    list_display = ['id', 'stock_item', 'quantity', 'uom', 'quantities_display',
                    'status', 'expiry_date', 'created_at']
    list_filter = ['status', 'expiry_date']
    search_fields = ['reference', 'stock_item__code', 'stock_item__name']
    readonly_fields = ['stock_item', 'quantity', 'uom', 'quantities_by_uom', 'status',
                       'reference', 'allocated_by', 'expiry_date', 'metadata',
                       'created_at', 'updated_at']
    actions = ['cancel_allocations']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.display(description=_('On hand'))
    def quantities_display(self, obj):
        return ', '.join(f'{e.quantity} {e.uom}' for e in obj.quantities) or '-'

    @admin.action(description=_('Cancel selected allocations'))
    def cancel_allocations(self, request, queryset):
        count = queryset.filter(status=AllocationStatus.ACTIVE).update(
            status=AllocationStatus.CANCELLED,
        )
        logger.info("cancel_allocations: %s allocation(s) cancelled", count)
        self.message_user(request, _('{count} allocation(s) cancelled.').format(count=count))
