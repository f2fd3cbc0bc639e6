"""
AllocatedStock model — a lot of a stock item with quantities per UOM.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from packman.hierarchy import UomQuantity
from packman.models.enums import AllocationStatus


class AllocatedStock(models.Model):
    """
    Stock allocated from a stock item, tracked at every packaging level.

    ``quantities_by_uom`` holds one ``{"uom", "quantity"}`` entry per
    defined level. It only changes through ``packaging.consume()``, which
    keeps the levels consistent.
    """

    stock_item = models.ForeignKey(
        'packman.StockItem',
        on_delete=models.PROTECT,
        related_name='allocations',
        verbose_name=_('Stock item'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Allocated quantity'),
        help_text=_('Quantity originally allocated, in the allocation UOM.'),
    )
    uom = models.CharField(max_length=30, verbose_name=_('UOM'))
    quantities_by_uom = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_('Quantities by UOM'),
    )
    status = models.CharField(
        max_length=20,
        choices=AllocationStatus.choices,
        default=AllocationStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    reference = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Reference'),
        help_text=_('Ex: purchase record number'),
    )
    allocated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Allocated by'),
    )
    expiry_date = models.DateField(null=True, blank=True, verbose_name=_('Expiry date'))
    metadata = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Allocated stock')
        verbose_name_plural = _('Allocated stock')
        ordering = ['-created_at']

    def __str__(self) -> str:
        return f"{self.stock_item} ({self.quantity} {self.uom})"

    @property
    def quantities(self) -> list[UomQuantity]:
        return [UomQuantity.from_dict(entry) for entry in self.quantities_by_uom or []]

    @quantities.setter
    def quantities(self, value: list[UomQuantity]) -> None:
        self.quantities_by_uom = [entry.as_dict() for entry in value]

    def quantity_of(self, uom: str) -> Decimal:
        """On-hand quantity for ``uom`` (0 if there is no entry)."""
        for entry in self.quantities:
            if entry.uom == uom:
                return entry.quantity
        return Decimal('0')
