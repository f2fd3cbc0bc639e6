"""
StockItem model — a stocked product and its packaging structure.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.utils.translation import gettext_lazy as _

from packman.exceptions import PackagingError
from packman.hierarchy import PackagingLevel, StockItemDefinition, validate_packaging
from packman.models.enums import ItemStatus, ItemType


def _price_field(verbose_name):
    return models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        verbose_name=verbose_name,
    )


def _multiplier_field(verbose_name):
    return models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('1'),
        verbose_name=verbose_name,
        help_text=_('Units of this level in one unit of the level above.'),
    )


class StockItemQuerySet(models.QuerySet):

    def active(self):
        return self.filter(status=ItemStatus.ACTIVE)


class StockItem(models.Model):
    """
    A stocked product with up to three packaging levels.

    level0 is the base packaging (e.g. box). level1 and level2 are the
    packaging structure below it (e.g. strip, tablet), each with a
    multiplier. A level only counts when its UOM, cost price and (for
    level1/level2) multiplier are all set.

    Example:
        StockItem.objects.create(
            name='Paracetamol 500mg',
            level0_uom='box', level0_cost_price=100,
            level1_uom='strip', level1_cost_price=10, level1_multiplier=10,
            level2_uom='tablet', level2_cost_price=1, level2_multiplier=10,
        )
    """

    code = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Code'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Name'))
    description = models.TextField(blank=True, default='', verbose_name=_('Description'))
    type = models.CharField(
        max_length=20,
        choices=ItemType.choices,
        default=ItemType.STOCK,
        verbose_name=_('Type'),
    )
    status = models.CharField(
        max_length=20,
        choices=ItemStatus.choices,
        default=ItemStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    min_quantity = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal('0'),
        verbose_name=_('Minimum quantity'),
    )
    max_quantity = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal('0'),
        verbose_name=_('Maximum quantity'),
    )

    level0_uom = models.CharField(max_length=30, blank=True, default='', verbose_name=_('Base UOM'))
    level0_cost_price = _price_field(_('Base cost price'))
    level0_sale_price = _price_field(_('Base sale price'))

    level1_uom = models.CharField(max_length=30, blank=True, default='', verbose_name=_('Level 1 UOM'))
    level1_cost_price = _price_field(_('Level 1 cost price'))
    level1_sale_price = _price_field(_('Level 1 sale price'))
    level1_multiplier = _multiplier_field(_('Level 1 multiplier'))

    level2_uom = models.CharField(max_length=30, blank=True, default='', verbose_name=_('Level 2 UOM'))
    level2_cost_price = _price_field(_('Level 2 cost price'))
    level2_sale_price = _price_field(_('Level 2 sale price'))
    level2_multiplier = _multiplier_field(_('Level 2 multiplier'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockItemQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock item')
        verbose_name_plural = _('Stock items')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['code'],
                condition=~models.Q(code=''),
                name='unique_stock_item_code',
            )
        ]

    def __str__(self) -> str:
        return f"{self.code} {self.name}".strip()

    def as_definition(self) -> StockItemDefinition:
        """Packaging structure as an engine definition."""
        return StockItemDefinition(
            level0=PackagingLevel(
                uom=self.level0_uom.strip(),
                cost_price=self.level0_cost_price,
                sale_price=self.level0_sale_price,
            ),
            level1=PackagingLevel(
                uom=self.level1_uom.strip(),
                cost_price=self.level1_cost_price,
                sale_price=self.level1_sale_price,
                multiplier=self.level1_multiplier,
            ),
            level2=PackagingLevel(
                uom=self.level2_uom.strip(),
                cost_price=self.level2_cost_price,
                sale_price=self.level2_sale_price,
                multiplier=self.level2_multiplier,
            ),
        )

    def clean(self):
        super().clean()
        if self.min_quantity > self.max_quantity:
            raise ValidationError({
                'min_quantity': _('Minimum quantity cannot be greater than maximum quantity.'),
            })
        try:
            validate_packaging(self.as_definition())
        except PackagingError as e:
            # "packagingStructure.level1.cost_price" -> "level1_cost_price"
            level, attr = e.data['field'].split('.')[-2:]
            raise ValidationError({f'{level}_{attr}': e.message}) from e
