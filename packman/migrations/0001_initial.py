"""
Initial migration for Packman models.
"""

from decimal import Decimal
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _price(verbose_name):
    return models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, verbose_name=verbose_name)


def _multiplier(verbose_name):
    return models.DecimalField(
        decimal_places=3, default=Decimal('1'), max_digits=12,
        help_text='Units of this level in one unit of the level above.',
        verbose_name=verbose_name,
    )


class Migration(migrations.Migration):
    """Create Packman models: StockItem, AllocatedStock."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='StockItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(blank=True, default='', max_length=50, verbose_name='Code')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('type', models.CharField(choices=[('stock', 'Stock'), ('service', 'Service'), ('fixed_asset', 'Fixed asset')], default='stock', max_length=20, verbose_name='Type')),
                ('status', models.CharField(choices=[('active', 'Active'), ('inactive', 'Inactive')], db_index=True, default='active', max_length=20, verbose_name='Status')),
                ('min_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Minimum quantity')),
                ('max_quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=12, verbose_name='Maximum quantity')),
                ('level0_uom', models.CharField(blank=True, default='', max_length=30, verbose_name='Base UOM')),
                ('level0_cost_price', _price('Base cost price')),
                ('level0_sale_price', _price('Base sale price')),
                ('level1_uom', models.CharField(blank=True, default='', max_length=30, verbose_name='Level 1 UOM')),
                ('level1_cost_price', _price('Level 1 cost price')),
                ('level1_sale_price', _price('Level 1 sale price')),
                ('level1_multiplier', _multiplier('Level 1 multiplier')),
                ('level2_uom', models.CharField(blank=True, default='', max_length=30, verbose_name='Level 2 UOM')),
                ('level2_cost_price', _price('Level 2 cost price')),
                ('level2_sale_price', _price('Level 2 sale price')),
                ('level2_multiplier', _multiplier('Level 2 multiplier')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Stock item',
                'verbose_name_plural': 'Stock items',
                'ordering': ['name'],
            },
        ),
        migrations.AddConstraint(
            model_name='stockitem',
            constraint=models.UniqueConstraint(condition=models.Q(('code', ''), _negated=True), fields=('code',), name='unique_stock_item_code'),
        ),
        migrations.CreateModel(
            name='AllocatedStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), help_text='Quantity originally allocated, in the allocation UOM.', max_digits=12, verbose_name='Allocated quantity')),
                ('uom', models.CharField(max_length=30, verbose_name='UOM')),
                ('quantities_by_uom', models.JSONField(blank=True, default=list, verbose_name='Quantities by UOM')),
                ('status', models.CharField(choices=[('active', 'Active'), ('depleted', 'Depleted'), ('cancelled', 'Cancelled')], db_index=True, default='active', max_length=20, verbose_name='Status')),
                ('reference', models.CharField(blank=True, default='', help_text='Ex: purchase record number', max_length=100, verbose_name='Reference')),
                ('expiry_date', models.DateField(blank=True, null=True, verbose_name='Expiry date')),
                ('metadata', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('allocated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Allocated by')),
                ('stock_item', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allocations', to='packman.stockitem', verbose_name='Stock item')),
            ],
            options={
                'verbose_name': 'Allocated stock',
                'verbose_name_plural': 'Allocated stock',
                'ordering': ['-created_at'],
            },
        ),
    ]
