"""
Enums for Packman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ItemType(models.TextChoices):
    """What kind of thing a stock item is."""
    STOCK = 'stock', _('Stock')
    SERVICE = 'service', _('Service')
    FIXED_ASSET = 'fixed_asset', _('Fixed asset')


class ItemStatus(models.TextChoices):
    ACTIVE = 'active', _('Active')
    INACTIVE = 'inactive', _('Inactive')


class AllocationStatus(models.TextChoices):
    """Allocated stock lifecycle status."""
    ACTIVE = 'active', _('Active')          # Has quantity left
    DEPLETED = 'depleted', _('Depleted')    # Cascade zeroed every level
    CANCELLED = 'cancelled', _('Cancelled')
