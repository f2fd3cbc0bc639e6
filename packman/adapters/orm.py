"""
Packman ORM Adapter — stock item lookup via the StockItem model.

This module also loads the configured ItemLookup from settings.

Usage:
    from packman.adapters import get_item_lookup

    lookup = get_item_lookup()
    definition = lookup.get_item(42)

Settings:
    PACKMAN = {
        "ITEM_LOOKUP": "packman.adapters.orm.OrmItemLookup",
    }

If the configured path cannot be imported, get_item_lookup() raises
ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from packman.conf import packman_settings
from packman.protocols.lookup import ItemLookup

if TYPE_CHECKING:
    from packman.hierarchy import StockItemDefinition

logger = logging.getLogger(__name__)


class OrmItemLookup:
    """Reads StockItem rows; malformed ids count as not found."""

    def get_item(self, item_id: Any) -> StockItemDefinition | None:
        from packman.models import StockItem

        try:
            item = StockItem.objects.filter(pk=item_id).first()
        except (TypeError, ValueError):
            logger.debug("Invalid stock item id: %r", item_id)
            return None
        if item is None:
            return None
        return item.as_definition()


# Cached lookup instance
_lock = threading.Lock()
_item_lookup: ItemLookup | None = None


def get_item_lookup() -> ItemLookup:
    """
    Return the configured item lookup.

    Returns:
        ItemLookup instance

    Raises:
        ImproperlyConfigured: If ITEM_LOOKUP is empty or import fails
    """
    global _item_lookup

    if _item_lookup is None:
        with _lock:
            if _item_lookup is None:  # double-checked
                lookup_path = packman_settings.ITEM_LOOKUP

                if not lookup_path:
                    raise ImproperlyConfigured(
                        "PACKMAN['ITEM_LOOKUP'] must be configured. "
                        "Example: 'packman.adapters.orm.OrmItemLookup'"
                    )

                try:
                    lookup_class = import_string(lookup_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import item lookup '{lookup_path}': {e}"
                    ) from e

                _item_lookup = lookup_class()
                logger.debug("Loaded item lookup: %s", lookup_path)

    return _item_lookup


def reset_item_lookup() -> None:
    """Reset the cached lookup. Useful for testing."""
    global _item_lookup
    _item_lookup = None
