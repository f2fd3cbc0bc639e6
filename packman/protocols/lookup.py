"""
Item Lookup Protocol — Interface for loading stock item definitions.

Packman defines this protocol; the ORM adapter (or any catalog system)
implements it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from packman.hierarchy import StockItemDefinition


@runtime_checkable
class ItemLookup(Protocol):
    """
    Protocol for stock item lookup.

    Implementations resolve an identifier to the item's packaging
    structure, or None when the item does not exist.
    """

    def get_item(self, item_id: Any) -> StockItemDefinition | None:
        """
        Load a stock item definition.

        Args:
            item_id: Stock item identifier

        Returns:
            StockItemDefinition or None if not found
        """
        ...
