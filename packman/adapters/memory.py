"""
In-memory Item Lookup — adapter for development and testing.

Holds stock item definitions in a dict instead of the database:

    lookup = InMemoryItemLookup({
        'paracetamol': {
            'level0': {'uom': 'box', 'costPrice': 100},
            'packagingStructure': {
                'level1': {'uom': 'strip', 'costPrice': 10, 'multiplier': 10},
            },
        },
    })
    packaging.hierarchy('paracetamol', lookup=lookup)

Values may be StockItemDefinition instances or stored documents.
"""

from __future__ import annotations

from typing import Any

from packman.hierarchy import StockItemDefinition


class InMemoryItemLookup:
    """
    Dict-backed item lookup.

    Implements the ``ItemLookup`` protocol without a database, for local
    development and tests that don't need persisted stock items.
    """

    def __init__(self, items: dict[Any, StockItemDefinition | dict] | None = None):
        self._items: dict[Any, StockItemDefinition] = {}
        for item_id, item in (items or {}).items():
            self.add(item_id, item)

    def add(self, item_id: Any, item: StockItemDefinition | dict) -> None:
        if isinstance(item, dict):
            item = StockItemDefinition.from_document(item)
        self._items[item_id] = item

    def get_item(self, item_id: Any) -> StockItemDefinition | None:
        return self._items.get(item_id)
