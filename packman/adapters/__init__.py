"""
Packman Adapters.

Implementations of protocols for external systems.
"""

from packman.adapters.memory import InMemoryItemLookup
from packman.adapters.orm import (
    OrmItemLookup,
    get_item_lookup,
    reset_item_lookup,
)

__all__ = [
    "InMemoryItemLookup",
    "OrmItemLookup",
    "get_item_lookup",
    "reset_item_lookup",
]
