"""
Packman Protocols.

Defines interfaces for external system integration.
"""

from packman.protocols.lookup import ItemLookup

__all__ = [
    "ItemLookup",
]
