"""
Packman configuration.

Usage in settings.py:
    PACKMAN = {
        "ITEM_LOOKUP": "packman.adapters.orm.OrmItemLookup",
        "VALIDATE_INPUT_QUANTITIES": True,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class PackmanSettings:
    """Packman configuration settings."""

    # Stock item lookup backend (dotted path)
    ITEM_LOOKUP: str = "packman.adapters.orm.OrmItemLookup"

    # Reject quantity <= 0 in allocate()/consume()
    VALIDATE_INPUT_QUANTITIES: bool = True


def get_packman_settings() -> PackmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "PACKMAN", {})
    return PackmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in PackmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_packman_settings(), name)


packman_settings = _LazySettings()
