"""
Exceptions for Packman.

All errors are PackagingError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Error with a machine-readable code, a human-readable message and context data.

    Subclasses declare ``_default_messages`` keyed by code; the message can be
    overridden per instance with ``message=``. Any other keyword becomes data.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, data={self.data!r})"


class PackagingError(BaseError):
    """
    Structured exception for packaging and UOM operations.

    Usage:
        try:
            packaging.consume(5, 'strip', allocation)
        except PackagingError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Only {e.available} {e.data['uom']} available")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data (uom, available, requested, field)
    """

    _default_messages = {
        'ITEM_NOT_FOUND': 'Stock item not found',
        'UOM_NOT_FOUND': 'Unit of measure not found in packaging structure',
        'UOM_NOT_IN_QUANTITIES': 'Unit of measure has no on-hand quantity entry',
        'INSUFFICIENT_QUANTITY': 'Insufficient quantity in stock',
        'INVALID_QUANTITY': 'Invalid quantity (must be positive)',
        'INVALID_PACKAGING': 'Packaging values cannot be negative',
        'INVALID_STATUS': 'Invalid status for this operation',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
