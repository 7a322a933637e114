"""`correiosparser.models` package provides the immutable records produced by
the parsers.
"""

from ._models import (
    DAYS_NOT_AVAILABLE,
    Address,
    DeliveryPrice,
    Package,
    PackageTrackingEvent,
)


__all__ = [
    'DAYS_NOT_AVAILABLE',
    'Address',
    'DeliveryPrice',
    'Package',
    'PackageTrackingEvent',
]
