from . import config, errors, models, parser, service
from ._logging import logger
from .config import DEFAULT_CONFIG, ParserConfig
from .errors import (
    ConversionError,
    NotFoundError,
    PageReportedError,
    ParseError,
    StructuralMismatchError,
)
from .models import Address, DeliveryPrice, Package, PackageTrackingEvent
from .parser import (
    parse_address_lookup,
    parse_addresses,
    parse_package,
    parse_price,
)
from .service import CorreiosService, DeliveryOption, Fetcher

__all__ = [
    'DEFAULT_CONFIG',
    'Address',
    'ConversionError',
    'CorreiosService',
    'DeliveryOption',
    'DeliveryPrice',
    'Fetcher',
    'NotFoundError',
    'Package',
    'PackageTrackingEvent',
    'PageReportedError',
    'ParseError',
    'ParserConfig',
    'StructuralMismatchError',
    'config',
    'errors',
    'logger',
    'models',
    'parser',
    'service',
]
