"""`correiosparser.service` package provides an asynchronous facade that
combines an injected `Fetcher` with the parsers. It performs no network I/O
by itself.
"""

from ._service import (
    CorreiosRequest,
    CorreiosService,
    DeliveryOption,
    Fetcher,
    RequestKind,
)

__all__ = [
    'CorreiosRequest',
    'CorreiosService',
    'DeliveryOption',
    'Fetcher',
    'RequestKind',
]
