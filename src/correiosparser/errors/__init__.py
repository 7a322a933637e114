"""`correiosparser.errors` package defines the exceptions raised when a
Correios page cannot be converted into typed records.
"""

from ._errors import (
    ConversionError,
    NotFoundError,
    PageReportedError,
    ParseError,
    StructuralMismatchError,
)

__all__ = [
    'ConversionError',
    'NotFoundError',
    'PageReportedError',
    'ParseError',
    'StructuralMismatchError',
]
