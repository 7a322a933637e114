"""`correiosparser.parser` package provides means for parsing HTML contents of
Correios webpages and extracting addresses, package tracking histories and
delivery prices. All parsers are pure functions over the page contents.
"""

from ._address import parse_addresses, split_city_state
from ._document import child_cells, element_text, load_document
from ._locale import BRAZILIAN_LOCALE, BrazilianLocale, Locale
from ._lookup import (
    AddressLookupRecord,
    AddressLookupResponse,
    parse_address_lookup,
)
from ._price import parse_amount, parse_days, parse_price
from ._text import (
    collapse_line_breaks,
    find_first_number,
    split_on_space_run,
    strip_hyphens,
    strip_non_digits,
    strip_non_numeric,
)
from ._tracking import (
    ContinuationRow,
    NewEventRow,
    ReducerState,
    TrackingLayout,
    TrackingRow,
    TrackingState,
    apply_row,
    continue_event,
    detect_tracking_layout,
    parse_package,
    reduce_rows,
    start_event,
)

__all__ = [
    'BRAZILIAN_LOCALE',
    'AddressLookupRecord',
    'AddressLookupResponse',
    'BrazilianLocale',
    'ContinuationRow',
    'Locale',
    'NewEventRow',
    'ReducerState',
    'TrackingLayout',
    'TrackingRow',
    'TrackingState',
    'apply_row',
    'child_cells',
    'collapse_line_breaks',
    'continue_event',
    'detect_tracking_layout',
    'element_text',
    'find_first_number',
    'load_document',
    'parse_address_lookup',
    'parse_addresses',
    'parse_amount',
    'parse_days',
    'parse_package',
    'parse_price',
    'reduce_rows',
    'split_city_state',
    'split_on_space_run',
    'start_event',
    'strip_hyphens',
    'strip_non_digits',
    'strip_non_numeric',
]
