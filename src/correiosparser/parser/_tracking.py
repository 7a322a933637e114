import dataclasses
import datetime
import enum
import functools
import logging
import typing

import bs4

from ..config._config import DEFAULT_CONFIG, ParserConfig
from ..errors._errors import ConversionError, NotFoundError, ParseError
from ..models._models import Package, PackageTrackingEvent
from ._document import child_cells, element_text, load_document
from ._locale import BRAZILIAN_LOCALE, Locale
from ._text import collapse_line_breaks, split_on_space_run


logger = logging.getLogger('correiosparser.parser')


CODE_NOT_FOUND = 'Código da encomenda/pacote não foi encontrado.'
POSTING_NOT_FOUND = (
    'Postagem não encontrada e/ou Aguardando postagem pelo remetente.'
    )
TRACKING_NOT_FOUND = 'Rastreamento não encontrado.'
PACKAGE_CONVERSION_FAILED = 'Não foi possível converter o pacote/encomenda.'

DETAILS_SEPARATOR_WIDTH = 3
"""Number of consecutive spaces separating the headline from the details."""


class TrackingLayout(enum.Enum):
    """Known layouts of the Correios tracking page."""
    EVENT_LIST = 'event_list'
    """
    A ".codSro" element with the package code and a two-column
    "listEvent" table. Event descriptions may continue on the next rows.
    """
    LEGACY_ROWSPAN = 'legacy_rowspan'
    """
    A "<code> - <title>" paragraph and a three-column table where
    the first cell of every event row carries a "rowspan" attribute.
    """


class NewEventRow(typing.NamedTuple):
    """A table row that starts a new tracking event."""
    event: PackageTrackingEvent


class ContinuationRow(typing.NamedTuple):
    """A table row that describes the most recently started event."""
    details: str


TrackingRow = typing.Union[NewEventRow, ContinuationRow]


class ReducerState(enum.Enum):
    NO_CURRENT_EVENT = 'no_current_event'
    HAS_CURRENT_EVENT = 'has_current_event'


class TrackingState(typing.NamedTuple):
    """Immutable state of the row reducer: the events collected so far."""
    events: tuple[PackageTrackingEvent, ...] = ()

    @property
    def state(self) -> ReducerState:
        if self.events:
            return ReducerState.HAS_CURRENT_EVENT
        return ReducerState.NO_CURRENT_EVENT

    @property
    def current_event(self) -> typing.Optional[PackageTrackingEvent]:
        return self.events[-1] if self.events else None


def start_event(
    state: TrackingState, event: PackageTrackingEvent
) -> TrackingState:
    """Append a new event, which becomes the current one."""
    return TrackingState(state.events + (event,))


def continue_event(state: TrackingState, details: str) -> TrackingState:
    """
    Replace the details of the current event. Without a current event
    the continuation text has nothing to describe and is dropped.
    """
    current = state.current_event
    if current is None:
        return state
    updated = dataclasses.replace(current, details=details)
    return TrackingState(state.events[:-1] + (updated,))


def apply_row(state: TrackingState, row: TrackingRow) -> TrackingState:
    """Transition the reducer state with a single classified row."""
    if isinstance(row, NewEventRow):
        return start_event(state, row.event)
    return continue_event(state, row.details)


def reduce_rows(
    rows: typing.Iterable[TrackingRow]
) -> tuple[PackageTrackingEvent, ...]:
    """
    Fold classified rows into tracking events, preserving row order.

    Args:
        rows (Iterable[TrackingRow]): Rows in table order.

    Returns:
        tuple[PackageTrackingEvent, ...]: The resulting events.
    """
    return functools.reduce(apply_row, rows, TrackingState()).events


def detect_tracking_layout(
    document: bs4.BeautifulSoup,
    config: typing.Optional[ParserConfig] = None
) -> TrackingLayout:
    """
    Detect which layout a tracking page uses. Pages that match neither
    layout are treated as event list pages.
    """
    config = config or DEFAULT_CONFIG
    if document.select_one(config.tracking_code_selector) is not None:
        return TrackingLayout.EVENT_LIST
    if _find_legacy_table(document, config) is not None:
        return TrackingLayout.LEGACY_ROWSPAN
    return TrackingLayout.EVENT_LIST


def _find_legacy_table(
    document: bs4.BeautifulSoup, config: ParserConfig
) -> typing.Optional[bs4.Tag]:
    content = document.select_one(config.content_selector)
    if content is None:
        return None
    for table in content.select(config.legacy_table_selector):
        if table.select_one('td[rowspan]') is not None:
            return table
    return None


def _split_date_location(
    text: str, locale: Locale
) -> tuple[datetime.datetime, str]:
    tokens = split_on_space_run(collapse_line_breaks(text))
    if len(tokens) < 2:
        raise ValueError(f'Event date and time not found in "{text}".')
    timestamp = locale.parse_datetime(tokens[0], tokens[1])
    return timestamp, ' '.join(tokens[2:])


def _split_details(text: str) -> str:
    parts = split_on_space_run(
        collapse_line_breaks(text), DETAILS_SEPARATOR_WIDTH
        )
    details = (part.strip() for part in parts[1:])
    return ' '.join(part for part in details if part)


def _parse_event_list_code(
    document: bs4.BeautifulSoup, config: ParserConfig
) -> str:
    element = document.select_one(config.tracking_code_selector)
    code = collapse_line_breaks(element_text(element))
    if not code:
        raise NotFoundError(CODE_NOT_FOUND)
    return code


def _classify_event_list_row(
    row: bs4.Tag, config: ParserConfig, locale: Locale
) -> typing.Optional[TrackingRow]:
    cells = child_cells(row)
    if len(cells) == 2:
        timestamp, location = _split_date_location(
            element_text(cells[0]), locale
            )
        status_element = cells[1].select_one(config.tracking_status_selector)
        if status_element is None:
            raise ValueError('Event status element not found.')
        event = PackageTrackingEvent(
            timestamp=timestamp,
            location=location,
            status=collapse_line_breaks(element_text(status_element)),
            details=_split_details(element_text(cells[1]))
            )
        return NewEventRow(event)
    if not cells:
        return None
    return ContinuationRow(collapse_line_breaks(element_text(cells[0])))


def _read_event_list_layout(
    document: bs4.BeautifulSoup, config: ParserConfig, locale: Locale
) -> tuple[str, list[TrackingRow]]:
    code = _parse_event_list_code(document, config)
    table_rows = document.select(config.tracking_rows_selector)
    if not table_rows:
        raise NotFoundError(POSTING_NOT_FOUND)
    rows = (
        _classify_event_list_row(row, config, locale) for row in table_rows
        )
    return code, [row for row in rows if row is not None]


def _parse_legacy_code(
    document: bs4.BeautifulSoup, config: ParserConfig
) -> str:
    content = document.select_one(config.content_selector)
    paragraph = None
    if content is not None:
        paragraph = content.select_one(config.legacy_code_selector)
    text = collapse_line_breaks(element_text(paragraph))
    code = text.split('-')[0].strip()
    if not code:
        raise NotFoundError(CODE_NOT_FOUND)
    return code


def _classify_legacy_row(
    row: bs4.Tag, config: ParserConfig, locale: Locale
) -> typing.Optional[TrackingRow]:
    cells = child_cells(row)
    if not cells:
        return None
    if not cells[0].has_attr('rowspan'):
        return ContinuationRow(collapse_line_breaks(element_text(cells[-1])))
    timestamp, _ = _split_date_location(element_text(cells[0]), locale)
    status_cell = cells[2]
    status_element = status_cell.select_one(config.legacy_status_selector)
    event = PackageTrackingEvent(
        timestamp=timestamp,
        location=collapse_line_breaks(element_text(cells[1])),
        status=collapse_line_breaks(
            element_text(status_element or status_cell)
            )
        )
    return NewEventRow(event)


def _read_legacy_layout(
    document: bs4.BeautifulSoup, config: ParserConfig, locale: Locale
) -> tuple[str, list[TrackingRow]]:
    code = _parse_legacy_code(document, config)
    table = _find_legacy_table(document, config)
    table_rows = table.find_all('tr') if table is not None else []
    if not table_rows:
        raise NotFoundError(POSTING_NOT_FOUND)
    rows = (_classify_legacy_row(row, config, locale) for row in table_rows)
    return code, [row for row in rows if row is not None]


_LAYOUT_READERS = {
    TrackingLayout.EVENT_LIST: _read_event_list_layout,
    TrackingLayout.LEGACY_ROWSPAN: _read_legacy_layout,
    }


def parse_package(
    html: str,
    config: typing.Optional[ParserConfig] = None,
    locale: typing.Optional[Locale] = None
) -> Package:
    """
    Parse the HTML contents of a Correios tracking page.

    Both the event list layout and the legacy rowspan layout are supported;
    the layout is detected from the page contents.

    Args:
        html (str): HTML contents of the page.
        config (ParserConfig | None): Selectors to use. If None,
            the default configuration is used.
        locale (Locale | None): Locale used to read event dates. If None,
            the Brazilian locale is used.

    Returns:
        Package: The package with its events in table order.

    Raises:
        NotFoundError: If the package code, the posting or the tracking
            events are not found.
        ConversionError: If the page contents could not be converted,
            e.g. an event date is invalid. The original exception is
            available as the `cause` attribute.
    """
    config = config or DEFAULT_CONFIG
    locale = locale or BRAZILIAN_LOCALE
    try:
        document = load_document(html)
        layout = detect_tracking_layout(document, config)
        logger.debug('Tracking page layout detected: %s', layout.value)
        code, rows = _LAYOUT_READERS[layout](document, config, locale)
        events = reduce_rows(rows)
        if not events:
            raise NotFoundError(TRACKING_NOT_FOUND)
        logger.debug(
            'Package "%s": %i row(s) reduced to %i event(s)',
            code, len(rows), len(events)
            )
        return Package(code=code, events=events)
    except ParseError:
        raise
    except Exception as exc:
        raise ConversionError(PACKAGE_CONVERSION_FAILED, cause=exc) from exc
