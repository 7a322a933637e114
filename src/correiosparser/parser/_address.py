import logging
import typing

import bs4

from ..config._config import DEFAULT_CONFIG, ParserConfig
from ..errors._errors import (
    ConversionError,
    NotFoundError,
    ParseError,
    StructuralMismatchError,
)
from ..models._models import Address
from ._document import child_cells, element_text, load_document
from ._text import collapse_line_breaks, strip_hyphens


logger = logging.getLogger('correiosparser.parser')


ADDRESS_NOT_FOUND = 'Endereço não encontrado.'
CITY_STATE_NOT_FOUND = (
    'Não foi possível extrair as informações de Cidade e Estado.'
    )
ADDRESS_ROW_INVALID = 'Não foi possível extrair as informações do endereço.'
ADDRESS_CONVERSION_FAILED = 'Não foi possível converter o endereço.'


def split_city_state(text: str) -> tuple[str, str]:
    """
    Split a combined "city/state" text into its trimmed parts.

    Args:
        text (str): Text such as "São Paulo/SP".

    Returns:
        tuple[str, str]: The city and the state.

    Raises:
        StructuralMismatchError: If the text does not have exactly two parts.
    """
    parts = text.split('/')
    if len(parts) != 2:
        raise StructuralMismatchError(CITY_STATE_NOT_FOUND)
    return parts[0].strip(), parts[1].strip()


def _parse_address_row(row: bs4.Tag) -> Address:
    cells = child_cells(row)
    if len(cells) < 4:
        raise StructuralMismatchError(
            ADDRESS_ROW_INVALID,
            details=[collapse_line_breaks(element_text(row))]
            )
    street = collapse_line_breaks(element_text(cells[0]))
    district = collapse_line_breaks(element_text(cells[1]))
    city, state = split_city_state(
        collapse_line_breaks(element_text(cells[2]))
        )
    zip_code = strip_hyphens(collapse_line_breaks(element_text(cells[3])))
    return Address(
        street=street,
        district=district,
        city=city,
        state=state,
        zip_code=zip_code
        )


def parse_addresses(
    html: str,
    config: typing.Optional[ParserConfig] = None
) -> tuple[Address, ...]:
    """
    Parse the HTML contents of the Correios address search results page.

    Args:
        html (str): HTML contents of the page.
        config (ParserConfig | None): Selectors to use. If None,
            the default configuration is used.

    Returns:
        tuple[Address, ...]: The addresses, in the order of the results table.

    Raises:
        NotFoundError: If the page reports that no address was found or
            the results table has no data rows.
        StructuralMismatchError: If a row does not have the expected cells
            or its city/state cell cannot be split.
        ConversionError: If the page contents could not be converted.
            The original exception is available as the `cause` attribute.
    """
    config = config or DEFAULT_CONFIG
    try:
        return _read_addresses(html, config)
    except ParseError:
        raise
    except Exception as exc:
        raise ConversionError(ADDRESS_CONVERSION_FAILED, cause=exc) from exc


def _read_addresses(html: str, config: ParserConfig) -> tuple[Address, ...]:
    document = load_document(html)
    content = document.select_one(config.content_selector)
    if content is None:
        raise NotFoundError(ADDRESS_NOT_FOUND)

    message = collapse_line_breaks(
        element_text(content.select_one(config.address_message_selector))
        )
    if message == config.address_not_found_text:
        raise NotFoundError(ADDRESS_NOT_FOUND)

    rows = content.select(config.address_rows_selector)[1:]  # skip header
    if not rows:
        raise NotFoundError(ADDRESS_NOT_FOUND)

    addresses = tuple(_parse_address_row(row) for row in rows)
    logger.debug('Parsed %i address(es)', len(addresses))
    return addresses
