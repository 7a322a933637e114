import decimal
import logging
import typing

import bs4

from ..config._config import DEFAULT_CONFIG, ParserConfig
from ..errors._errors import (
    ConversionError,
    PageReportedError,
    ParseError,
    StructuralMismatchError,
)
from ..models._models import DAYS_NOT_AVAILABLE, Address, DeliveryPrice
from ._address import split_city_state
from ._document import element_text, load_document
from ._locale import BRAZILIAN_LOCALE, Locale
from ._text import collapse_line_breaks, find_first_number, strip_non_digits


logger = logging.getLogger('correiosparser.parser')


PRICE_NOT_CALCULATED = 'Não foi possível calcular o preço de entrega.'
PRICE_RESULT_NOT_FOUND = (
    'Não foi possível localizar o resultado do cálculo de preço.'
    )
PRICE_CONVERSION_FAILED = 'Não foi possível converter o preço de entrega.'

ADDRESS_CELLS_COUNT = 10
"""Number of cells in the origin and destination table (2 header cells)."""


def parse_days(text: str) -> int:
    """
    Extract the estimated transit days from the term of delivery text,
    e.g. "Prazo de entrega: 3 dias úteis". Returns `DAYS_NOT_AVAILABLE`
    if the text has no digits.
    """
    days = find_first_number(text)
    return DAYS_NOT_AVAILABLE if days is None else days


def parse_amount(
    text: str, locale: typing.Optional[Locale] = None
) -> decimal.Decimal:
    """
    Parse a currency amount with the given locale. An amount that cannot be
    parsed is reported as zero instead of raising an error.
    """
    locale = locale or BRAZILIAN_LOCALE
    try:
        return locale.parse_currency(text)
    except (ValueError, decimal.InvalidOperation) as exc:
        logger.debug('Price amount defaulted to zero (%s)', exc)
        return decimal.Decimal(0)


def _build_address(
    zip_code: bs4.Tag, street: bs4.Tag, district: bs4.Tag, city_state: bs4.Tag
) -> Address:
    city, state = split_city_state(
        collapse_line_breaks(element_text(city_state))
        )
    return Address(
        street=collapse_line_breaks(element_text(street)),
        district=collapse_line_breaks(element_text(district)),
        city=city,
        state=state,
        zip_code=strip_non_digits(element_text(zip_code))
        )


def _parse_origin_destination(
    cells: list[bs4.Tag]
) -> tuple[typing.Optional[Address], typing.Optional[Address]]:
    if len(cells) < ADDRESS_CELLS_COUNT:
        return None, None
    # cells alternate between the origin and the destination columns
    origin = _build_address(cells[2], cells[4], cells[6], cells[8])
    destination = _build_address(cells[3], cells[5], cells[7], cells[9])
    return origin, destination


def _raise_for_page_errors(
    document: bs4.BeautifulSoup, config: ParserConfig
) -> None:
    errors = [
        collapse_line_breaks(element_text(element))
        for element in document.select(config.price_error_selector)
        ]
    if errors:
        logger.warning(
            'Price calculator reported %i error(s): %s',
            len(errors), '; '.join(errors)
            )
        raise PageReportedError(PRICE_NOT_CALCULATED, details=errors)


def parse_price(
    mode: str,
    html: str,
    config: typing.Optional[ParserConfig] = None,
    locale: typing.Optional[Locale] = None
) -> DeliveryPrice:
    """
    Parse the HTML contents of the Correios price calculator result page.

    Args:
        mode (str): Label of the shipping service the page was requested
            for, e.g. "SEDEX".
        html (str): HTML contents of the page.
        config (ParserConfig | None): Selectors to use. If None,
            the default configuration is used.
        locale (Locale | None): Locale used to read the amount. If None,
            the Brazilian locale is used.

    Returns:
        DeliveryPrice: The quote. The origin and destination addresses are
        None if the page does not show them.

    Raises:
        PageReportedError: If the page shows error banners. Their texts
            are available as the `details` attribute.
        StructuralMismatchError: If the highlighted result row is missing
            or an address cell cannot be split.
        ConversionError: If the page contents could not be converted.
    """
    config = config or DEFAULT_CONFIG
    locale = locale or BRAZILIAN_LOCALE
    try:
        document = load_document(html)
        _raise_for_page_errors(document, config)

        content = document.select_one(config.content_selector)
        if content is None:
            raise StructuralMismatchError(PRICE_RESULT_NOT_FOUND)
        result_cells = content.select(config.price_result_selector)
        if len(result_cells) < 2:
            raise StructuralMismatchError(PRICE_RESULT_NOT_FOUND)

        days = parse_days(element_text(result_cells[0]))
        price = parse_amount(element_text(result_cells[1]), locale)
        origin, destination = _parse_origin_destination(
            content.select(config.price_addresses_selector)
            )
        return DeliveryPrice(
            mode=mode,
            price=price,
            days=days,
            origin=origin,
            destination=destination
            )
    except ParseError:
        raise
    except Exception as exc:
        raise ConversionError(PRICE_CONVERSION_FAILED, cause=exc) from exc
