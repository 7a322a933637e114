import asyncio
import datetime
import enum
import functools
import logging

from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, TypeVar

from ..config._config import DEFAULT_CONFIG, ParserConfig
from ..models._models import Address, DeliveryPrice, Package
from ..parser._locale import BRAZILIAN_LOCALE, Locale
from ..parser._lookup import parse_address_lookup
from ..parser._address import parse_addresses
from ..parser._price import parse_price
from ..parser._text import strip_non_digits
from ..parser._tracking import parse_package


logger = logging.getLogger('correiosparser.service')


T = TypeVar('T')


class RequestKind(enum.Enum):
    """Pages and APIs a `Fetcher` is asked to retrieve."""
    TRACKING = 'tracking'
    ADDRESS_SEARCH = 'address_search'
    ADDRESS_LOOKUP = 'address_lookup'
    DELIVERY_PRICE = 'delivery_price'


@dataclass(frozen=True)
class CorreiosRequest:
    """
    Describes a page or API response to retrieve. Encoding the parameters
    into an HTTP request is up to the `Fetcher`.
    """
    kind: RequestKind
    """What is being requested."""
    params: Mapping[str, str] = field(default_factory=dict)
    """Request parameters, e.g. the package code or the zip codes."""


class Fetcher(Protocol):
    """
    Retrieves raw page contents for the service. Transport, sessions,
    retries and timeouts are the responsibility of the implementation.
    """

    async def fetch(self, request: CorreiosRequest) -> str:
        """Fetch the raw HTML or JSON text for the request."""
        ...


class DeliveryOption(enum.Flag):
    """Correios shipping services that can be quoted."""
    SEDEX = enum.auto()
    SEDEX_10 = enum.auto()
    SEDEX_12 = enum.auto()
    SEDEX_HOJE = enum.auto()
    PAC = enum.auto()

    @property
    def code(self) -> str:
        """Service code expected by the price calculator."""
        return _DELIVERY_OPTION_INFO[self][0]

    @property
    def label(self) -> str:
        """Human-readable name of the service."""
        return _DELIVERY_OPTION_INFO[self][1]

    def split(self) -> list['DeliveryOption']:
        """Get the single services of a combined flag, in declaration order."""
        return [
            option for option in DeliveryOption
            if option in _DELIVERY_OPTION_INFO and option in self
            ]


_DELIVERY_OPTION_INFO: dict[DeliveryOption, tuple[str, str]] = {
    DeliveryOption.SEDEX: ('04014', 'SEDEX'),
    DeliveryOption.SEDEX_10: ('04790', 'SEDEX 10'),
    DeliveryOption.SEDEX_12: ('04782', 'SEDEX 12'),
    DeliveryOption.SEDEX_HOJE: ('04804', 'SEDEX Hoje'),
    DeliveryOption.PAC: ('04510', 'PAC'),
    }


class CorreiosService:
    """
    Asynchronous facade that retrieves Correios pages through an injected
    `Fetcher` and converts them into typed records.

    Parsing is CPU-bound and runs in an executor so that a slow page does
    not block the event loop.

    Args:
        fetcher (Fetcher):
            Component that retrieves raw page contents.
        config (Optional[ParserConfig]):
            Selectors passed to the parsers. If None, the default
            configuration is used.
        locale (Optional[Locale]):
            Locale passed to the parsers and used to format request dates.
            If None, the Brazilian locale is used.
        executor (Optional[Executor]):
            Executor used for parsing. If None, the event loop's default
            executor is used.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        config: Optional[ParserConfig] = None,
        locale: Optional[Locale] = None,
        executor: Optional[Executor] = None
    ) -> None:
        self._fetcher = fetcher
        self._config = config or DEFAULT_CONFIG
        self._locale = locale or BRAZILIAN_LOCALE
        self._executor = executor

    @property
    def fetcher(self) -> Fetcher:
        return self._fetcher

    @property
    def config(self) -> ParserConfig:
        return self._config

    async def _fetch(self, request: CorreiosRequest) -> str:
        logger.info(
            'Fetching "%s" with parameters %s',
            request.kind.value, dict(request.params)
            )
        contents = await self._fetcher.fetch(request)
        logger.debug(
            'Fetched %i character(s) for "%s"',
            len(contents), request.kind.value
            )
        return contents

    async def _run_parser(self, func: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(func, *args)
            )

    async def get_package_tracking(self, code: str) -> Package:
        """
        Fetch and parse the tracking history of a package.

        Args:
            code (str): Tracking code of the package, e.g. "AA123456789BR".

        Returns:
            Package: The package with its events.

        Raises:
            ParseError: If the tracking page cannot be converted.
        """
        code = code.strip()
        if not code:
            raise ValueError('Package code must not be empty.')
        request = CorreiosRequest(RequestKind.TRACKING, {'code': code})
        html = await self._fetch(request)
        return await self._run_parser(
            parse_package, html, self._config, self._locale
            )

    async def get_addresses(self, query: str) -> tuple[Address, ...]:
        """
        Fetch and parse the address search results page for a zip code
        or a street name.

        Raises:
            ParseError: If no address is found or the page cannot
                be converted.
        """
        request = CorreiosRequest(
            RequestKind.ADDRESS_SEARCH, {'query': query.strip()}
            )
        html = await self._fetch(request)
        return await self._run_parser(parse_addresses, html, self._config)

    async def lookup_addresses(self, zip_code: str) -> tuple[Address, ...]:
        """
        Query the address lookup API for a zip code. An empty tuple means
        that the API has no results for it.
        """
        request = CorreiosRequest(
            RequestKind.ADDRESS_LOOKUP,
            {'zip_code': strip_non_digits(zip_code)}
            )
        json_text = await self._fetch(request)
        return await self._run_parser(parse_address_lookup, json_text)

    async def _get_delivery_price(
        self, option: DeliveryOption, params: Mapping[str, str]
    ) -> DeliveryPrice:
        request = CorreiosRequest(
            RequestKind.DELIVERY_PRICE,
            {**params, 'service_code': option.code}
            )
        html = await self._fetch(request)
        return await self._run_parser(
            parse_price, option.label, html, self._config, self._locale
            )

    async def get_delivery_prices(
        self,
        post_date: datetime.date,
        origin_zip_code: str,
        destination_zip_code: str,
        options: DeliveryOption,
        height: int,
        width: int,
        length: int,
        weight: float
    ) -> list[DeliveryPrice]:
        """
        Fetch and parse one price quote per selected shipping service.
        The pages are fetched concurrently.

        Args:
            post_date (datetime.date): Date the package will be posted.
            origin_zip_code (str): Origin zip code, hyphens allowed.
            destination_zip_code (str): Destination zip code,
                hyphens allowed.
            options (DeliveryOption): One or more services combined
                with `|`, e.g. `DeliveryOption.SEDEX | DeliveryOption.PAC`.
            height (int): Package height in centimeters.
            width (int): Package width in centimeters.
            length (int): Package length in centimeters.
            weight (float): Package weight in kilograms.

        Returns:
            list[DeliveryPrice]: The quotes, in the declaration order of
            the selected services.

        Raises:
            ValueError: If no service is selected.
            ParseError: If any of the pages cannot be converted.
        """
        selected = options.split()
        if not selected:
            raise ValueError('At least one delivery option must be selected.')
        params = {
            'post_date': self._locale.format_date(post_date),
            'origin_zip_code': strip_non_digits(origin_zip_code),
            'destination_zip_code': strip_non_digits(destination_zip_code),
            'height': str(height),
            'width': str(width),
            'length': str(length),
            'weight': str(weight),
            }
        prices = await asyncio.gather(
            *(self._get_delivery_price(option, params) for option in selected)
            )
        return list(prices)
