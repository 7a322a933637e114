import datetime
import decimal
import typing

from dataclasses import dataclass, field, asdict
from functools import cached_property
from unidecode import unidecode


DAYS_NOT_AVAILABLE = -1
"""Sentinel value to flag that no transit-day estimate could be extracted."""


DELIVERED_STATUSES = (
    'objeto entregue ao destinatario',
    'entrega efetuada',
    )
"""Normalized event headlines that mark a package as delivered."""


def _normalize(text: str) -> str:
    return unidecode(text.strip()).casefold()


@dataclass(frozen=True)
class Address:
    """
    Represents a postal address returned by a Correios address query.

    Args:
        street (str):
            Street name ("logradouro"). Defaults to an empty string value.
        district (str):
            District ("bairro"). Defaults to an empty string value.
        city (str):
            City ("localidade"). Defaults to an empty string value.
        state (str):
            Two-letter state code ("UF"). Defaults to an empty string value.
        zip_code (str):
            Zip code ("CEP"), digits only. Defaults to an empty string value.
    """
    street: str = field(default='')
    """Street name."""
    district: str = field(default='')
    """District name."""
    city: str = field(default='')
    """City name."""
    state: str = field(default='')
    """Two-letter state code."""
    zip_code: str = field(default='')
    """Zip code, digits only."""

    def as_dict(self) -> dict[str, str]:
        """
        Get a dictionary representation of the address. The behavior of this
        method is equivalent that of `dataclasses.asdict()`.
        """
        return asdict(self)


@dataclass(frozen=True)
class PackageTrackingEvent:
    """
    A single dated entry in the delivery history of a package.

    Args:
        timestamp (datetime.datetime):
            Date and time of the event, as published by Correios.
        location (str):
            Free-text location of the event. May be empty.
        status (str):
            Short headline of the event, e.g. "Objeto postado".
        details (str):
            Additional description of the event. Empty if not provided.
    """
    timestamp: datetime.datetime
    """Date and time of the event."""
    location: str = field(default='')
    """Free-text location of the event."""
    status: str = field(default='')
    """Short headline of the event."""
    details: str = field(default='')
    """Additional description of the event."""

    @cached_property
    def status_lowercase_ascii(self) -> str:
        """Lowercase ASCII representation of the event headline."""
        return _normalize(self.status)

    def as_dict(self) -> dict[str, typing.Any]:
        """
        Get a dictionary representation of the event. The timestamp is
        serialized in the ISO 8601 format.
        """
        self_asdict = asdict(self)
        self_asdict['timestamp'] = self.timestamp.isoformat()
        return self_asdict


@dataclass(frozen=True)
class Package:
    """
    A tracked package and its delivery history.

    A package always has at least one event: a tracking page without events
    is reported as an error by the parser, not as an empty package.

    Args:
        code (str):
            Tracking code of the package, e.g. "AA123456789BR".
        events (tuple[PackageTrackingEvent, ...]):
            Events in the order published by the tracking page.

    Raises:
        ValueError: If the code is empty or there are no events.
    """
    code: str
    """Tracking code of the package."""
    events: tuple[PackageTrackingEvent, ...]
    """Events in the order published by the tracking page."""

    def __post_init__(self):
        if not self.code:
            raise ValueError('Package code must not be empty.')
        # use object.__setattr__ to bypass the frozen restriction
        object.__setattr__(self, 'events', tuple(self.events))
        if not self.events:
            raise ValueError(
                f'Package "{self.code}" must have at least one event.'
                )

    @property
    def last_event(self) -> PackageTrackingEvent:
        """The event with the most recent timestamp."""
        return max(self.events, key=lambda event: event.timestamp)

    @property
    def is_delivered(self) -> bool:
        """
        A package is considered delivered if any of its events reports
        a successful delivery.
        """
        return any(
            event.status_lowercase_ascii in DELIVERED_STATUSES
            for event in self.events
            )

    def as_dict(self) -> dict[str, typing.Any]:
        """Get a dictionary representation of the package and its events."""
        return {
            'code': self.code,
            'events': [event.as_dict() for event in self.events],
            }


@dataclass(frozen=True)
class DeliveryPrice:
    """
    A delivery price quote for a single shipping service.

    Args:
        mode (str):
            Label of the shipping service, e.g. "SEDEX".
        price (decimal.Decimal):
            Quoted price in Brazilian reais.
        days (int):
            Estimated transit days, or `DAYS_NOT_AVAILABLE` (-1) if the page
            does not provide an estimate.
        origin (Optional[Address]):
            Origin address, if the page exposes it. Defaults to None.
        destination (Optional[Address]):
            Destination address, if the page exposes it. Defaults to None.

    Raises:
        ValueError: If `days` is negative and not the sentinel value.
    """
    mode: str
    """Label of the shipping service."""
    price: decimal.Decimal = field(default_factory=decimal.Decimal)
    """Quoted price in Brazilian reais."""
    days: int = field(default=DAYS_NOT_AVAILABLE)
    """Estimated transit days or `DAYS_NOT_AVAILABLE`."""
    origin: typing.Optional[Address] = field(default=None)
    """Origin address, if available."""
    destination: typing.Optional[Address] = field(default=None)
    """Destination address, if available."""

    def __post_init__(self):
        if self.days < 0 and self.days != DAYS_NOT_AVAILABLE:
            raise ValueError(
                f'Invalid number of delivery days "{self.days}" '
                f'(expected a non-negative value or {DAYS_NOT_AVAILABLE}).'
                )

    @property
    def has_estimate(self) -> bool:
        """Indicates whether the quote carries a transit-day estimate."""
        return self.days != DAYS_NOT_AVAILABLE

    def as_dict(self) -> dict[str, typing.Any]:
        """
        Get a dictionary representation of the quote. The price is
        serialized as a string to keep its exact decimal value.
        """
        return {
            'mode': self.mode,
            'price': str(self.price),
            'days': self.days,
            'origin': self.origin.as_dict() if self.origin else None,
            'destination': (
                self.destination.as_dict() if self.destination else None
                ),
            }
