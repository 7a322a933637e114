import datetime
import decimal

import pytest

from correiosparser.models import (
    DAYS_NOT_AVAILABLE,
    Address,
    DeliveryPrice,
    Package,
    PackageTrackingEvent,
)


@pytest.fixture()
def events():
    yield [
        PackageTrackingEvent(
            datetime.datetime(2024, 3, 10, 9, 0),
            location='CURITIBA / PR',
            status='Objeto postado'
            ),
        PackageTrackingEvent(
            datetime.datetime(2024, 3, 12, 14, 30),
            location='SAO PAULO / SP',
            status='Objeto entregue ao destinatário',
            details='Recebido por JOAO'
            ),
        PackageTrackingEvent(
            datetime.datetime(2024, 3, 11, 7, 45),
            location='SAO PAULO / SP',
            status='Objeto saiu para entrega ao destinatário'
            ),
    ]


def test_address_defaults():
    address = Address()
    assert address.as_dict() == {
        'street': '',
        'district': '',
        'city': '',
        'state': '',
        'zip_code': '',
        }


def test_address_is_immutable():
    address = Address(city='Recife')
    with pytest.raises(AttributeError):
        address.city = 'Olinda'  # type: ignore


def test_event_status_lowercase_ascii():
    event = PackageTrackingEvent(
        datetime.datetime(2024, 1, 1),
        status='  Objeto Entregue ao Destinatário'
        )
    assert event.status_lowercase_ascii == 'objeto entregue ao destinatario'


def test_event_as_dict():
    event = PackageTrackingEvent(
        datetime.datetime(2024, 1, 2, 3, 4), location='RIO', status='Postado'
        )
    assert event.as_dict() == {
        'timestamp': '2024-01-02T03:04:00',
        'location': 'RIO',
        'status': 'Postado',
        'details': '',
        }


class TestPackage:

    def test_events_are_stored_as_tuple(self, events):
        package = Package('AA123456789BR', events)
        assert isinstance(package.events, tuple)
        assert list(package.events) == events

    def test_empty_code(self, events):
        with pytest.raises(ValueError):
            Package('', events)

    def test_no_events(self):
        with pytest.raises(ValueError):
            Package('AA123456789BR', [])

    def test_last_event(self, events):
        package = Package('AA123456789BR', events)
        assert package.last_event is events[1]

    def test_is_delivered(self, events):
        assert Package('AA123456789BR', events).is_delivered
        assert not Package('AA123456789BR', events[::2]).is_delivered

    def test_as_dict(self, events):
        data = Package('AA123456789BR', events).as_dict()
        assert data['code'] == 'AA123456789BR'
        assert len(data['events']) == 3
        assert data['events'][1]['details'] == 'Recebido por JOAO'


class TestDeliveryPrice:

    def test_defaults(self):
        price = DeliveryPrice('PAC')
        assert price.price == decimal.Decimal(0)
        assert price.days == DAYS_NOT_AVAILABLE
        assert not price.has_estimate
        assert price.origin is None and price.destination is None

    def test_has_estimate(self):
        assert DeliveryPrice('PAC', days=0).has_estimate

    def test_invalid_days(self):
        with pytest.raises(ValueError):
            DeliveryPrice('PAC', days=-2)

    def test_as_dict(self):
        price = DeliveryPrice(
            'SEDEX',
            price=decimal.Decimal('22.50'),
            days=1,
            origin=Address(city='Curitiba', state='PR', zip_code='80010000')
            )
        data = price.as_dict()
        assert data['price'] == '22.50'
        assert data['origin']['zip_code'] == '80010000'
        assert data['destination'] is None
