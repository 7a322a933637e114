import json

import pytest

from correiosparser.errors import ConversionError
from correiosparser.models import Address
from correiosparser.parser import (
    AddressLookupRecord,
    AddressLookupResponse,
    parse_address_lookup,
)


@pytest.fixture()
def response():
    yield {
        'erro': False,
        'dados': [
            {
                'logradouroDNEC': 'Avenida Paulista ',
                'bairro': 'Bela Vista',
                'localidade': 'São Paulo',
                'uf': 'SP',
                'cep': '01310-100',
                'numeroLocalidade': 0,
            },
            {
                'logradouroDNEC': None,
                'bairro': None,
                'localidade': 'Brasília',
                'uf': 'DF',
                'cep': '70000000',
            },
        ],
    }


def test_parse_address_lookup(response):
    addresses = parse_address_lookup(json.dumps(response))
    assert addresses == (
        Address(
            street='Avenida Paulista',
            district='Bela Vista',
            city='São Paulo',
            state='SP',
            zip_code='01310100'
            ),
        Address(city='Brasília', state='DF', zip_code='70000000'),
        )


@pytest.mark.parametrize(
    'json_text',
    ['null', '{"erro": true}', '{"erro": false, "dados": []}', '{}']
)
def test_no_results(json_text):
    assert parse_address_lookup(json_text) == ()


@pytest.mark.parametrize('json_text', ['', '{', '{"dados": 1}', '[]'])
def test_invalid_response(json_text):
    with pytest.raises(ConversionError) as exc_info:
        parse_address_lookup(json_text)
    assert exc_info.value.cause is not None


def test_models_accept_field_names():
    record = AddressLookupRecord(street='Rua A', zip_code='01001-000')
    assert record.to_address() == Address(street='Rua A', zip_code='01001000')
    assert AddressLookupResponse(data=[record]).error is False
