import pytest

from correiosparser.config import ParserConfig
from correiosparser.errors import (
    ConversionError,
    NotFoundError,
    StructuralMismatchError,
)
from correiosparser.models import Address
from correiosparser.parser import parse_addresses, split_city_state


MESSAGE_FOUND = 'DADOS ENCONTRADOS COM SUCESSO.'


def make_page(rows: str, message: str = MESSAGE_FOUND) -> str:
    return (
        '<html><body><div class="ctrlcontent">'
        f'<p>{message}</p>'
        '<table class="tmptabela">'
        '<tr><th>Logradouro</th><th>Bairro</th><th>Localidade/UF</th>'
        '<th>CEP</th></tr>'
        f'{rows}'
        '</table></div></body></html>'
        )


ROW_PAULISTA = (
    '<tr><td>Avenida Paulista - de 612 a 1510 - lado par\r\n</td>'
    '<td>Bela Vista</td><td>São Paulo/SP\t</td><td>01310-100</td></tr>'
    )
ROW_SE = (
    '<tr><td>Praça da Sé</td><td>Sé</td><td>São Paulo /SP</td>'
    '<td>01001-000</td></tr>'
    )


class TestParseAddresses:

    def test_single_row(self):
        addresses = parse_addresses(make_page(ROW_PAULISTA))
        assert addresses == (
            Address(
                street='Avenida Paulista - de 612 a 1510 - lado par',
                district='Bela Vista',
                city='São Paulo',
                state='SP',
                zip_code='01310100'
                ),
            )

    def test_rows_in_table_order(self):
        addresses = parse_addresses(make_page(ROW_SE + ROW_PAULISTA))
        assert [address.zip_code for address in addresses] == [
            '01001000', '01310100'
            ]
        assert addresses[0].city == 'São Paulo'

    def test_tbody_rows(self):
        html = make_page(ROW_SE).replace(
            '<table class="tmptabela">', '<table class="tmptabela"><tbody>'
            ).replace('</table>', '</tbody></table>')
        assert len(parse_addresses(html)) == 1

    def test_first_row_is_skipped_even_with_data_cells(self):
        html = make_page(ROW_SE + ROW_PAULISTA).replace(
            '<tr><th>Logradouro</th><th>Bairro</th><th>Localidade/UF</th>'
            '<th>CEP</th></tr>',
            ''
            )
        addresses = parse_addresses(html)
        assert [address.zip_code for address in addresses] == ['01310100']

    def test_not_found_message(self):
        html = make_page('', message='\r\nDADOS NAO ENCONTRADOS\t')
        with pytest.raises(NotFoundError) as exc_info:
            parse_addresses(html)
        assert exc_info.value.message == 'Endereço não encontrado.'

    def test_not_found_message_with_data_rows(self):
        html = make_page(
            ROW_SE + ROW_PAULISTA, message='DADOS NAO ENCONTRADOS'
            )
        with pytest.raises(NotFoundError):
            parse_addresses(html)

    def test_unexpected_failure_is_wrapped(self):
        with pytest.raises(ConversionError) as exc_info:
            parse_addresses('<div class="ctrlcontent">\ud800</div>')
        assert exc_info.value.message == (
            'Não foi possível converter o endereço.'
            )
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert exc_info.value.cause is not None

    def test_header_only_table(self):
        with pytest.raises(NotFoundError):
            parse_addresses(make_page(''))

    @pytest.mark.parametrize('html', ['', '<html><body></body></html>'])
    def test_missing_container(self, html):
        with pytest.raises(NotFoundError):
            parse_addresses(html)

    def test_missing_table(self):
        html = '<div class="ctrlcontent"><p>Resultado</p></div>'
        with pytest.raises(NotFoundError):
            parse_addresses(html)

    def test_invalid_city_state(self):
        row = (
            '<tr><td>Rua A</td><td>Centro</td><td>Brasília</td>'
            '<td>70000-000</td></tr>'
            )
        with pytest.raises(StructuralMismatchError):
            parse_addresses(make_page(row))

    def test_row_with_missing_cells(self):
        row = '<tr><td>Rua A</td><td>Centro</td></tr>'
        with pytest.raises(StructuralMismatchError) as exc_info:
            parse_addresses(make_page(row))
        assert exc_info.value.details == ('Rua ACentro',)

    def test_custom_config(self):
        html = make_page(ROW_SE).replace('ctrlcontent', 'resultado')
        config = ParserConfig(content_selector='div.resultado')
        assert parse_addresses(html, config)[0].district == 'Sé'


@pytest.mark.parametrize(
    'text, expected',
    [
        ('São Paulo/SP', ('São Paulo', 'SP')),
        (' Rio de Janeiro / RJ ', ('Rio de Janeiro', 'RJ')),
    ]
)
def test_split_city_state(text, expected):
    assert split_city_state(text) == expected


@pytest.mark.parametrize('text', ['Brasília', 'a/b/c', ''])
def test_split_invalid_city_state(text):
    with pytest.raises(StructuralMismatchError):
        split_city_state(text)


def test_parsing_is_repeatable():
    html = make_page(ROW_SE + ROW_PAULISTA)
    assert parse_addresses(html) == parse_addresses(html)
