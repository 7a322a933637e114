import logging
import typing

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from ..errors._errors import ConversionError
from ..models._models import Address
from ._text import strip_hyphens


logger = logging.getLogger('correiosparser.parser')


LOOKUP_CONVERSION_FAILED = (
    'Não foi possível converter a resposta da consulta de endereços.'
    )


class AddressLookupRecord(BaseModel):
    """A single address of the address lookup API response."""
    model_config = ConfigDict(populate_by_name=True)

    street: typing.Optional[str] = Field(default='', alias='logradouroDNEC')
    district: typing.Optional[str] = Field(default='', alias='bairro')
    city: typing.Optional[str] = Field(default='', alias='localidade')
    state: typing.Optional[str] = Field(default='', alias='uf')
    zip_code: typing.Optional[str] = Field(default='', alias='cep')

    def to_address(self) -> Address:
        return Address(
            street=(self.street or '').strip(),
            district=(self.district or '').strip(),
            city=(self.city or '').strip(),
            state=(self.state or '').strip(),
            zip_code=strip_hyphens(self.zip_code or '')
            )


class AddressLookupResponse(BaseModel):
    """Envelope of the address lookup API response."""
    model_config = ConfigDict(populate_by_name=True)

    error: bool = Field(default=False, alias='erro')
    data: typing.Optional[list[AddressLookupRecord]] = Field(
        default=None, alias='dados'
        )


_response_adapter = TypeAdapter(typing.Optional[AddressLookupResponse])


def parse_address_lookup(json_text: str) -> tuple[Address, ...]:
    """
    Convert the JSON response of the Correios address lookup API.

    A null payload, a payload flagged with `"erro": true` or a payload
    without data means that there are no results and yields an empty tuple.

    Args:
        json_text (str): JSON contents of the response.

    Returns:
        tuple[Address, ...]: The addresses, in the order of the response.

    Raises:
        ConversionError: If the text is not valid JSON or does not have
            the expected structure.
    """
    try:
        response = _response_adapter.validate_json(json_text)
    except ValidationError as exc:
        raise ConversionError(LOOKUP_CONVERSION_FAILED, cause=exc) from exc
    if response is None or response.error or not response.data:
        logger.debug('Address lookup returned no results')
        return ()
    return tuple(record.to_address() for record in response.data)
