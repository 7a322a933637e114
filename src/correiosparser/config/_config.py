import json
import os
import typing

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ParserConfig(BaseModel):
    """
    CSS selectors and sentinel texts used to locate data on Correios pages.

    The defaults match the pages currently served by Correios. Any field can
    be overridden, either with its Python name or with its camelCase alias,
    to follow small markup changes without a new release.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        )

    content_selector: str = 'div.ctrlcontent'
    """Container holding the substantive result of every page."""
    address_message_selector: str = 'p'
    """Paragraph inside the container with the address search message."""
    address_not_found_text: str = 'DADOS NAO ENCONTRADOS'
    """Exact message displayed when the address search has no results."""
    address_rows_selector: str = (
        ':scope > table.tmptabela > tbody > tr, '
        ':scope > table.tmptabela > tr'
        )
    """Rows of the address results table, relative to the container."""
    tracking_code_selector: str = '.codSro'
    """Element holding the package code on the event list layout."""
    tracking_rows_selector: str = (
        'table.listEvent.sro > tbody > tr, table.listEvent.sro > tr'
        )
    """Rows of the event list table."""
    tracking_status_selector: str = 'strong'
    """Emphasized headline inside the event description cell."""
    legacy_code_selector: str = ':scope > p'
    """Paragraph with the "<code> - <title>" text on the legacy layout."""
    legacy_table_selector: str = 'table'
    """Candidate event tables on the legacy layout."""
    legacy_status_selector: str = 'b, strong, font'
    """Emphasized headline inside the legacy status cell."""
    price_error_selector: str = '.info.error'
    """Error banners displayed by the price calculator."""
    price_result_selector: str = 'table.comparaResult tr.destaque td'
    """Cells of the highlighted price result row."""
    price_addresses_selector: str = (
        'div.contentexpodados > table.comparaResult tr > td'
        )
    """Cells of the origin and destination table."""

    @classmethod
    def from_file(
        cls, filepath: typing.Union[str, os.PathLike]
    ) -> 'ParserConfig':
        """
        Load a configuration from a JSON file. Missing fields keep
        their default values.

        Args:
            filepath (str | os.PathLike): Path to the JSON file.

        Returns:
            ParserConfig: The loaded configuration.

        Raises:
            OSError: If the file cannot be read.
            pydantic.ValidationError: If the file contents are not
            a valid configuration.
        """
        with open(filepath, 'r', encoding='utf-8') as file:
            data = json.load(file)
        return cls.model_validate(data)


DEFAULT_CONFIG = ParserConfig()
"""Configuration used when the caller does not provide one."""
