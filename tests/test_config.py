import json

import pydantic
import pytest

from correiosparser.config import DEFAULT_CONFIG, ParserConfig


def test_default_config():
    assert DEFAULT_CONFIG.content_selector == 'div.ctrlcontent'
    assert DEFAULT_CONFIG.address_not_found_text == 'DADOS NAO ENCONTRADOS'


def test_config_by_name_and_alias():
    by_name = ParserConfig(content_selector='div.main')
    by_alias = ParserConfig(contentSelector='div.main')
    assert by_name == by_alias
    assert by_name.price_error_selector == DEFAULT_CONFIG.price_error_selector


def test_config_is_frozen():
    with pytest.raises(pydantic.ValidationError):
        DEFAULT_CONFIG.content_selector = 'div'  # type: ignore


def test_config_from_file(tmp_path):
    filepath = tmp_path / 'config.json'
    filepath.write_text(
        json.dumps({'priceErrorSelector': '.alert'}), encoding='utf-8'
        )
    config = ParserConfig.from_file(filepath)
    assert config.price_error_selector == '.alert'
    assert config.content_selector == DEFAULT_CONFIG.content_selector


def test_config_from_invalid_file(tmp_path):
    filepath = tmp_path / 'config.json'
    filepath.write_text(json.dumps({'contentSelector': 1}), encoding='utf-8')
    with pytest.raises(pydantic.ValidationError):
        ParserConfig.from_file(filepath)
