"""`correiosparser.config` package provides the selectors configuration
shared by all parsers.
"""

from ._config import DEFAULT_CONFIG, ParserConfig

__all__ = ['DEFAULT_CONFIG', 'ParserConfig']
