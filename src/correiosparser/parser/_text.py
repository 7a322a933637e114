import re
import typing


_LINE_BREAKS = re.compile(r'(?:\r\n?|\n|\t)+')
_NON_NUMERIC = re.compile(r'[^0-9.]')
_NON_DIGITS = re.compile(r'\D')
_DIGITS = re.compile(r'\d+')


def collapse_line_breaks(text: str) -> str:
    """
    Replace every run of line breaks and tabs with a single space
    and trim the result.
    """
    return _LINE_BREAKS.sub(' ', text).strip()


def strip_non_numeric(text: str) -> str:
    """Remove every character that is not a decimal digit or a dot."""
    return _NON_NUMERIC.sub('', text)


def strip_non_digits(text: str) -> str:
    """Keep only the decimal digits, e.g. "01.310-100" becomes "01310100"."""
    return _NON_DIGITS.sub('', text)


def strip_hyphens(text: str) -> str:
    """Remove hyphen separators, e.g. "01310-100" becomes "01310100"."""
    return text.replace('-', '').strip()


def split_on_space_run(text: str, count: int = 1) -> list[str]:
    """
    Split the text on exactly `count` consecutive spaces, dropping
    empty fragments.

    Args:
        text (str): The text to split.
        count (int): Number of consecutive spaces that separate
            the fragments. Defaults to 1.

    Returns:
        list[str]: The non-empty fragments, in order.
    """
    if count < 1:
        raise ValueError('The number of spaces must be positive.')
    return [part for part in text.split(' ' * count) if part]


def find_first_number(text: str) -> typing.Optional[int]:
    """Return the first run of decimal digits in the text, if any."""
    match = _DIGITS.search(text)
    if match is None:
        return None
    return int(match.group())
