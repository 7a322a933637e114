import datetime
import decimal
import re
import typing


class Locale(typing.Protocol):
    """
    Formatting capability used by the parsers to read locale-specific
    dates and amounts.
    """

    def parse_datetime(self, date: str, time: str) -> datetime.datetime:
        """
        Parse a date and a time of day into a `datetime`.

        Raises:
            ValueError: If the texts are not a valid date and time.
        """
        ...

    def parse_currency(self, text: str) -> decimal.Decimal:
        """
        Parse a currency amount into a `Decimal`.

        Raises:
            ValueError: If the text is not a valid amount.
        """
        ...

    def format_date(self, date: datetime.date) -> str:
        """Format a date the way the Correios forms expect it."""
        ...


class BrazilianLocale:
    """
    Brazilian Portuguese (pt-BR) formats: "dd/MM/yyyy HH:mm" dates and
    "R$ 1.234,56" amounts.
    """
    CURRENCY_SYMBOL = 'R$'
    DATE_FORMAT = '%d/%m/%Y'
    TIME_FORMATS = ('%H:%M', '%H:%M:%S')

    _amount_pattern = re.compile(
        r'^(?P<sign>-)?\s*(?P<int>\d{1,3}(?:\.\d{3})+|\d+)(?:,(?P<frac>\d+))?$'
        )

    def parse_datetime(self, date: str, time: str) -> datetime.datetime:
        text = f'{date.strip()} {time.strip()}'
        for time_format in self.TIME_FORMATS:
            try:
                return datetime.datetime.strptime(
                    text, f'{self.DATE_FORMAT} {time_format}'
                    )
            except ValueError:
                continue
        raise ValueError(f'Invalid pt-BR date and time: "{text}"')

    def parse_currency(self, text: str) -> decimal.Decimal:
        """
        Parse a pt-BR amount such as "R$ 1.234,56", "-3,10" or "(3,10)".

        Dots are only accepted as thousands separators in groups of three
        digits. A dot used as a decimal point, as in "25.50", is rejected
        with a ValueError instead of being read as 2550 the way a lenient
        pt-BR number parser would read it.

        Raises:
            ValueError: If the text is not a valid amount.
        """
        cleaned = text.strip()
        negative = cleaned.startswith('(') and cleaned.endswith(')')
        if negative:
            cleaned = cleaned[1:-1].strip()
        cleaned = cleaned.replace(self.CURRENCY_SYMBOL, '', 1).strip()
        match = self._amount_pattern.match(cleaned)
        if not match:
            raise ValueError(f'Invalid pt-BR currency amount: "{text}"')
        # thousands separators are dots, the decimal separator is a comma
        integer = match.group('int').replace('.', '')
        fraction = match.group('frac') or '0'
        amount = decimal.Decimal(f'{integer}.{fraction}')
        if negative or match.group('sign'):
            amount = -amount
        return amount

    def format_date(self, date: datetime.date) -> str:
        return date.strftime(self.DATE_FORMAT)


BRAZILIAN_LOCALE = BrazilianLocale()
"""Locale used when the caller does not provide one."""
