import typing


class ParseError(Exception):
    """
    Base exception for Correios pages that could not be converted into
    typed records.

    The message is written in Portuguese and is meant to be shown directly
    to the end user of the consuming application.

    Args:
        message (str):
            Human-readable description of the failure.
        details (Iterable[str]):
            Raw diagnostic strings taken from the page, e.g. the text of
            every error banner shown by the price calculator.
            Defaults to an empty tuple.
        cause (Optional[BaseException]):
            The underlying exception, if the failure was caused by one.
            Defaults to None.
    """

    def __init__(
        self,
        message: str,
        *,
        details: typing.Iterable[str] = (),
        cause: typing.Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        """Human-readable description of the failure."""
        self.details: tuple[str, ...] = tuple(details)
        """Raw diagnostic strings surfaced by the page."""
        self.cause = cause
        """The underlying exception, if any."""

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        cls_name = self.__class__.__name__
        if self.details:
            return f'{cls_name}({self.message!r}, details={self.details!r})'
        return f'{cls_name}({self.message!r})'


class NotFoundError(ParseError):
    """The page reports that the address, package or posting does not exist."""


class StructuralMismatchError(ParseError):
    """The page is missing a cell or a field has an unexpected shape."""


class PageReportedError(ParseError):
    """The page itself displays one or more error banners."""


class ConversionError(ParseError):
    """An unexpected failure occurred while walking the page."""
