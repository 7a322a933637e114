import typing

import bs4


def load_document(html: typing.Optional[str]) -> bs4.BeautifulSoup:
    """
    Parse the HTML contents of a page into a CSS-selector-queryable tree.

    Parsing is lenient: unmatched or unknown tags are tolerated and
    an empty or missing input yields an empty document.

    Args:
        html (str | None): HTML contents of the page.

    Returns:
        bs4.BeautifulSoup: The parsed document.
    """
    return bs4.BeautifulSoup(html or '', 'lxml')


def element_text(element: typing.Optional[bs4.Tag]) -> str:
    """
    Concatenate the text of all descendants of the element in source order.
    A missing element has no text.
    """
    if element is None:
        return ''
    return element.get_text()


def child_cells(row: bs4.Tag) -> list[bs4.Tag]:
    """Get the data cells of a table row, ignoring header cells."""
    return row.find_all('td', recursive=False)
