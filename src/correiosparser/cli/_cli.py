import argparse
import json
import logging
import typing

from rich.console import Console
from rich.logging import RichHandler
from rich.padding import Padding
from rich.table import Table

from .._logging import logger
from ..config import DEFAULT_CONFIG, ParserConfig
from ..errors import ParseError
from ..models import Address, DeliveryPrice, Package
from ..parser import (
    parse_address_lookup,
    parse_addresses,
    parse_package,
    parse_price,
)


console = Console()
error_console = Console(stderr=True)


Record = typing.Union[Address, Package, DeliveryPrice]


class CustomHelpFormatter(argparse.HelpFormatter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs, max_help_position=48)


def get_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='correiosparser',
        description="Parse a saved Correios page and print its contents.",
        formatter_class=CustomHelpFormatter,
        )
    parser.add_argument(
        'command',
        choices=['address', 'tracking', 'price', 'lookup'],
        help="Kind of the saved page"
        )
    parser.add_argument(
        'file',
        help="Path to the saved page (UTF-8)"
        )
    parser.add_argument(
        '-m',
        '--mode',
        default='SEDEX',
        help="Shipping service label of a price page (default: SEDEX)"
        )
    parser.add_argument(
        '-c',
        '--config',
        help="Path to a JSON file overriding the parser selectors"
        )
    parser.add_argument(
        '-j',
        '--json',
        action='store_true',
        help="Print the result as JSON"
        )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help="Print debug logs"
        )
    return parser


def read_file(filepath: str) -> str:
    with open(filepath, 'r', encoding='utf-8') as file:
        return file.read()


def parse_contents(
    command: str, contents: str, mode: str, config: ParserConfig
) -> list[Record]:
    if command == 'address':
        return list(parse_addresses(contents, config))
    if command == 'lookup':
        return list(parse_address_lookup(contents))
    if command == 'tracking':
        return [parse_package(contents, config)]
    if command == 'price':
        return [parse_price(mode, contents, config)]
    raise ValueError(f'Unknown command: "{command}"')


def build_address_table(addresses: typing.Iterable[Address]) -> Table:
    table = Table(title='Addresses')
    for column in ('Street', 'District', 'City', 'State', 'Zip code'):
        table.add_column(column)
    for address in addresses:
        table.add_row(
            address.street,
            address.district,
            address.city,
            address.state,
            address.zip_code
            )
    return table


def build_package_table(package: Package) -> Table:
    status = 'delivered' if package.is_delivered else 'in transit'
    table = Table(title=f'Package {package.code} ({status})')
    for column in ('Date', 'Location', 'Status', 'Details'):
        table.add_column(column)
    for event in package.events:
        table.add_row(
            event.timestamp.strftime('%d/%m/%Y %H:%M'),
            event.location,
            event.status,
            event.details
            )
    return table


def build_price_table(price: DeliveryPrice) -> Table:
    table = Table(title=f'Delivery price ({price.mode})')
    table.add_column('Price', justify='right')
    table.add_column('Days', justify='right')
    table.add_column('Origin')
    table.add_column('Destination')

    def format_address(address: typing.Optional[Address]) -> str:
        if address is None:
            return '-'
        return f'{address.city}/{address.state} {address.zip_code}'

    table.add_row(
        f'R$ {price.price}',
        str(price.days) if price.has_estimate else '-',
        format_address(price.origin),
        format_address(price.destination)
        )
    return table


def build_table(command: str, records: list[Record]) -> Table:
    if command in ('address', 'lookup'):
        return build_address_table(
            record for record in records if isinstance(record, Address)
            )
    record = records[0]
    if isinstance(record, Package):
        return build_package_table(record)
    if isinstance(record, DeliveryPrice):
        return build_price_table(record)
    raise TypeError(f'Unsupported record type: "{type(record).__name__}"')


def print_records(command: str, records: list[Record], as_json: bool) -> None:
    if as_json:
        data = [record.as_dict() for record in records]
        console.print_json(json.dumps(data, ensure_ascii=False))
    elif not records:
        console.print('No results.')
    else:
        console.print(Padding(build_table(command, records), 1))


def print_parse_error(exc: ParseError) -> None:
    error_console.print(f'[bold red]{exc.message}[/bold red]')
    for detail in exc.details:
        error_console.print(f'  - {detail}')


def setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    handler = RichHandler(console=error_console)
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def run(argv: typing.Optional[list[str]] = None) -> int:
    """
    Run the command line program.

    Args:
        argv (Optional[list[str]]): Command line arguments, excluding
            the program name. If None, `sys.argv` is used.

    Returns:
        int: The exit status. 1 if the page could not be parsed.
    """
    parser = get_arg_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        config = (
            ParserConfig.from_file(args.config) if args.config
            else DEFAULT_CONFIG
            )
        contents = read_file(args.file)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    try:
        records = parse_contents(args.command, contents, args.mode, config)
    except ParseError as exc:
        print_parse_error(exc)
        return 1
    print_records(args.command, records, args.json)
    return 0
