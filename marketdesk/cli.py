"""Interactive menu for running the market."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from marketdesk.general import Console, format_message
from marketdesk.storage import StorageError, save_market
from marketdesk.supermarket import SuperMarket

EXIT = -1
SUPER_FILE_NAME = "SuperMarket.bin"
CUSTOMER_FILE_NAME = "Customers.txt"
COMPRESS_FILE_NAME = "SuperMarket_Compress.bin"

MENU_STRINGS = (
    "Show SuperMarket",
    "Add Product",
    "Add Customer",
    "Customer Shopping",
    "Print Shopping Cart",
    "Customer Shopping Cart Managment",
    "Sort Products",
    "Search Product",
    "Print Product By Type",
)

_USAGE = "Usage: Insert 1 2 or 3 to select the exe you want to run\n"


def menu(console: Console) -> int | None:
    """Show the options and read the choice; None when it is not a number."""
    console.write("\nPlease choose one of the following options\n")
    for index, label in enumerate(MENU_STRINGS):
        console.write(f"{index} - {label}\n")
    console.write(f"{EXIT} - Quit\n")
    try:
        option: int | None = console.read_int()
    except ValueError:
        option = None
    try:
        console.read_char()
    except EOFError:
        pass
    return option


def _show(market: SuperMarket, console: Console) -> None:
    console.write(market.describe())


def _add_product(market: SuperMarket, console: Console) -> None:
    if not market.add_product(console):
        console.write("Error adding product\n")


def _add_customer(market: SuperMarket, console: Console) -> None:
    market.add_customer(console)


def _shopping(market: SuperMarket, console: Console) -> None:
    if not market.do_shopping(console):
        console.write("Error in shopping\n")


def _print_cart(market: SuperMarket, console: Console) -> None:
    market.print_cart(console)


def _manage_cart(market: SuperMarket, console: Console) -> None:
    if not market.manage_cart(console):
        console.write("Error in shopping cart managment\n")


def _sort(market: SuperMarket, console: Console) -> None:
    market.prompt_sort(console)


def _search(market: SuperMarket, console: Console) -> None:
    market.search(console)


def _by_type(market: SuperMarket, console: Console) -> None:
    market.print_products_by_type(console)


_ACTIONS: tuple[Callable[[SuperMarket, Console], None], ...] = (
    _show,
    _add_product,
    _add_customer,
    _shopping,
    _print_cart,
    _manage_cart,
    _sort,
    _search,
    _by_type,
)


def _parse_args(args: Sequence[str]) -> tuple[bool, str] | None:
    if len(args) != 2:
        return None
    try:
        flag = int(args[0].strip())
    except ValueError:
        return None
    if flag not in (0, 1):
        return None
    return bool(flag), args[1]


def main(argv: Sequence[str] | None = None) -> int:
    """Run the market: ``<0|1 compressed> <market file>``."""
    args = list(sys.argv[1:] if argv is None else argv)
    console = Console()
    parsed = _parse_args(args)
    if parsed is None:
        console.write(_USAGE)
        return 1
    compressed, file_name = parsed

    try:
        market = SuperMarket.open(console, file_name, CUSTOMER_FILE_NAME, compressed)
    except EOFError:
        console.write("error init Super Market")
        return 1

    while True:
        try:
            option = menu(console)
            if option == EXIT:
                console.write(
                    format_message("Thank", "You", "For", "Shopping", "With", "Us") + "\n"
                )
                break
            if option is not None and 0 <= option < len(_ACTIONS):
                _ACTIONS[option](market, console)
            else:
                console.write("Wrong option\n")
        except EOFError:
            break

    market.close_carts(console.out)
    try:
        save_market(market, file_name, CUSTOMER_FILE_NAME, compressed)
    except StorageError:
        console.write("Error saving supermarket to file\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())