"""Customers, club members and the customers text file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from marketdesk.filehelper import FileFormatError, read_text_line
from marketdesk.general import Console, check_alpha_space, check_empty_string, split_words
from marketdesk.shopping import ShoppingCart

CUSTOMER_ID_LENGTH = 9
NAMES_SEP = " "
NAME_PARTS_SEP = "- "

YEAR_1 = 2
YEAR_1_DISCOUNT = 0.1
YEAR_2 = 5
BASE_2_DISCOUNT = 2.5
YEAR_2_DISCOUNT = 0.5
MAX_DISCOUNT = 7.5


def member_discount(total_months: int) -> float:
    """Discount percentage earned by a club membership of this length."""
    total_years = total_months // 12
    if total_years < YEAR_1:
        return YEAR_1_DISCOUNT * total_months
    if total_years < YEAR_2:
        return BASE_2_DISCOUNT + YEAR_2_DISCOUNT * total_years
    return MAX_DISCOUNT


def is_customer_id_valid(customer_id: str) -> bool:
    return len(customer_id) == CUSTOMER_ID_LENGTH and all(
        ch in "0123456789" for ch in customer_id
    )


def normalize_name_part(text: str) -> str:
    """Lower-case the text and capitalise its first non-space character."""
    lowered = text.lower()
    stripped = lowered.lstrip()
    if not stripped:
        return lowered
    lead = len(lowered) - len(stripped)
    return lowered[:lead] + stripped[0].upper() + stripped[1:]


def combine_name(first: str, last: str) -> str:
    """Join the words of both parts into ``First Words - Last Words``."""
    combined = "".join(word + NAMES_SEP for word in split_words(first, NAMES_SEP))
    combined += NAME_PARTS_SEP
    combined += "".join(word + NAMES_SEP for word in split_words(last, NAMES_SEP))
    return combined[:-1]


@dataclass
class Customer:
    customer_id: str
    name: str
    cart: ShoppingCart | None = field(default=None, compare=False)

    def discount(self) -> float:
        return 0.0

    def describe(self) -> str:
        status = "Shopping cart is empty!" if self.cart is None else "Doing shopping now!!!"
        return f"Name: {self.name}\nID: {self.customer_id}\n{status}\n"

    def bill(self) -> str:
        """The cart listing followed by the total, after any discount."""
        if self.cart is None:
            raise ValueError("Customer cart is empty")
        price = self.cart.total_price()
        text = "\n" + "".join(line + "\n" for line in self.cart.lines()) + "\n"
        discount = self.discount()
        if discount == 0:
            text += f"Total price for {self.name} is {price:.2f}\n"
        else:
            price -= price * (discount / 100)
            text += (
                f"Total price for {self.name} is {price:.2f}, "
                f"after discount of {discount:.2f}%\n"
            )
        return text

    def pay(self, out: TextIO) -> None:
        """Print the bill and empty the cart; nothing happens without a cart."""
        if self.cart is None:
            return
        out.write(f"---------- Cart info and bill for {self.name} ----------\n")
        out.write(self.bill())
        out.write("!!! --- Payment was recived!!!! --- \n")
        self.cart.clear()
        self.cart = None

    def cancel_shopping(self, out: TextIO) -> None:
        if self.cart is None:
            return
        out.write("!!! --- Purchase was canceled!!!! --- \n")
        self.cart.clear()
        self.cart = None

    def save(self, fp: TextIO) -> None:
        fp.write(f"{self.name}\n{self.customer_id}\n0\n")


@dataclass
class ClubMember(Customer):
    total_months: int = 1

    def discount(self) -> float:
        return member_discount(self.total_months)

    def describe(self) -> str:
        return super().describe() + f"Total months of membership: {self.total_months}\n"

    def save(self, fp: TextIO) -> None:
        fp.write(f"{self.name}\n{self.customer_id}\n1 {self.total_months}\n")


def _read_token(fp: TextIO) -> str:
    ch = fp.read(1)
    while ch and ch.isspace():
        ch = fp.read(1)
    if not ch:
        raise FileFormatError("unexpected end of file")
    chars = []
    while ch and not ch.isspace():
        chars.append(ch)
        ch = fp.read(1)
    return "".join(chars)


def _read_int_token(fp: TextIO) -> int:
    token = _read_token(fp)
    try:
        return int(token)
    except ValueError as exc:
        raise FileFormatError(f"expected an integer, got {token!r}") from exc


def load_customer(fp: TextIO) -> Customer:
    """Read one customer record as written by ``save``."""
    name = read_text_line(fp)
    customer_id = _read_token(fp)
    if _read_int_token(fp):
        return ClubMember(customer_id, name, total_months=_read_int_token(fp))
    return Customer(customer_id, name)


def save_customers_file(customers: list[Customer], path: str | Path) -> None:
    with open(path, "w", encoding="utf-8") as fp:
        fp.write(f"{len(customers)}\n")
        for customer in customers:
            customer.save(fp)


def load_customers_file(path: str | Path) -> list[Customer]:
    with open(path, encoding="utf-8") as fp:
        count = _read_int_token(fp)
        return [load_customer(fp) for _ in range(max(count, 0))]


def prompt_customer_id(console: Console) -> str:
    msg = f"ID should be {CUSTOMER_ID_LENGTH} digits\nFor example: 123456789\n"
    while True:
        customer_id = console.prompt_line(msg)
        if is_customer_id_valid(customer_id):
            return customer_id


def _prompt_name_part(console: Console, msg: str) -> str:
    while True:
        part = console.prompt_line(msg)
        if check_empty_string(part):
            console.write("Name can not be empty\n")
        elif not check_alpha_space(part):
            console.write("Name should contain only letters\n")
        else:
            return normalize_name_part(part)


def prompt_name(console: Console) -> str:
    first = _prompt_name_part(console, "Enter customer first name\n")
    last = _prompt_name_part(console, "Enter customer last name\n")
    return combine_name(first, last)


def prompt_customer(console: Console, customer_id: str, club_member: bool) -> Customer:
    """Ask for the name, and for club members the months of membership."""
    name = prompt_name(console)
    if not club_member:
        return Customer(customer_id, name)
    while True:
        console.write("Please enter the total months of membership\n")
        try:
            months = console.read_int()
        except ValueError:
            months = 0
        if months > 0:
            return ClubMember(customer_id, name, total_months=months)
        console.write("Total months should be positive\n")