"""Products held in stock, their barcodes and fixed-size records."""

from __future__ import annotations

import random
import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO

from marketdesk.date import MIN_YEAR, Date, prompt_date
from marketdesk.filehelper import FileFormatError
from marketdesk.general import Console, check_empty_string

NAME_LENGTH = 20
BARCODE_LENGTH = 7
MIN_BARCODE = 10000
MAX_BARCODE = 99999
PREFIX_LENGTH = 2
BARCODE_DIGITS_LENGTH = 5

_RECORD = struct.Struct("<21s8s3xifi3i")


class ProductType(IntEnum):
    FRUIT_VEGETABLE = 0
    FRIDGE = 1
    FROZEN = 2
    SHELF = 3

    @property
    def label(self) -> str:
        return ("Fruit Vegtable", "Fridge", "Frozen", "Shelf")[self]

    @property
    def prefix(self) -> str:
        return ("FV", "FR", "FZ", "SH")[self]


class InvalidBarcodeError(ValueError):
    """A barcode does not have the required form."""


def validate_barcode(code: str) -> str:
    """Return the code if it is a type prefix followed by five digits."""
    if len(code) != BARCODE_LENGTH:
        raise InvalidBarcodeError("Invalid barcode length")
    if code[:PREFIX_LENGTH] not in {t.prefix for t in ProductType}:
        raise InvalidBarcodeError("Invalid type prefix")
    digits = code[PREFIX_LENGTH:]
    if not all(ch in "0123456789" for ch in digits):
        raise InvalidBarcodeError("Only digits after type prefix")
    if len(digits) != BARCODE_DIGITS_LENGTH:
        raise InvalidBarcodeError("Incorrect number of digits")
    return code


def _cstr(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass
class Product:
    name: str
    product_type: ProductType = ProductType.SHELF
    price: float = 0.0
    count: int = 0
    expiry_date: Date = field(default_factory=lambda: Date(1, 1, MIN_YEAR))
    barcode: str = ""

    def generate_barcode(self, rng: random.Random | None = None) -> str:
        """Assign a random barcode with this product's type prefix."""
        rng = rng or random.Random()
        self.barcode = f"{self.product_type.prefix}{rng.randint(MIN_BARCODE, MAX_BARCODE)}"
        return self.barcode

    def matches(self, barcode: str) -> bool:
        return self.barcode == barcode

    def add_stock(self, count: int) -> None:
        if count < 1:
            raise ValueError("count to add must be at least 1")
        self.count += count

    def format_row(self) -> str:
        return (
            f"{self.name:<20} {self.barcode:<10}\t"
            f"{self.product_type.label:<20} {self.price:5.2f} {self.count:13d} "
            f"{' ':>7} {str(self.expiry_date):>15}"
        )

    def pack(self) -> bytes:
        """Encode as the fixed-size binary record."""
        name = self.name.encode("utf-8")[:NAME_LENGTH]
        barcode = self.barcode.encode("ascii")[:BARCODE_LENGTH]
        d = self.expiry_date
        return _RECORD.pack(
            name, barcode, int(self.product_type), self.price, self.count, d.day, d.month, d.year
        )

    @classmethod
    def unpack(cls, data: bytes) -> Product:
        if len(data) != _RECORD.size:
            raise FileFormatError("Error reading product from file")
        name, barcode, ptype, price, count, day, month, year = _RECORD.unpack(data)
        try:
            product_type = ProductType(ptype)
        except ValueError as exc:
            raise FileFormatError(f"unknown product type {ptype}") from exc
        return cls(
            name=_cstr(name),
            product_type=product_type,
            price=price,
            count=count,
            expiry_date=Date(day, month, year),
            barcode=_cstr(barcode),
        )

    def save(self, fp: BinaryIO) -> None:
        fp.write(self.pack())

    @classmethod
    def load(cls, fp: BinaryIO) -> Product:
        return cls.unpack(fp.read(_RECORD.size))


def by_name(product: Product) -> str:
    return product.name


def by_count(product: Product) -> int:
    return product.count


def by_price(product: Product) -> float:
    return product.price


def read_barcode(console: Console) -> str:
    """Ask until a well-formed barcode is entered."""
    msg = (
        f"Code should be of {BARCODE_LENGTH} length exactly\n"
        f"Must have {PREFIX_LENGTH} type prefix letters followed by a "
        f"{BARCODE_DIGITS_LENGTH} digits number\n"
        "For example: FR20301"
    )
    while True:
        code = console.prompt_line(msg)
        try:
            return validate_barcode(code)
        except InvalidBarcodeError as exc:
            console.write(f"{exc}\n")


def prompt_product_type(console: Console) -> ProductType:
    console.write("\n")
    while True:
        console.write("Please enter one of the following types\n")
        for ptype in ProductType:
            console.write(f"{int(ptype)} for {ptype.label}\n")
        try:
            option = console.read_int()
        except ValueError:
            continue
        if 0 <= option < len(ProductType):
            console.read_char()
            return ProductType(option)


def prompt_product_name(console: Console) -> str:
    while True:
        console.write(f"enter product name up to {NAME_LENGTH} chars\n")
        name = console.read_line()[:NAME_LENGTH]
        if not check_empty_string(name):
            return name


def prompt_product(console: Console) -> Product:
    """Ask for every product field except the barcode."""
    name = prompt_product_name(console)
    product_type = prompt_product_type(console)
    expiry = prompt_date(console)
    price = console.get_positive_float("Enter product price\t")
    count = console.get_positive_int("Enter product number of items\t")
    return Product(
        name=name, product_type=product_type, price=price, count=count, expiry_date=expiry
    )


def prompt_stock_update(console: Console, product: Product) -> None:
    while True:
        console.write("How many items to add to stock? ")
        try:
            count = console.read_int()
        except ValueError:
            continue
        if count >= 1:
            product.add_stock(count)
            return