"""Compact bit-packed binary format for the market and its products."""

from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO

from marketdesk.customer import load_customers_file, save_customers_file
from marketdesk.date import MIN_YEAR, Date
from marketdesk.filehelper import FileFormatError, read_chars
from marketdesk.product import BARCODE_LENGTH, PREFIX_LENGTH, Product, ProductType

MAX_PRODUCT_NAME_LEN = 0x0F
MAX_MARKET_NAME_LEN = 0x3F
MAX_PRODUCTS = 0xFF
MAX_COUNT = 0xFF
MAX_PRICE_WHOLE = 0x1FF


def pack_date(date: Date) -> bytes:
    """Encode a date in two bytes: 5 bits day, 4 bits month, 3 bits year offset."""
    year_bits = date.year - MIN_YEAR
    if not 0 <= year_bits <= 0x07:
        raise ValueError(f"year {date.year} cannot be stored")
    if not 0 <= date.day <= 0x1F or not 0 <= date.month <= 0x0F:
        raise ValueError(f"date {date} cannot be stored")
    first = (date.day << 3) | (date.month >> 1)
    second = ((date.month & 0x01) << 7) | (year_bits << 4)
    return bytes((first, second))


def unpack_date(data: bytes) -> Date:
    """Decode the two bytes written by :func:`pack_date`."""
    if len(data) != 2:
        raise FileFormatError("a packed date takes 2 bytes")
    day = (data[0] >> 3) & 0x1F
    month = ((data[0] & 0x07) << 1) | ((data[1] >> 7) & 0x01)
    year = ((data[1] >> 4) & 0x07) + MIN_YEAR
    return Date(day, month, year)


def pack_count_price(product: Product) -> bytes:
    """Encode stock count and price (whole part and cents) in three bytes."""
    if not 0 <= product.count <= MAX_COUNT:
        raise ValueError(f"count {product.count} cannot be stored")
    total_cents = int(round(product.price * 100, 4))
    cents, whole = total_cents % 100, total_cents // 100
    if not 0 <= whole <= MAX_PRICE_WHOLE:
        raise ValueError(f"price {product.price} cannot be stored")
    return bytes((product.count, (cents << 1) | (whole >> 8), whole & 0xFF))


def unpack_count_price(data: bytes) -> tuple[int, float]:
    """Decode the three bytes written by :func:`pack_count_price`."""
    if len(data) != 3:
        raise FileFormatError("a packed count and price take 3 bytes")
    count = data[0]
    cents = (data[1] >> 1) & 0x7F
    whole = ((data[1] & 0x01) << 8) | data[2]
    return count, (whole * 100 + cents) / 100


def pack_product(product: Product) -> bytes:
    """Encode a whole product record: barcode digits, type, name, count, price, date."""
    digits = product.barcode[PREFIX_LENGTH:BARCODE_LENGTH]
    if len(product.barcode) != BARCODE_LENGTH or not all(ch in "0123456789" for ch in digits):
        raise ValueError(f"barcode {product.barcode!r} cannot be stored")
    name = product.name.encode("utf-8")
    if len(name) > MAX_PRODUCT_NAME_LEN:
        raise ValueError(f"product name {product.name!r} is too long to store")
    nibbles = [int(ch) for ch in digits]
    head = bytes(
        (
            (nibbles[0] << 4) | nibbles[1],
            (nibbles[2] << 4) | nibbles[3],
            (nibbles[4] << 4) | (int(product.product_type) << 2) | (len(name) >> 2),
            (len(name) & 0x03) << 6,
        )
    )
    return head + name + pack_count_price(product) + pack_date(product.expiry_date)


def read_product(fp: BinaryIO) -> Product:
    """Read one product record written by :func:`pack_product`."""
    head = read_chars(fp, 4)
    product_type = ProductType((head[2] >> 2) & 0x03)
    digits = "".join(
        str(nibble)
        for nibble in (head[0] >> 4, head[0] & 0x0F, head[1] >> 4, head[1] & 0x0F, head[2] >> 4)
    )
    name_len = ((head[2] & 0x03) << 2) | ((head[3] >> 6) & 0x03)
    try:
        name = read_chars(fp, name_len).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FileFormatError("product name is not valid text") from exc
    count, price = unpack_count_price(read_chars(fp, 3))
    expiry = unpack_date(read_chars(fp, 2))
    return Product(
        name=name,
        product_type=product_type,
        price=price,
        count=count,
        expiry_date=expiry,
        barcode=product_type.prefix + digits,
    )


def save_compressed(market: Any, file_name: str | Path, customers_file_name: str | Path) -> None:
    """Write the market (``name``, ``products``) compressed and its customers as text."""
    name = market.name.encode("utf-8")
    count = len(market.products)
    if len(name) > MAX_MARKET_NAME_LEN:
        raise ValueError(f"market name {market.name!r} is too long to store")
    if count > MAX_PRODUCTS:
        raise ValueError(f"{count} products cannot be stored")
    header = bytes((count >> 2, ((count & 0x03) << 6) | len(name)))
    body = b"".join(pack_product(product) for product in market.products)
    with open(file_name, "wb") as fp:
        fp.write(header + name + body)
    save_customers_file(market.customers, customers_file_name)


def load_compressed(market: Any, file_name: str | Path, customers_file_name: str | Path) -> Any:
    """Fill ``market`` from a compressed file; unreadable customers leave it with none."""
    with open(file_name, "rb") as fp:
        header = read_chars(fp, 2)
        count = ((header[0] << 2) & 0xFF) | ((header[1] >> 6) & 0x03)
        try:
            name = read_chars(fp, header[1] & 0x3F).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FileFormatError("market name is not valid text") from exc
        products = [read_product(fp) for _ in range(count)]
    try:
        customers = load_customers_file(customers_file_name)
    except (OSError, FileFormatError):
        customers = []
    market.name = name
    market.products = products
    market.customers = customers
    return market