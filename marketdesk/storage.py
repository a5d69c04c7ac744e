"""Saving and loading the whole market, plain or compressed."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Any

from marketdesk.compressed import load_compressed, save_compressed
from marketdesk.customer import load_customers_file, save_customers_file
from marketdesk.filehelper import FileFormatError, read_int, read_string, write_int, write_string
from marketdesk.product import Product


class StorageError(Exception):
    """The market could not be saved or loaded."""


def save_market(
    market: Any, file_name: str | Path, customers_file_name: str | Path, compressed: bool
) -> None:
    """Write the market's name and products to ``file_name`` and customers as text."""
    try:
        if compressed:
            save_compressed(market, file_name, customers_file_name)
            return
        with open(file_name, "wb") as fp:
            write_string(fp, market.name)
            write_int(fp, len(market.products))
            for product in market.products:
                product.save(fp)
        save_customers_file(market.customers, customers_file_name)
    except (OSError, ValueError, struct.error, FileFormatError) as exc:
        raise StorageError(f"Error saving supermarket to file: {exc}") from exc


def load_market(
    market: Any, file_name: str | Path, customers_file_name: str | Path, compressed: bool
) -> Any:
    """Fill ``market`` (``name``, ``products``, ``customers``) from the files."""
    try:
        if compressed:
            return load_compressed(market, file_name, customers_file_name)
        with open(file_name, "rb") as fp:
            name = read_string(fp)
            count = read_int(fp)
            if count < 0:
                raise FileFormatError(f"invalid product count {count}")
            products = [Product.load(fp) for _ in range(count)]
        customers = load_customers_file(customers_file_name)
    except (OSError, FileFormatError) as exc:
        raise StorageError(f"Error loading supermarket: {exc}") from exc
    market.name = name
    market.products = products
    market.customers = customers
    return market