"""Shopping items and the cart that keeps them ordered by barcode."""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass

from marketdesk.product import BARCODE_LENGTH


class DuplicateItemError(ValueError):
    """An item with the same barcode is already in the cart."""


@dataclass
class ShoppingItem:
    barcode: str
    price: float
    count: int

    def __str__(self) -> str:
        return f"Item {self.barcode} count {self.count} price per item {self.price:.2f}"


class ShoppingCart:
    """Items kept in ascending barcode order, one entry per barcode."""

    def __init__(self) -> None:
        self._items: list[ShoppingItem] = []

    def __iter__(self) -> Iterator[ShoppingItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find(self, barcode: str) -> ShoppingItem | None:
        """Return the item with this barcode, or None."""
        key = barcode[:BARCODE_LENGTH]
        return next((item for item in self._items if item.barcode == key), None)

    def insert_item(self, item: ShoppingItem) -> None:
        """Insert a new item at its place in barcode order."""
        keys = [existing.barcode for existing in self._items]
        index = bisect.bisect_left(keys, item.barcode)
        if index < len(keys) and keys[index] == item.barcode:
            raise DuplicateItemError(f"Not new product: {item.barcode}")
        self._items.insert(index, item)

    def add_item(self, barcode: str, price: float, count: int) -> ShoppingItem:
        """Add items; an existing barcode only has its count raised."""
        item = self.find(barcode)
        if item is None:
            item = ShoppingItem(barcode, price, count)
            self.insert_item(item)
        else:
            item.count += count
        return item

    def total_price(self) -> float:
        return sum(item.price * item.count for item in self._items)

    def lines(self) -> list[str]:
        """One printable line per item, in cart order."""
        return [str(item) for item in self._items]

    def clear(self) -> None:
        self._items.clear()