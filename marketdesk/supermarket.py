"""The market: its stock, its customers and the shopping workflows."""

from __future__ import annotations

import bisect
import random
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path
from typing import Any

from marketdesk.customer import Customer, prompt_customer, prompt_customer_id
from marketdesk.general import Console
from marketdesk.product import (
    NAME_LENGTH,
    Product,
    ProductType,
    by_count,
    by_name,
    by_price,
    prompt_product,
    prompt_product_type,
    prompt_stock_update,
    read_barcode,
)
from marketdesk.shopping import DuplicateItemError, ShoppingCart
from marketdesk.storage import StorageError, load_market

_TABLE_RULE = (
    "-------------------------------------------------------------------------------------------------"
)


class SortOption(IntEnum):
    NONE = 0
    NAME = 1
    COUNT = 2
    PRICE = 3

    @property
    def label(self) -> str:
        return ("None", "Name", "Count", "Price")[self]


_SORT_KEYS: dict[SortOption, Callable[[Product], Any]] = {
    SortOption.NAME: by_name,
    SortOption.COUNT: by_count,
    SortOption.PRICE: by_price,
}


def _read_answer(console: Console) -> str:
    """Read the first non-space character, then drop the character after it."""
    ch = console.read_char()
    while ch.isspace():
        ch = console.read_char()
    console.read_char()
    return ch


class SuperMarket:
    """Products in stock, registered customers and the current sort order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.customers: list[Customer] = []
        self.products: list[Product] = []
        self.sort_option = SortOption.NONE
        self.rng = random.Random()

    @classmethod
    def open(
        cls,
        console: Console,
        file_name: str | Path,
        customers_file_name: str | Path,
        compressed: bool,
    ) -> SuperMarket:
        """Load the market from its files, or ask for a name to start a new one."""
        market = cls("")
        try:
            load_market(market, file_name, customers_file_name, compressed)
        except StorageError:
            market.products = []
            market.customers = []
            market.name = console.prompt_line("Enter market name")
            return market
        console.write("Supermarket successfully loaded from files\n")
        return market

    def describe(self) -> str:
        return (
            f"Super Market Name: {self.name}\t\n"
            + self.products_table()
            + "\n"
            + self.customers_text()
        )

    def products_table(self) -> str:
        header = (
            f"There are {len(self.products)} products\n"
            f"{'Name':<20} {'Barcode':<10}\t"
            f"{'Type':<20} {'Price':<10} {'Count In Stoke':<20} {'Expiry Date':<15}\n"
            f"{_TABLE_RULE}\n"
        )
        return header + "".join(product.format_row() + "\n" for product in self.products)

    def customers_text(self) -> str:
        return f"There are {len(self.customers)} listed customers\n" + "".join(
            customer.describe() for customer in self.customers
        )

    def is_barcode_unique(self, barcode: str) -> bool:
        return all(product.barcode != barcode for product in self.products)

    def is_customer_id_unique(self, customer_id: str) -> bool:
        return all(customer.customer_id != customer_id for customer in self.customers)

    def product_index(self, barcode: str) -> int | None:
        """Position of the product with this barcode, or None."""
        return next(
            (index for index, product in enumerate(self.products) if product.matches(barcode)),
            None,
        )

    def product_by_barcode(self, barcode: str) -> Product | None:
        return next((product for product in self.products if product.matches(barcode)), None)

    def find_customer(self, customer_id: str) -> Customer | None:
        return next(
            (customer for customer in self.customers if customer.customer_id == customer_id),
            None,
        )

    def add_product(self, console: Console) -> bool:
        """Add a new product or top up an existing one; False when nothing can be done."""
        console.write("\nAdding new product? y/Y: ")
        answer = console.read_char()
        console.read_char()
        if answer.upper() == "Y":
            self.add_new_product(console)
            return True
        if not self.products:
            return False
        console.write("Do you want to increase the amount of an existing product? y/Y: ")
        answer = console.read_char()
        console.read_char()
        if answer.upper() == "Y":
            console.write(self.products_table())
            product = self._product_from_user(console)
            if product is not None:
                prompt_stock_update(console, product)
        return True

    def add_new_product(self, console: Console) -> Product:
        """Ask for a product and give it a barcode no other product has."""
        product = prompt_product(console)
        product.generate_barcode(self.rng)
        while not self.is_barcode_unique(product.barcode):
            product.generate_barcode(self.rng)
        self.sort_option = SortOption.NONE
        self.products.append(product)
        return product

    def add_customer(self, console: Console) -> Customer:
        while True:
            customer_id = prompt_customer_id(console)
            if self.is_customer_id_unique(customer_id):
                break
            console.write(f"ID {customer_id} is not unique\n")
        console.write("Is the customer a club member? 1 for yes, 0 for no: ")
        while True:
            try:
                answer = console.read_int()
            except ValueError:
                answer = -1
            if answer in (0, 1):
                break
            console.write("Invalid input, please enter 1 for yes, 0 for no: ")
        customer = prompt_customer(console, customer_id, bool(answer))
        self.customers.append(customer)
        return customer

    def _product_from_user(self, console: Console) -> Product | None:
        barcode = read_barcode(console)
        product = self.product_by_barcode(barcode)
        if product is None:
            console.write("No such product barcode\n")
        return product

    def _product_and_count(self, console: Console) -> tuple[Product, int] | None:
        product = self._product_from_user(console)
        if product is None:
            console.write("No such product\n")
            return None
        if product.count == 0:
            console.write("This product is out of stock\n")
            return None
        while True:
            console.write(f"How many items do you want? max {product.count}\n")
            try:
                count = console.read_int()
            except ValueError:
                continue
            if 0 < count <= product.count:
                return product, count

    def customer_for_shopping(self, console: Console) -> Customer | None:
        """Ask who is shopping; None when shopping is not possible."""
        if not self.customers:
            console.write("No customer listed to market\n")
            return None
        if not self.products:
            console.write("No products in market - cannot shop\n")
            return None
        console.write(self.customers_text())
        customer_id = console.prompt_line("Who is shopping? Enter customer id\n")
        customer = self.find_customer(customer_id)
        if customer is None:
            console.write("this customer is not listed\n")
        return customer

    def do_shopping(self, console: Console) -> bool:
        customer = self.customer_for_shopping(console)
        if customer is None:
            return False
        if customer.cart is None:
            customer.cart = ShoppingCart()
        self.fill_cart(console, customer.cart)
        if len(customer.cart) == 0:
            customer.cart = None
        console.write("---------- Shopping ended ----------\n")
        return True

    def fill_cart(self, console: Console, cart: ShoppingCart) -> None:
        """Let the customer pick products until they choose to stop."""
        console.write(self.products_table())
        while True:
            console.write("Do you want to shop for a product? y/Y, anything else to exit!!\t")
            if _read_answer(console) not in ("y", "Y"):
                return
            chosen = self._product_and_count(console)
            if chosen is None:
                continue
            product, count = chosen
            try:
                cart.add_item(product.barcode, product.price, count)
            except DuplicateItemError:
                console.write("Error adding item\n")
                return
            product.count -= count

    def print_cart(self, console: Console) -> Customer | None:
        customer = self.customer_for_shopping(console)
        if customer is None:
            return None
        if customer.cart is None:
            console.write("Customer cart is empty\n")
            return None
        console.write(customer.bill())
        return customer

    def manage_cart(self, console: Console) -> bool:
        """Pay for a cart, or cancel it and return its items to stock."""
        customer = self.print_cart(console)
        if customer is None:
            return False
        console.write(
            "Do you want to pay for the cart? y/Y, anything else to cancel shopping!\t"
        )
        if _read_answer(console) in ("y", "Y"):
            customer.pay(console.out)
        else:
            self.clear_cart(customer)
            customer.cancel_shopping(console.out)
        return True

    def clear_cart(self, customer: Customer) -> None:
        """Return every item in the customer's cart to stock."""
        if customer.cart is None:
            return
        for item in customer.cart:
            product = self.product_by_barcode(item.barcode)
            if product is not None:
                product.count += item.count

    def products_by_type(self, product_type: ProductType) -> list[Product]:
        return [product for product in self.products if product.product_type == product_type]

    def print_products_by_type(self, console: Console) -> None:
        if not self.products:
            console.write("No products in market\n")
            return
        product_type = prompt_product_type(console)
        matching = self.products_by_type(product_type)
        for product in matching:
            console.write(product.format_row() + "\n")
        if not matching:
            console.write(
                f"There are no product of type {product_type.label} in market {self.name}\n"
            )

    def sort_products(self, option: SortOption) -> None:
        """Sort by the chosen field; sorting by NONE is an error."""
        self.sort_option = SortOption(option)
        key = _SORT_KEYS.get(self.sort_option)
        if key is None:
            raise ValueError("Error in sorting")
        self.products.sort(key=key)

    def prompt_sort(self, console: Console) -> SortOption:
        console.write("Base on what field do you want to sort?\n")
        while True:
            for option in list(SortOption)[1:]:
                console.write(f"Enter {int(option)} for {option.label}\n")
            try:
                choice = console.read_int()
            except ValueError:
                continue
            if 0 <= choice < len(SortOption):
                break
        option = SortOption(choice)
        try:
            self.sort_products(option)
        except ValueError as exc:
            console.write(f"{exc}\n")
        return option

    def find_product(self, value: Any) -> Product | None:
        """Binary search on the current sort field."""
        key = _SORT_KEYS.get(self.sort_option)
        if key is None:
            raise ValueError("The search cannot be performed, array not sorted")
        index = bisect.bisect_left(self.products, value, key=key)
        if index < len(self.products) and key(self.products[index]) == value:
            return self.products[index]
        return None

    def search(self, console: Console) -> Product | None:
        option = self.sort_option
        try:
            if option == SortOption.NAME:
                value: Any = console.prompt_line("Enter product name")[:NAME_LENGTH]
            elif option == SortOption.COUNT:
                console.write("Enter product count\n")
                value = console.read_int()
            elif option == SortOption.PRICE:
                console.write("Enter product price\n")
                value = console.read_float()
            else:
                console.write("Need to sort products first!!!\n")
                console.write("The search cannot be performed, array not sorted\n")
                return None
        except ValueError:
            console.write("Product not found\n")
            return None
        product = self.find_product(value)
        if product is None:
            console.write("Product not found\n")
        else:
            console.write("Product found\n")
            console.write(product.format_row() + "\n")
        return product

    def close_carts(self, out: Any) -> None:
        """Make every customer still shopping pay before closing."""
        for customer in self.customers:
            if customer.cart is not None:
                out.write("Market is closing must pay!!!\n")
                customer.pay(out)