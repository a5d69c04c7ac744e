# marketdesk

An interactive, menu-driven desk for running a small supermarket from the
terminal. It keeps the product stock and the customer list, lets customers
fill shopping carts, prints bills (with club-member discounts) and stores
everything between sessions. It has no dependencies outside the standard
library.

## Installing

    pip install .

## Running

    marketdesk <compressed> <market file>

* `<compressed>` is `0` to keep the market in the plain binary format, or
  `1` to use the compact bit-packed format.
* `<market file>` is the file the market is loaded from at start and saved
  to on exit, for example `SuperMarket.bin` or `SuperMarket_Compress.bin`.

With any other arguments a usage line is printed and the command exits
with status 1.

Customers are always kept in a text file named `Customers.txt` in the
current directory. If the market cannot be loaded from its files, you are
asked for the market's name and start with an empty market. (In the
compressed format an unreadable customers file only leaves the market
without customers.)

Example:

    marketdesk 0 SuperMarket.bin

## The menu

    0 - Show SuperMarket
    1 - Add Product
    2 - Add Customer
    3 - Customer Shopping
    4 - Print Shopping Cart
    5 - Customer Shopping Cart Managment
    6 - Sort Products
    7 - Search Product
    8 - Print Product By Type
    -1 - Quit

* **Add Product** creates a new product (name of up to 20 characters, type,
  expiry date as `ddmmyyyy` between 2024 and 2030, price and stock; a unique
  barcode is generated) or adds stock to an existing one.
* **Add Customer** asks for a unique 9-digit ID, the first and last name
  (letters and spaces only), and whether the customer is a club member
  (and for how many months).
* **Customer Shopping** lets a customer pick products by barcode
  (a two-letter type prefix `FV`, `FR`, `FZ` or `SH` followed by five
  digits, e.g. `FR20301`); bought items leave the stock at once.
* **Print Shopping Cart** shows a customer's items and total after discount.
* **Customer Shopping Cart Managment** prints the bill and either takes
  payment or cancels the purchase, returning the items to stock.
* **Sort Products** orders the stock by name, count or price;
  **Search Product** then finds a product by that same field with a binary
  search. Adding a new product resets the sort order.
* **Print Product By Type** lists the products of one type.

On quit (or end of input), every customer who still has a cart pays for it,
and the market and its customers are saved.

## Club member discounts

| Membership                 | Discount                      |
|----------------------------|-------------------------------|
| under 2 years              | 0.1% per month                |
| 2 to 4 years               | 2.5% + 0.5% per full year     |
| 5 years or more            | 7.5%                          |

## Storage limits

The compressed format packs each field into a few bits, so saving in it
fails (the desk prints "Error saving supermarket to file") when:

* the market name is longer than 63 bytes, or there are more than 255 products;
* a product name is longer than 15 bytes;
* a stock count is above 255, or a price's whole part above 511.

The plain format stores product names cut to 20 bytes. Dates are checked
without leap years, so 29 February is never accepted.

## Using it as a library

The pieces are usable on their own, for example:

    from marketdesk.supermarket import SuperMarket, SortOption
    from marketdesk.storage import load_market, save_market, StorageError
    from marketdesk.customer import Customer, ClubMember, member_discount, is_customer_id_valid
    from marketdesk.shopping import ShoppingCart
    from marketdesk.product import Product, ProductType, validate_barcode
    from marketdesk.date import Date, is_valid_date
    from marketdesk.compressed import pack_product, read_product

`marketdesk.general.Console` wraps the input and output streams used by the
interactive prompts, so they can be driven from any text source.

## What it does not do

Payment is only recorded on screen: the bill is printed and the cart is
emptied. There is no receipt file, sales history or report of past
purchases, and carts are not saved between sessions.

## Running the tests

    pip install .[test]
    pytest