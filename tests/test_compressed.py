import io
from types import SimpleNamespace

import pytest

from marketdesk.compressed import (
    load_compressed,
    pack_count_price,
    pack_date,
    pack_product,
    read_product,
    save_compressed,
    unpack_count_price,
    unpack_date,
)
from marketdesk.customer import ClubMember, Customer
from marketdesk.date import Date
from marketdesk.filehelper import FileFormatError
from marketdesk.product import Product, ProductType


def _products():
    return [
        Product(name="Milk", product_type=ProductType.FRIDGE, price=3.5, count=12,
                expiry_date=Date(15, 6, 2025), barcode="FR12345"),
        Product(name="Peas", product_type=ProductType.FROZEN, price=10.75, count=200,
                expiry_date=Date(1, 12, 2030), barcode="FZ90210"),
        Product(name="Apple", product_type=ProductType.FRUIT_VEGETABLE, price=2.25, count=0,
                expiry_date=Date(31, 1, 2024), barcode="FV10000"),
    ]


def _customers():
    return [
        Customer("123456789", "Dana - Levi"),
        ClubMember("987654321", "Avi Ben - Cohen", total_months=30),
    ]


@pytest.mark.parametrize(
    "date",
    [Date(1, 1, 2024), Date(31, 12, 2030), Date(15, 6, 2025), Date(28, 2, 2027)],
)
def test_date_round_trip(date):
    data = pack_date(date)
    assert len(data) == 2
    assert unpack_date(data) == date


def test_pack_date_bytes():
    assert pack_date(Date(15, 6, 2025)) == bytes([0x7B, 0x10])


def test_pack_date_rejects_year_out_of_range():
    with pytest.raises(ValueError):
        pack_date(Date(1, 1, 2040))


def test_unpack_date_wrong_length():
    with pytest.raises(FileFormatError):
        unpack_date(b"\x01")


def test_count_price_round_trip():
    product = _products()[1]
    data = pack_count_price(product)
    assert len(data) == 3
    count, price = unpack_count_price(data)
    assert count == product.count
    assert price == pytest.approx(product.price)


def test_price_truncated_to_cents():
    product = Product(name="Tea", price=2.999, count=5, barcode="SH11111")
    count, price = unpack_count_price(pack_count_price(product))
    assert count == 5
    assert price == pytest.approx(2.99)


def test_count_too_large():
    product = Product(name="Tea", price=1.0, count=256, barcode="SH11111")
    with pytest.raises(ValueError):
        pack_count_price(product)


def test_price_too_large():
    product = Product(name="Tea", price=512.0, count=1, barcode="SH11111")
    with pytest.raises(ValueError):
        pack_count_price(product)


@pytest.mark.parametrize("index", [0, 1, 2])
def test_product_round_trip(index):
    product = _products()[index]
    data = pack_product(product)
    assert len(data) == 4 + len(product.name) + 3 + 2
    loaded = read_product(io.BytesIO(data))
    assert loaded == product


def test_product_name_too_long():
    product = Product(name="A" * 16, price=1.0, count=1, barcode="SH11111")
    with pytest.raises(ValueError):
        pack_product(product)


def test_product_bad_barcode():
    product = Product(name="Tea", price=1.0, count=1, barcode="SH1x111")
    with pytest.raises(ValueError):
        pack_product(product)


def test_read_product_truncated():
    data = pack_product(_products()[0])
    with pytest.raises(FileFormatError):
        read_product(io.BytesIO(data[:-1]))


def test_market_round_trip(tmp_path):
    market = SimpleNamespace(name="Corner Shop", products=_products(), customers=_customers())
    market_file = tmp_path / "market.bin"
    customers_file = tmp_path / "customers.txt"
    save_compressed(market, market_file, customers_file)

    loaded = load_compressed(SimpleNamespace(), market_file, customers_file)
    assert loaded.name == market.name
    assert loaded.products == market.products
    assert loaded.customers == market.customers
    assert isinstance(loaded.customers[1], ClubMember)


def test_market_file_size(tmp_path):
    market = SimpleNamespace(name="Shop", products=_products(), customers=[])
    market_file = tmp_path / "market.bin"
    save_compressed(market, market_file, tmp_path / "customers.txt")
    expected = 2 + len(market.name) + sum(len(pack_product(p)) for p in market.products)
    assert market_file.stat().st_size == expected


def test_missing_customers_file_gives_no_customers(tmp_path):
    market = SimpleNamespace(name="Shop", products=_products(), customers=_customers())
    market_file = tmp_path / "market.bin"
    customers_file = tmp_path / "customers.txt"
    save_compressed(market, market_file, customers_file)
    customers_file.unlink()

    loaded = load_compressed(SimpleNamespace(), market_file, customers_file)
    assert loaded.customers == []
    assert loaded.products == market.products


def test_load_truncated_file(tmp_path):
    market = SimpleNamespace(name="Shop", products=_products(), customers=[])
    market_file = tmp_path / "market.bin"
    save_compressed(market, market_file, tmp_path / "customers.txt")
    market_file.write_bytes(market_file.read_bytes()[:-3])
    with pytest.raises(FileFormatError):
        load_compressed(SimpleNamespace(), market_file, tmp_path / "customers.txt")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_compressed(SimpleNamespace(), tmp_path / "nope.bin", tmp_path / "c.txt")