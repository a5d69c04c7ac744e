import io

import pytest

from marketdesk.customer import (
    MAX_DISCOUNT,
    ClubMember,
    Customer,
    combine_name,
    is_customer_id_valid,
    load_customer,
    load_customers_file,
    member_discount,
    normalize_name_part,
    prompt_customer,
    prompt_customer_id,
    save_customers_file,
)
from marketdesk.filehelper import FileFormatError
from marketdesk.general import Console
from marketdesk.shopping import ShoppingCart


def _console(text):
    return Console(io.StringIO(text), io.StringIO())


def _cart():
    cart = ShoppingCart()
    cart.add_item("FR12345", 10.0, 2)
    return cart


def test_member_discount_max():
    assert member_discount(60) == MAX_DISCOUNT
    assert member_discount(600) == MAX_DISCOUNT


def test_member_discount_non_decreasing():
    values = [member_discount(m) for m in range(1, 100)]
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert member_discount(23) < member_discount(24)


@pytest.mark.parametrize(
    "value,expected",
    [("123456789", True), ("12345678", False), ("1234567890", False), ("12345678a", False)],
)
def test_customer_id_validity(value, expected):
    assert is_customer_id_valid(value) is expected


def test_normalize_name_part():
    assert normalize_name_part("  jOHN") == "  John"
    assert normalize_name_part("   ") == "   "


def test_combine_name():
    assert combine_name("Mary  Ann", "Lee") == "Mary Ann - Lee"


def test_save_regular_customer_format():
    buf = io.StringIO()
    Customer("123456789", "Ann - Lee").save(buf)
    assert buf.getvalue() == "Ann - Lee\n123456789\n0\n"


def test_round_trip_customers_file(tmp_path):
    customers = [
        Customer("123456789", "Ann - Lee"),
        ClubMember("987654321", "Bob - Ray", total_months=30),
    ]
    path = tmp_path / "customers.txt"
    save_customers_file(customers, path)
    loaded = load_customers_file(path)
    assert loaded == customers
    assert isinstance(loaded[1], ClubMember)
    assert loaded[1].discount() == member_discount(30)


def test_load_customer_bad_flag_raises():
    with pytest.raises(FileFormatError):
        load_customer(io.StringIO("Ann - Lee\n123456789\nx\n"))


def test_load_customers_file_without_count(tmp_path):
    path = tmp_path / "customers.txt"
    path.write_text("")
    with pytest.raises(FileFormatError):
        load_customers_file(path)


def test_describe_reports_cart_state():
    customer = Customer("123456789", "Ann - Lee")
    assert "Shopping cart is empty!" in customer.describe()
    customer.cart = _cart()
    assert "Doing shopping now!!!" in customer.describe()


def test_club_member_describe_includes_months():
    member = ClubMember("123456789", "Ann - Lee", total_months=7)
    assert "Total months of membership: 7" in member.describe()


def test_bill_without_discount():
    customer = Customer("123456789", "Ann - Lee", cart=_cart())
    text = customer.bill()
    assert "Item FR12345 count 2" in text
    assert "Total price for Ann - Lee is" in text
    assert "after discount" not in text


def test_bill_with_discount():
    member = ClubMember("123456789", "Ann - Lee", cart=_cart(), total_months=60)
    assert "after discount of 7.50%" in member.bill()


def test_bill_without_cart_raises():
    with pytest.raises(ValueError):
        Customer("123456789", "Ann - Lee").bill()


def test_pay_empties_cart():
    customer = Customer("123456789", "Ann - Lee", cart=_cart())
    out = io.StringIO()
    customer.pay(out)
    assert customer.cart is None
    assert "Payment was recived" in out.getvalue()


def test_pay_without_cart_writes_nothing():
    out = io.StringIO()
    Customer("123456789", "Ann - Lee").pay(out)
    assert out.getvalue() == ""


def test_cancel_shopping():
    customer = Customer("123456789", "Ann - Lee", cart=_cart())
    out = io.StringIO()
    customer.cancel_shopping(out)
    assert customer.cart is None
    assert "Purchase was canceled" in out.getvalue()


def test_prompt_customer_id_retries():
    assert prompt_customer_id(_console("12\nabcdefghi\n123456789\n")) == "123456789"


def test_prompt_club_member():
    customer = prompt_customer(_console("  aNN\nlee\n24\n"), "123456789", True)
    assert isinstance(customer, ClubMember)
    assert customer.name == "Ann - Lee"
    assert customer.total_months == 24


def test_prompt_regular_customer_rejects_bad_names():
    console = _console("   \nann1\nann\nlee\n")
    customer = prompt_customer(console, "123456789", False)
    assert type(customer) is Customer
    assert customer.name == "Ann - Lee"
    assert "Name should contain only letters" in console.out.getvalue()


def test_prompt_club_member_requires_positive_months():
    console = _console("ann\nlee\n0\n5\n")
    customer = prompt_customer(console, "123456789", True)
    assert customer.total_months == 5
    assert "Total months should be positive" in console.out.getvalue()