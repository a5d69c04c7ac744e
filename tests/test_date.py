import io

import pytest

from marketdesk.date import (
    MAX_YEAR,
    MIN_YEAR,
    Date,
    InvalidDateError,
    is_valid_date,
    prompt_date,
)
from marketdesk.filehelper import FileFormatError, write_string
from marketdesk.general import Console


def test_is_valid_date_bounds():
    assert is_valid_date(31, 1, MIN_YEAR)
    assert is_valid_date(31, 12, MAX_YEAR)
    assert not is_valid_date(1, 1, MIN_YEAR - 1)
    assert not is_valid_date(1, 1, MAX_YEAR + 1)
    assert not is_valid_date(0, 5, 2025)
    assert not is_valid_date(1, 13, 2025)
    assert not is_valid_date(31, 4, 2025)


def test_february_has_no_leap_day():
    assert is_valid_date(28, 2, 2024)
    assert not is_valid_date(29, 2, 2024)


def test_from_compact():
    assert Date.from_compact("01022025") == Date(1, 2, 2025)


def test_str_format():
    assert str(Date(1, 2, 2025)) == "01/02/2025"


@pytest.mark.parametrize("text", ["0102202", "010220255", "ab022025", "32012025", "01012099"])
def test_from_compact_rejects(text):
    with pytest.raises(InvalidDateError):
        Date.from_compact(text)


def test_length_error_message():
    with pytest.raises(InvalidDateError, match="8 characters"):
        Date.from_compact("123")


def test_save_load_round_trip():
    buf = io.BytesIO()
    original = Date(15, 7, 2026)
    original.save(buf)
    buf.seek(0)
    assert Date.load(buf) == original


def test_load_bad_text_raises():
    buf = io.BytesIO()
    write_string(buf, "garbage")
    buf.seek(0)
    with pytest.raises(FileFormatError):
        Date.load(buf)


def test_prompt_date_retries():
    out = io.StringIO()
    console = Console(io.StringIO("123\n31022025\n05052025\n"), out)
    assert prompt_date(console) == Date(5, 5, 2025)
    text = out.getvalue()
    assert "Date should be 8 characters!" in text
    assert "Date is not valid!!!" in text