"""Calendar dates limited to the market's supported years."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import BinaryIO

from marketdesk.filehelper import FileFormatError, read_string, write_string
from marketdesk.general import Console

MIN_YEAR = 2024
MAX_YEAR = 2030
DATE_FORMAT_LEN = 8

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_STORED_RE = re.compile(r"\s*([+-]?\d{1,2})/\s*([+-]?\d{1,2})/\s*([+-]?\d{1,4})")


class InvalidDateError(ValueError):
    """A date string or value is not acceptable."""


def is_valid_date(day: int, month: int, year: int) -> bool:
    """Check the date against the supported years and month lengths (no leap years)."""
    if year < MIN_YEAR or year > MAX_YEAR or month < 1 or month > 12 or day < 1:
        return False
    return day <= _DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True)
class Date:
    day: int
    month: int
    year: int

    @classmethod
    def from_compact(cls, text: str) -> Date:
        """Parse a ``ddmmyyyy`` string."""
        if len(text) != DATE_FORMAT_LEN:
            raise InvalidDateError("Date should be 8 characters!")
        if not text.isdigit():
            raise InvalidDateError("Date format is not valid!!!")
        day, month, year = int(text[0:2]), int(text[2:4]), int(text[4:8])
        if not is_valid_date(day, month, year):
            raise InvalidDateError("Date is not valid!!!")
        return cls(day, month, year)

    def __str__(self) -> str:
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"

    def save(self, fp: BinaryIO) -> None:
        write_string(fp, str(self))

    @classmethod
    def load(cls, fp: BinaryIO) -> Date:
        text = read_string(fp)
        match = _STORED_RE.match(text)
        if not match:
            raise FileFormatError("Error reading date")
        day, month, year = (int(part) for part in match.groups())
        return cls(day, month, year)


def prompt_date(console: Console) -> Date:
    """Ask until a valid ``ddmmyyyy`` date is entered."""
    console.write("\n")
    while True:
        text = console.prompt_line('Enter a date in "ddmmyyyy" format:')
        try:
            return Date.from_compact(text)
        except InvalidDateError as exc:
            console.write(f"{exc}\n")