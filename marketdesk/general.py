"""Console input helpers and small string utilities."""

from __future__ import annotations

import re
import string
import sys
from typing import TextIO

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def clean_line(line: str) -> str:
    """Strip trailing control characters (newline, carriage return, ...)."""
    end = len(line)
    while end and (ord(line[end - 1]) < 32 or ord(line[end - 1]) == 127):
        end -= 1
    return line[:end]


def check_empty_string(text: str) -> bool:
    """True when the text holds nothing but whitespace."""
    return all(ch.isspace() for ch in text)


def check_alpha_space(text: str) -> bool:
    """True when the text holds only ASCII letters and spaces."""
    return all(ch == " " or ch in string.ascii_letters for ch in text)


def split_words(text: str, sep: str) -> list[str]:
    """Split on any of the characters in ``sep``, dropping empty pieces."""
    if not sep:
        return [text] if text else []
    pattern = "[" + re.escape(sep) + "]+"
    return [word for word in re.split(pattern, text) if word]


def count_char(text: str, ch: str) -> int:
    """Number of occurrences of ``ch`` in ``text``."""
    return text.count(ch)


def format_message(*args: str) -> str:
    """Join the words, each followed by a single space."""
    return "".join(f"{word} " for word in args)


class Console:
    """Line and token oriented reader over a text stream, with an output stream."""

    def __init__(self, source: TextIO | None = None, out: TextIO | None = None) -> None:
        self.source = source if source is not None else sys.stdin
        self.out = out if out is not None else sys.stdout
        self._buf = ""

    def write(self, text: str) -> None:
        self.out.write(text)

    def _fill(self) -> None:
        line = self.source.readline()
        if not line:
            raise EOFError("end of input")
        self._buf += line

    def read_line(self) -> str:
        """Read the next non-empty line, without its trailing control characters."""
        while True:
            if not self._buf:
                self._fill()
            line, _, self._buf = self._buf.partition("\n")
            cleaned = clean_line(line)
            if cleaned:
                return cleaned

    def prompt_line(self, msg: str) -> str:
        self.write(msg + "\n")
        return self.read_line()

    def _skip_space(self) -> None:
        while True:
            self._buf = self._buf.lstrip()
            if self._buf:
                return
            self._fill()

    def _read_token(self, pattern: re.Pattern[str], what: str) -> str:
        self._skip_space()
        match = pattern.match(self._buf)
        if not match:
            bad = self._buf.split(maxsplit=1)[0]
            self._buf = self._buf[len(bad):]
            raise ValueError(f"expected {what}, got {bad!r}")
        self._buf = self._buf[match.end():]
        return match.group()

    def read_int(self) -> int:
        """Read an integer token, skipping leading whitespace."""
        return int(self._read_token(_INT_RE, "an integer"))

    def read_float(self) -> float:
        """Read a number token, skipping leading whitespace."""
        return float(self._read_token(_FLOAT_RE, "a number"))

    def read_char(self) -> str:
        """Read exactly one character, whitespace included."""
        if not self._buf:
            self._fill()
        ch, self._buf = self._buf[0], self._buf[1:]
        return ch

    def get_positive_int(self, msg: str) -> int:
        """Prompt until a non-negative integer is entered."""
        while True:
            self.write(msg + "\n")
            try:
                value = self.read_int()
            except ValueError:
                continue
            if value >= 0:
                return value

    def get_positive_float(self, msg: str) -> float:
        """Prompt until a non-negative number is entered."""
        while True:
            self.write(msg + "\n")
            try:
                value = self.read_float()
            except ValueError:
                continue
            if value >= 0:
                return value