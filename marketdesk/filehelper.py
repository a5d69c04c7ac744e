"""Reading and writing the binary and text file primitives."""

from __future__ import annotations

import struct
from typing import BinaryIO, TextIO

from marketdesk.general import clean_line

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


class FileFormatError(Exception):
    """A file could not be read or written in the expected format."""


def write_int(fp: BinaryIO, value: int) -> None:
    fp.write(_INT.pack(value))


def write_float(fp: BinaryIO, value: float) -> None:
    fp.write(_FLOAT.pack(value))


def write_chars(fp: BinaryIO, data: bytes) -> None:
    fp.write(data)


def write_string(fp: BinaryIO, text: str) -> None:
    """Write a length-prefixed, NUL-terminated string."""
    encoded = text.encode("utf-8") + b"\0"
    write_int(fp, len(encoded))
    write_chars(fp, encoded)


def read_chars(fp: BinaryIO, size: int) -> bytes:
    if size < 0:
        raise FileFormatError(f"invalid length {size}")
    data = fp.read(size)
    if len(data) != size:
        raise FileFormatError(f"expected {size} bytes, got {len(data)}")
    return data


def read_int(fp: BinaryIO) -> int:
    return _INT.unpack(read_chars(fp, _INT.size))[0]


def read_float(fp: BinaryIO) -> float:
    return _FLOAT.unpack(read_chars(fp, _FLOAT.size))[0]


def read_string(fp: BinaryIO) -> str:
    """Read a string written by :func:`write_string`."""
    data = read_chars(fp, read_int(fp))
    data = data.split(b"\0", 1)[0]
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FileFormatError("string is not valid text") from exc


def read_text_line(fp: TextIO) -> str:
    """Read the next non-empty line of a text file, without line ending."""
    for line in iter(fp.readline, ""):
        cleaned = clean_line(line)
        if cleaned:
            return cleaned
    raise FileFormatError("unexpected end of file")