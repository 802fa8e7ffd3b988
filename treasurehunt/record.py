"""Treasure records and their fixed-size binary layout."""

from __future__ import annotations

import math
import re
import struct
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, TextIO

# int id, char user[35], 1 pad byte, float longitude, float latitude,
# char clue[80], int value
_LAYOUT = struct.Struct("<i35sxff80si")
RECORD_SIZE = _LAYOUT.size

USER_SIZE = 35
CLUE_SIZE = 80
_NUMBER_INPUT_SIZE = 256

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _fit(text: str, limit: int) -> str:
    """Cut ``text`` so that its UTF-8 form takes at most ``limit`` bytes."""
    return text.encode("utf-8")[:limit].decode("utf-8", "ignore")


def _to_float32(number: float) -> float:
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


_FLOAT32 = struct.Struct("<f")


def _parse_int(text: str) -> int:
    """Read a leading integer the way atoi does; no digits gives 0."""
    match = _INT_PREFIX.match(text)
    if not match:
        return 0
    return max(_INT_MIN, min(_INT_MAX, int(match.group(1))))


def _parse_float(text: str) -> float:
    """Read a leading single-precision number the way strtof does."""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    return _to_float32(float(match.group(1)))


@dataclass
class Treasure:
    """One treasure of a hunt."""

    id: int
    user: str
    longitude: float
    latitude: float
    clue: str
    value: int

    def pack(self) -> bytes:
        """Encode the treasure as one fixed-size record."""
        try:
            return _LAYOUT.pack(
                self.id,
                self.user.encode("utf-8")[: USER_SIZE - 1],
                self.longitude,
                self.latitude,
                self.clue.encode("utf-8")[: CLUE_SIZE - 1],
                self.value,
            )
        except struct.error as exc:
            raise ValueError(f"treasure does not fit a record: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> "Treasure":
        """Decode one record produced by :meth:`pack`."""
        if len(data) != RECORD_SIZE:
            raise ValueError(
                f"a record is {RECORD_SIZE} bytes, got {len(data)}"
            )
        ident, user, longitude, latitude, clue, value = _LAYOUT.unpack(data)
        return cls(
            id=ident,
            user=_text_field(user),
            longitude=longitude,
            latitude=latitude,
            clue=_text_field(clue),
            value=value,
        )


def _text_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", "replace")


def iter_records(stream: BinaryIO) -> Iterator[Treasure]:
    """Yield the treasures stored in a binary stream.

    A trailing fragment shorter than one record is ignored.
    """
    while len(chunk := stream.read(RECORD_SIZE)) == RECORD_SIZE:
        yield Treasure.unpack(chunk)


def read_records(path: str | Path) -> list[Treasure]:
    """Return every treasure stored in the file at ``path``."""
    with open(path, "rb") as stream:
        return list(iter_records(stream))


def _read(input_fn: Callable[[], str]) -> str:
    try:
        line = input_fn()
    except EOFError:
        return ""
    return line.split("\n", 1)[0]


def prompt_treasure(
    input_fn: Callable[[], str] = input, output: TextIO | None = None
) -> Treasure:
    """Ask for each field of a treasure and build it from the answers."""
    out = sys.stdout if output is None else output

    def ask(label: str, limit: int) -> str:
        out.write(f"{label}: ")
        out.flush()
        return _fit(_read(input_fn), limit - 1)

    ident = _parse_int(ask("ID", _NUMBER_INPUT_SIZE))
    user = ask("User", USER_SIZE)
    longitude = _parse_float(ask("Longitude", _NUMBER_INPUT_SIZE))
    latitude = _parse_float(ask("Latitude", _NUMBER_INPUT_SIZE))
    clue = ask("Clue", CLUE_SIZE)
    value = _parse_int(ask("Value", _NUMBER_INPUT_SIZE))
    return Treasure(ident, user, longitude, latitude, clue, value)


def format_treasure(treasure: Treasure) -> str:
    """Render a treasure on one line."""
    return (
        f"ID: {treasure.id} | User: {treasure.user} | "
        f"Longitude: {treasure.longitude:f} | Latitude: {treasure.latitude:f} | "
        f"Clue: {treasure.clue} | Value: {treasure.value}"
    )