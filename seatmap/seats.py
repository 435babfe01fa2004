from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from .errors import PatternSyntaxError
from .pattern import parse_pattern


_ROW_PREFIX = re.compile(r"^([0-9]+)")
_ROW_TEXT = re.compile(r"[0-9]+")

# one letter per seat in a row, A-Z
MAX_SEATS_PER_ROW = 26
MAX_ROW_SPAN = 1000


@dataclass(frozen=True)
class Seat:
    seat_code: str

    @property
    def row(self) -> int:
        m = _ROW_PREFIX.match(self.seat_code)
        return int(m.group(1)) if m else 1

    @property
    def letter(self) -> str:
        return _ROW_PREFIX.sub("", self.seat_code)

    def to_dict(self) -> dict:
        return {"seatCode": self.seat_code}

    @classmethod
    def from_dict(cls, data: dict) -> "Seat":
        return cls(seat_code=str(data["seatCode"]))


def coerce_row(value: object) -> Optional[int]:
    """Row numbers arrive as ints or digit strings from the editing surface."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _ROW_TEXT.fullmatch(value.strip()):
        return int(value.strip())
    return None


def generate_seats(from_row: object, to_row: object, pattern: object) -> tuple[Seat, ...]:
    """
    Expand a row range and pattern into every seat of the range, row by row.

    Letters run on across groups within a row: "3-4-3" gives ABC | DEFG | HIJ.
    An unconfigured draft (missing rows or pattern) yields no seats, and so does
    one that could not be lettered: more than MAX_SEATS_PER_ROW seats in a row or a
    range longer than MAX_ROW_SPAN rows.
    """
    start = coerce_row(from_row)
    end = coerce_row(to_row)
    if not start or not end or start < 1 or not pattern or not isinstance(pattern, str):
        return ()
    if end - start + 1 > MAX_ROW_SPAN:
        return ()
    return _generate(start, end, pattern)


@lru_cache(maxsize=256)
def _generate(start: int, end: int, pattern: str) -> tuple[Seat, ...]:
    try:
        groups = parse_pattern(pattern)
    except PatternSyntaxError:
        return ()
    if sum(groups) > MAX_SEATS_PER_ROW:
        return ()

    seats: list[Seat] = []
    for row in range(start, end + 1):
        cursor = ord("A")
        for size in groups:
            for i in range(size):
                seats.append(Seat(f"{row}{chr(cursor + i)}"))
            cursor += size
    return tuple(seats)
