from __future__ import annotations

from typing import Iterable, Optional

from .errors import SpaceRowMismatchError
from .seats import Seat, generate_seats


class SeatClassSpec:
    """
    One cabin class of a draft configuration: a named row range with a seat pattern.

    The seat list is derived from (from_row, to_row, pattern). A list handed in at
    construction is kept verbatim, as stored, until one of those fields changes.
    """

    def __init__(
        self,
        class_name: str = "",
        from_row: object = None,
        to_row: object = None,
        pattern: str = "",
        seats: Optional[Iterable[Seat]] = None,
    ):
        self.class_name = class_name
        self._from_row = from_row
        self._to_row = to_row
        self._pattern = pattern
        self._stored_seats: Optional[tuple[Seat, ...]] = tuple(seats) if seats is not None else None

    @property
    def from_row(self) -> object:
        return self._from_row

    @from_row.setter
    def from_row(self, value: object) -> None:
        self._from_row = value
        self._stored_seats = None

    @property
    def to_row(self) -> object:
        return self._to_row

    @to_row.setter
    def to_row(self, value: object) -> None:
        self._to_row = value
        self._stored_seats = None

    @property
    def pattern(self) -> str:
        return self._pattern

    @pattern.setter
    def pattern(self, value: str) -> None:
        self._pattern = value
        self._stored_seats = None

    @property
    def seats(self) -> tuple[Seat, ...]:
        if self._stored_seats is not None:
            return self._stored_seats
        return generate_seats(self._from_row, self._to_row, self._pattern)

    def to_dict(self) -> dict:
        return {
            "class": self.class_name,
            "fromRow": self.from_row,
            "toRow": self.to_row,
            "pattern": self.pattern,
            "seats": [s.to_dict() for s in self.seats],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeatClassSpec):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"SeatClassSpec({self.class_name!r}, from_row={self.from_row!r}, "
            f"to_row={self.to_row!r}, pattern={self.pattern!r}, seats={len(self.seats)})"
        )


class SpaceSpec:
    """A single non-seat row (galley, toilet, ...). to_row always tracks from_row."""

    def __init__(self, label: str = "", from_row: object = None, to_row: object = None):
        if to_row is not None and to_row != from_row:
            raise SpaceRowMismatchError(
                f"space {label!r} must occupy exactly one row (fromRow={from_row!r}, toRow={to_row!r})"
            )
        self.label = label
        self._row = from_row

    @property
    def from_row(self) -> object:
        return self._row

    @from_row.setter
    def from_row(self, value: object) -> None:
        self._row = value

    @property
    def to_row(self) -> object:
        return self._row

    @to_row.setter
    def to_row(self, value: object) -> None:
        if value != self._row:
            raise SpaceRowMismatchError(
                f"toRow of space {self.label!r} follows fromRow ({self._row!r}); got {value!r}"
            )

    def to_dict(self) -> dict:
        return {"type": "space", "label": self.label, "fromRow": self.from_row, "toRow": self.to_row}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpaceSpec):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SpaceSpec({self.label!r}, row={self.from_row!r})"
