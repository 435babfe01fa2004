from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal


RangeKind = Literal["seatClass", "space"]


@dataclass(frozen=True)
class RowRange:
    start: int
    end: int
    kind: RangeKind
    index: int

    @property
    def key(self) -> str:
        return f"{self.kind}-{self.index}-rows"

    @property
    def rows(self) -> int:
        return self.end - self.start + 1

    def describe(self) -> str:
        return f"rows {self.start}-{self.end} of {self.kind} {self.index}"


def overlaps(a: RowRange, b: RowRange) -> bool:
    # closed integer intervals
    return max(a.start, b.start) <= min(a.end, b.end)


def shared_rows(a: RowRange, b: RowRange) -> str:
    lo, hi = max(a.start, b.start), min(a.end, b.end)
    return str(lo) if lo == hi else f"{lo}-{hi}"


def check_overlaps(ranges: Iterable[RowRange]) -> tuple[dict[str, str], list[RowRange]]:
    """
    Check each range against the ranges accepted before it.

    A range is rejected on its first conflict and recorded under its key; it is not
    compared further and does not take part in later checks. Returns the conflict
    messages and the accepted ranges in input order.
    """
    conflicts: dict[str, str] = {}
    accepted: list[RowRange] = []
    for r in ranges:
        clash = next((other for other in accepted if overlaps(r, other)), None)
        if clash is None:
            accepted.append(r)
            continue
        conflicts[r.key] = (
            f"Rows {r.start}-{r.end} conflict with existing rows {clash.start}-{clash.end} "
            f"in {clash.kind} {clash.index} (row {shared_rows(r, clash)})"
        )
    return conflicts, accepted
