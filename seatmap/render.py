from __future__ import annotations

from typing import Iterable

from .errors import PatternSyntaxError
from .layout import Layout, sorted_sections, total_seats
from .pattern import parse_pattern
from .seats import Seat


def seats_by_row(seats: Iterable[Seat]) -> dict[int, list[Seat]]:
    out: dict[int, list[Seat]] = {}
    for seat in seats:
        out.setdefault(seat.row, []).append(seat)
    return out


def _row_cells(row_seats: list[Seat], groups: tuple[int, ...], cell_width: int) -> str:
    letters = [s.letter.center(cell_width) for s in row_seats]
    parts = []
    i = 0
    for size in groups:
        parts.append(" ".join(letters[i : i + size]))
        i += size
    if i < len(letters):
        parts.append(" ".join(letters[i:]))
    return " | ".join(parts)


def render_section(key: str, section: dict, *, cell_width: int = 3) -> list[str]:
    if section.get("type") == "space":
        return [f"-- {str(section.get('label', key)).upper()} (row {section.get('fromRow')}) --"]

    seats = [Seat.from_dict(s) for s in section.get("seats", [])]
    try:
        groups = parse_pattern(section.get("pattern"))
    except PatternSyntaxError:
        groups = (len(seats),)
    lines = [f"[{key}] {len(seats)} seats, rows {section.get('fromRow')}-{section.get('toRow')}, pattern {section.get('pattern')}"]
    for row, row_seats in sorted(seats_by_row(seats).items()):
        lines.append(f"{row:>3} " + _row_cells(row_seats, groups, cell_width))
    return lines


def render_ascii(layout: Layout, *, cell_width: int = 3) -> str:
    cell_width = max(1, int(cell_width))
    lines: list[str] = []
    for key, section in sorted_sections(layout):
        lines.extend(render_section(key, section, cell_width=cell_width))
    lines.append(f"Total seats: {total_seats(layout)}")
    return "\n".join(lines)
