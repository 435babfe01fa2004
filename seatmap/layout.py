from __future__ import annotations

import logging
from typing import Sequence

from .errors import InvalidLayoutError, SpaceRowMismatchError
from .seats import Seat
from .specs import SeatClassSpec, SpaceSpec


logger = logging.getLogger(__name__)

Layout = dict[str, dict]


def assemble_layout(seat_classes: Sequence[SeatClassSpec], spaces: Sequence[SpaceSpec]) -> Layout:
    """
    Merge a validated draft into the keyed layout that gets persisted.

    Seat classes are keyed by class name, spaces by "space1", "space2", ... in order.
    Only call this once validate_configuration() reports the draft as valid.
    """
    layout: Layout = {}
    for sc in seat_classes:
        if sc.class_name in layout:
            raise InvalidLayoutError(f"duplicate seat class: {sc.class_name!r}")
        layout[sc.class_name] = {
            "seats": [s.to_dict() for s in sc.seats],
            "fromRow": sc.from_row,
            "toRow": sc.to_row,
            "pattern": sc.pattern,
        }
    for i, sp in enumerate(spaces, start=1):
        key = f"space{i}"
        if key in layout:
            raise InvalidLayoutError(f"seat class name clashes with space key: {key!r}")
        layout[key] = {"type": "space", "label": sp.label, "fromRow": sp.from_row, "toRow": sp.to_row}
    logger.debug("assembled layout: %d seat classes, %d spaces", len(seat_classes), len(spaces))
    return layout


def disassemble_layout(layout: Layout) -> tuple[list[SeatClassSpec], list[SpaceSpec]]:
    seat_classes: list[SeatClassSpec] = []
    spaces: list[SpaceSpec] = []
    try:
        for key, entry in layout.items():
            if entry.get("type") == "space":
                spaces.append(SpaceSpec(entry["label"], entry["fromRow"], entry["toRow"]))
            else:
                seat_classes.append(
                    SeatClassSpec(
                        class_name=key,
                        from_row=entry["fromRow"],
                        to_row=entry["toRow"],
                        pattern=entry["pattern"],
                        seats=[Seat.from_dict(s) for s in entry["seats"]],
                    )
                )
    except (KeyError, TypeError, AttributeError, SpaceRowMismatchError) as e:
        raise InvalidLayoutError(f"invalid layout data: {e}") from e
    return seat_classes, spaces


def total_seats(layout: Layout) -> int:
    return sum(len(entry.get("seats", [])) for entry in layout.values() if entry.get("type") != "space")


def sorted_sections(layout: Layout) -> list[tuple[str, dict]]:
    """Sections in cabin order (by first row), the way seat maps are drawn."""
    return sorted(layout.items(), key=lambda kv: kv[1].get("fromRow") or 0)


def default_draft() -> tuple[list[SeatClassSpec], list[SpaceSpec]]:
    seat_classes = [
        SeatClassSpec("first", 1, 2, "1-1-1"),
        SeatClassSpec("business", 4, 6, "2-2-2"),
        SeatClassSpec("economy", 8, 12, "3-4-3"),
    ]
    spaces = [SpaceSpec("galley", 3, 3), SpaceSpec("toilet", 7, 7)]
    return seat_classes, spaces
