from __future__ import annotations

import os
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LayoutPolicy:
    """Capacity limits for one kind of entity whose seat map is being edited."""

    max_seats_per_row: int = 12
    max_total_rows: int = 20
    max_row_number: int = 20
    entity: str = "aircraft"

    @classmethod
    def from_env(cls, entity: str = "aircraft", prefix: str = "SEATMAP_") -> "LayoutPolicy":
        base = cls(entity=entity)
        return replace(
            base,
            max_seats_per_row=int(os.environ.get(f"{prefix}MAX_SEATS_PER_ROW", base.max_seats_per_row)),
            max_total_rows=int(os.environ.get(f"{prefix}MAX_TOTAL_ROWS", base.max_total_rows)),
            max_row_number=int(os.environ.get(f"{prefix}MAX_ROW_NUMBER", base.max_row_number)),
        )


AIRCRAFT_POLICY = LayoutPolicy(entity="aircraft")
