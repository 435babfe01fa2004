from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AircraftType(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    model: str
    manufacturer: str = "Boeing"
    total_seats: int = 0
    active: bool = True

    # JSON seat map layout: {"<sectionKey>": {...}, ...}
    layout_json: str = "{}"

    created_at: datetime = Field(default_factory=_utc_now)

    def layout(self) -> dict:
        return json.loads(self.layout_json)


class Aircraft(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(index=True, unique=True)
    aircraft_type_id: int = Field(index=True, foreign_key="aircrafttype.id")

    created_at: datetime = Field(default_factory=_utc_now)
