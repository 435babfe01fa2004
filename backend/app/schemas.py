from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# Rows stay loosely typed so bad input is reported by layout validation, not as a 422 parse error.
RowValue = Optional[Union[int, str]]


class _Camel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SeatClassIn(_Camel):
    class_name: str = Field(default="", alias="class")
    from_row: RowValue = Field(default=None, alias="fromRow")
    to_row: RowValue = Field(default=None, alias="toRow")
    pattern: str = ""


class SpaceIn(_Camel):
    label: str = ""
    from_row: RowValue = Field(default=None, alias="fromRow")
    to_row: RowValue = Field(default=None, alias="toRow")


class SeatMapDraft(_Camel):
    seat_classes: list[SeatClassIn] = Field(default_factory=list, alias="seatClasses")
    spaces: list[SpaceIn] = Field(default_factory=list)


class SeatPreviewRequest(_Camel):
    from_row: RowValue = Field(default=None, alias="fromRow")
    to_row: RowValue = Field(default=None, alias="toRow")
    pattern: str = ""


class AircraftTypeCreate(_Camel):
    model: str = Field(min_length=1)
    manufacturer: str = "Boeing"
    active: bool = True
    seat_map: SeatMapDraft = Field(default_factory=SeatMapDraft, alias="seatMap")


class AircraftTypeUpdate(_Camel):
    model: Optional[str] = Field(default=None, min_length=1)
    manufacturer: Optional[str] = None
    active: Optional[bool] = None
    seat_map: Optional[SeatMapDraft] = Field(default=None, alias="seatMap")


class AircraftCreate(_Camel):
    code: str = Field(min_length=1)
    aircraft_type_id: Optional[int] = Field(default=None, alias="aircraftTypeId")
    aircraft_type: Optional[AircraftTypeCreate] = Field(default=None, alias="aircraftType")

    @model_validator(mode="after")
    def _one_type_source(self) -> "AircraftCreate":
        if (self.aircraft_type_id is None) == (self.aircraft_type is None):
            raise ValueError("provide exactly one of aircraftTypeId or aircraftType")
        return self


class AircraftUpdate(_Camel):
    code: Optional[str] = Field(default=None, min_length=1)
    aircraft_type_id: Optional[int] = Field(default=None, alias="aircraftTypeId")
    aircraft_type: Optional[AircraftTypeCreate] = Field(default=None, alias="aircraftType")

    @model_validator(mode="after")
    def _at_most_one_type_source(self) -> "AircraftUpdate":
        if self.aircraft_type_id is not None and self.aircraft_type is not None:
            raise ValueError("provide at most one of aircraftTypeId or aircraftType")
        return self
