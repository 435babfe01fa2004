from __future__ import annotations

import json
import logging
from typing import Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from sqlmodel import Session, select

from seatmap.layout import assemble_layout, disassemble_layout, total_seats
from seatmap.policy import LayoutPolicy
from seatmap.render import render_ascii
from seatmap.seats import coerce_row, generate_seats
from seatmap.specs import SeatClassSpec, SpaceSpec
from seatmap.validation import validate_configuration

from .db import get_session, init_db
from .models import Aircraft, AircraftType
from .schemas import (
    AircraftCreate,
    AircraftTypeCreate,
    AircraftTypeUpdate,
    AircraftUpdate,
    SeatMapDraft,
    SeatPreviewRequest,
)


logger = logging.getLogger(__name__)

app = FastAPI(title="Aircraft Seat Map API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

POLICIES = {
    "aircraft": LayoutPolicy.from_env(entity="aircraft"),
    "aircraft-type": LayoutPolicy.from_env(entity="aircraft type"),
}


@app.on_event("startup")
def _startup() -> None:
    init_db()


def _session() -> Iterator[Session]:
    with get_session() as session:
        yield session


def _policy(entity: str) -> LayoutPolicy:
    policy = POLICIES.get(entity)
    if policy is None:
        raise HTTPException(status_code=400, detail=f"unknown entity: {entity}")
    return policy


def _build_layout(draft: SeatMapDraft, policy: LayoutPolicy) -> dict:
    """Validate a submitted draft and assemble it, or fail with every error found."""
    result = validate_configuration(draft.seat_classes, draft.spaces, policy)
    if not result.valid:
        logger.warning("rejected %s seat map: %s", policy.entity, sorted(e.value for e in result.codes()))
        raise HTTPException(status_code=422, detail=result.to_dict())
    seat_classes = [
        SeatClassSpec(sc.class_name, coerce_row(sc.from_row), coerce_row(sc.to_row), sc.pattern)
        for sc in draft.seat_classes
    ]
    spaces = [SpaceSpec(sp.label, coerce_row(sp.from_row)) for sp in draft.spaces]
    return assemble_layout(seat_classes, spaces)


def _get_type(session: Session, type_id: int) -> AircraftType:
    t = session.get(AircraftType, type_id)
    if not t:
        raise HTTPException(status_code=404, detail="aircraft type not found")
    return t


def _get_aircraft(session: Session, aircraft_id: int) -> Aircraft:
    a = session.get(Aircraft, aircraft_id)
    if not a:
        raise HTTPException(status_code=404, detail="aircraft not found")
    return a


def _new_type(payload: AircraftTypeCreate, policy: LayoutPolicy) -> AircraftType:
    layout = _build_layout(payload.seat_map, policy)
    t = AircraftType(model=payload.model, manufacturer=payload.manufacturer, active=payload.active)
    _set_layout(t, layout)
    return t


def _set_layout(t: AircraftType, layout: dict) -> None:
    t.layout_json = json.dumps(layout)
    t.total_seats = total_seats(layout)


def _ensure_code_free(session: Session, code: str, *, exclude_id: Optional[int] = None) -> None:
    existing = session.exec(select(Aircraft).where(Aircraft.code == code)).first()
    if existing and existing.id != exclude_id:
        raise HTTPException(status_code=409, detail=f"aircraft code already exists: {code}")


def _type_out(t: AircraftType) -> dict:
    return {
        "id": t.id,
        "model": t.model,
        "manufacturer": t.manufacturer,
        "totalSeats": t.total_seats,
        "active": t.active,
        "seatMap": {"layout": t.layout()},
    }


def _aircraft_out(a: Aircraft, t: AircraftType) -> dict:
    return {"id": a.id, "code": a.code, "aircraftTypeId": a.aircraft_type_id, "aircraftType": _type_out(t)}


@app.get("/health")
def health() -> dict:
    return {"ok": True}


@app.post("/seatmap/seats")
def preview_seats(payload: SeatPreviewRequest) -> dict:
    seats = generate_seats(payload.from_row, payload.to_row, payload.pattern)
    return {"seats": [s.to_dict() for s in seats], "count": len(seats)}


@app.post("/seatmap/validate")
def validate_seat_map(payload: SeatMapDraft, entity: str = "aircraft") -> dict:
    result = validate_configuration(payload.seat_classes, payload.spaces, _policy(entity))
    return result.to_dict()


@app.post("/aircraft-types")
def create_aircraft_type(payload: AircraftTypeCreate, session: Session = Depends(_session)) -> dict:
    t = _new_type(payload, _policy("aircraft-type"))
    session.add(t)
    session.commit()
    session.refresh(t)
    logger.info("created aircraft type %s %s (%d seats)", t.manufacturer, t.model, t.total_seats)
    return _type_out(t)


@app.get("/aircraft-types")
def list_aircraft_types(session: Session = Depends(_session)) -> list[dict]:
    types = session.exec(select(AircraftType).order_by(AircraftType.id)).all()
    return [_type_out(t) for t in types]


@app.get("/aircraft-types/active")
def list_active_aircraft_types(session: Session = Depends(_session)) -> list[dict]:
    types = session.exec(select(AircraftType).where(AircraftType.active == True).order_by(AircraftType.id)).all()  # noqa: E712
    return [_type_out(t) for t in types]


@app.get("/aircraft-types/{type_id}")
def get_aircraft_type(type_id: int, session: Session = Depends(_session)) -> dict:
    return _type_out(_get_type(session, type_id))


@app.put("/aircraft-types/{type_id}")
def update_aircraft_type(type_id: int, payload: AircraftTypeUpdate, session: Session = Depends(_session)) -> dict:
    t = _get_type(session, type_id)
    if payload.seat_map is not None:
        _set_layout(t, _build_layout(payload.seat_map, _policy("aircraft-type")))
    if payload.model is not None:
        t.model = payload.model
    if payload.manufacturer is not None:
        t.manufacturer = payload.manufacturer
    if payload.active is not None:
        t.active = payload.active
    session.add(t)
    session.commit()
    session.refresh(t)
    logger.info("updated aircraft type %d", type_id)
    return _type_out(t)


@app.get("/aircraft-types/{type_id}/draft")
def aircraft_type_draft(type_id: int, session: Session = Depends(_session)) -> dict:
    seat_classes, spaces = disassemble_layout(_get_type(session, type_id).layout())
    return {"seatClasses": [sc.to_dict() for sc in seat_classes], "spaces": [sp.to_dict() for sp in spaces]}


@app.get("/aircraft-types/{type_id}/seat-map.txt")
def aircraft_type_seat_map_text(type_id: int, session: Session = Depends(_session)) -> Response:
    text = render_ascii(_get_type(session, type_id).layout())
    return Response(content=text + "\n", media_type="text/plain")


@app.post("/aircraft")
def create_aircraft(payload: AircraftCreate, session: Session = Depends(_session)) -> dict:
    _ensure_code_free(session, payload.code)
    if payload.aircraft_type is not None:
        t = _new_type(payload.aircraft_type, _policy("aircraft"))
        session.add(t)
        session.flush()
    else:
        t = _get_type(session, payload.aircraft_type_id)
    a = Aircraft(code=payload.code, aircraft_type_id=t.id)
    session.add(a)
    session.commit()
    session.refresh(a)
    session.refresh(t)
    logger.info("created aircraft %s (type %d)", a.code, t.id)
    return _aircraft_out(a, t)


@app.get("/aircraft")
def list_aircraft(session: Session = Depends(_session)) -> list[dict]:
    out = []
    for a in session.exec(select(Aircraft).order_by(Aircraft.id)).all():
        out.append(_aircraft_out(a, _get_type(session, a.aircraft_type_id)))
    return out


@app.get("/aircraft/{aircraft_id}")
def get_aircraft(aircraft_id: int, session: Session = Depends(_session)) -> dict:
    a = _get_aircraft(session, aircraft_id)
    return _aircraft_out(a, _get_type(session, a.aircraft_type_id))


@app.put("/aircraft/{aircraft_id}")
def update_aircraft(aircraft_id: int, payload: AircraftUpdate, session: Session = Depends(_session)) -> dict:
    a = _get_aircraft(session, aircraft_id)
    if payload.code is not None:
        _ensure_code_free(session, payload.code, exclude_id=a.id)
        a.code = payload.code
    if payload.aircraft_type is not None:
        t = _new_type(payload.aircraft_type, _policy("aircraft"))
        session.add(t)
        session.flush()
        a.aircraft_type_id = t.id
    elif payload.aircraft_type_id is not None:
        a.aircraft_type_id = _get_type(session, payload.aircraft_type_id).id
    session.add(a)
    session.commit()
    session.refresh(a)
    logger.info("updated aircraft %s", a.code)
    return _aircraft_out(a, _get_type(session, a.aircraft_type_id))


@app.delete("/aircraft/{aircraft_id}")
def delete_aircraft(aircraft_id: int, session: Session = Depends(_session)) -> dict:
    a = _get_aircraft(session, aircraft_id)
    session.delete(a)
    session.commit()
    return {"deleted": True}
