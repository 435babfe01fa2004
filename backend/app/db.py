from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine


logger = logging.getLogger(__name__)


def database_url() -> str:
    """SEATMAP_DB_URL wins; otherwise a SQLite file under SEATMAP_DATA_DIR (default ./data)."""
    url = os.environ.get("SEATMAP_DB_URL")
    if url:
        return url
    data_dir = Path(os.environ.get("SEATMAP_DATA_DIR", Path.cwd() / "data"))
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{data_dir / 'seatmap.db'}"


def _connect_args(url: str) -> dict:
    # FastAPI serves sync routes from a thread pool
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


_url = database_url()
engine = create_engine(
    _url,
    echo=os.environ.get("SEATMAP_DB_ECHO", "").lower() in ("1", "true", "yes"),
    connect_args=_connect_args(_url),
)


def init_db() -> None:
    from . import models  # noqa: F401 - registers the aircraft tables

    SQLModel.metadata.create_all(engine)
    logger.info("seat map tables ready on %s", engine.url.render_as_string(hide_password=True))


def get_session() -> Session:
    return Session(engine)
