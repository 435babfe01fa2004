from __future__ import annotations

import json
from pathlib import Path

from .errors import InvalidLayoutError
from .layout import Layout, assemble_layout, default_draft


def load_layout(path: str | Path) -> Layout:
    p = Path(path)
    if not p.exists():
        raise InvalidLayoutError(f"layout file not found: {p}")

    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except Exception as e:  # noqa: BLE001
        raise InvalidLayoutError(f"failed to read layout JSON: {e}") from e

    # accept both a bare layout and a {"layout": {...}} seat map wrapper
    if isinstance(data, dict) and isinstance(data.get("layout"), dict):
        data = data["layout"]
    if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
        raise InvalidLayoutError(f"layout must map section keys to objects: {p}")
    return data


def save_layout(layout: Layout, path: str | Path) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(layout, indent=2) + "\n", encoding="utf-8")


def maybe_init_layout(path: str | Path, *, overwrite: bool = False) -> Layout:
    p = Path(path)
    if p.exists() and not overwrite:
        return load_layout(p)

    layout = assemble_layout(*default_draft())
    save_layout(layout, p)
    return layout
