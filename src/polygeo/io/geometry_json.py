from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from polygeo.points import PointStore
from polygeo.polyline import Polyline
from polygeo.validation import ValidationError


def geometry_from_dict(data: dict[str, Any]) -> tuple[PointStore, list[Polyline]]:
    """Build a point store and its polylines from ``{"points": ..., "polylines": ...}``."""

    if not isinstance(data, dict):
        raise ValidationError("Geometry document must be a JSON object.")
    raw_points = data.get("points")
    raw_polylines = data.get("polylines", [])
    if not isinstance(raw_points, list):
        raise ValidationError("Geometry document needs a 'points' list.")
    if not isinstance(raw_polylines, list):
        raise ValidationError("'polylines' must be a list of point id lists.")

    try:
        store = PointStore(raw_points)
    except ValueError as exc:
        raise ValidationError(f"Invalid point coordinates: {exc}") from exc

    polylines: list[Polyline] = []
    for idx, ids in enumerate(raw_polylines):
        if not isinstance(ids, list):
            raise ValidationError(f"Polyline {idx} must be a list of point ids.")
        try:
            polylines.append(Polyline(store, ids))
        except (IndexError, TypeError) as exc:
            raise ValidationError(f"Polyline {idx}: {exc}") from exc
    return store, polylines


def geometry_to_dict(store: PointStore, polylines: Sequence[Polyline]) -> dict[str, Any]:
    return {
        "points": [[float(c) for c in pnt] for pnt in store],
        "polylines": [list(ply.point_ids) for ply in polylines],
    }


def load_geometry(path: Path) -> tuple[PointStore, list[Polyline]]:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path} is not valid JSON: {exc}") from exc
    return geometry_from_dict(data)


def dump_geometry(store: PointStore, polylines: Sequence[Polyline], path: Path) -> None:
    path = Path(path)
    path.write_text(json.dumps(geometry_to_dict(store, polylines), indent=2) + "\n")
