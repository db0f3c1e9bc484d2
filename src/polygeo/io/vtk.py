from __future__ import annotations

from pathlib import Path

import numpy as np

from polygeo.polyline import Polyline


def polyline_to_pyvista(ply: Polyline):
    """Return a PolyData with the polyline's points and a single line cell."""

    import pyvista as pv

    pts = np.array([pnt for pnt in ply], dtype=float).reshape(-1, 3)
    n_pts = pts.shape[0]
    if n_pts == 0:
        return pv.PolyData()
    if n_pts < 2:
        return pv.PolyData(pts, deep=True)
    lines = np.hstack(([n_pts], np.arange(n_pts)))
    poly = pv.PolyData(pts, lines=lines)
    poly.point_data["point_id"] = np.asarray(ply.point_ids, dtype=np.int64)
    poly.point_data["length"] = np.asarray(ply.length_vec, dtype=float)
    return poly


def save_vtk(ply: Polyline, path: Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    polyline_to_pyvista(ply).save(str(path))
