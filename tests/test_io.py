from __future__ import annotations

import json

import numpy as np
import pytest
import pyvista as pv

from polygeo import PointStore, Polyline, ValidationError
from polygeo.io.geometry_json import dump_geometry, geometry_from_dict, load_geometry
from polygeo.io.text import save_polyline
from polygeo.io.vtk import polyline_to_pyvista, save_vtk


def test_save_polyline_text(tmp_path, square_store):
    path = tmp_path / "chain.txt"
    save_polyline(Polyline(square_store, [0, 1]), path)
    assert path.read_text() == "0.0 0.0\n3.0 0.0\n"


def test_geometry_json_round_trip(tmp_path, square_store, open_square):
    path = tmp_path / "geometry.json"
    dump_geometry(square_store, [open_square], path)
    store, polylines = load_geometry(path)
    assert np.allclose(store.coordinates, square_store.coordinates)
    assert len(polylines) == 1
    assert polylines[0].point_ids == open_square.point_ids
    assert polylines[0].points_vec is store


def test_geometry_from_dict_rejects_unknown_ids():
    with pytest.raises(ValidationError):
        geometry_from_dict({"points": [[0, 0, 0]], "polylines": [[0, 1]]})


def test_geometry_from_dict_rejects_bad_points():
    with pytest.raises(ValidationError):
        geometry_from_dict({"points": [[0]], "polylines": []})
    with pytest.raises(ValidationError):
        geometry_from_dict({"polylines": []})


def test_load_geometry_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(ValidationError):
        load_geometry(path)


def test_polyline_to_pyvista(open_square):
    poly = polyline_to_pyvista(open_square)
    assert isinstance(poly, pv.PolyData)
    assert poly.n_points == 4
    assert poly.n_lines == 1
    assert np.allclose(poly.point_data["length"], open_square.length_vec)
    assert list(poly.point_data["point_id"]) == [0, 1, 2, 3]


def test_save_vtk(tmp_path, open_square):
    path = tmp_path / "out" / "chain.vtk"
    save_vtk(open_square, path)
    assert path.exists()
    loaded = pv.read(str(path))
    assert loaded.n_points == 4


def test_empty_polyline_to_pyvista():
    poly = polyline_to_pyvista(Polyline(PointStore()))
    assert poly.n_points == 0


def test_geometry_from_dict_rejects_non_integer_ids():
    with pytest.raises(ValidationError):
        geometry_from_dict({"points": [[0, 0, 0], [1, 0, 0]], "polylines": [[0, 1.0]]})
