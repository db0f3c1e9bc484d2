from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from polygeo.points import PointStore
    from polygeo.polyline import Polyline


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


def require_point_id(store: "PointStore", pnt_id: int) -> int:
    """Return ``pnt_id`` as an int, raising IndexError if the store lacks it.

    Booleans and floats are rejected with TypeError, even integral ones.
    """

    if isinstance(pnt_id, bool) or not isinstance(pnt_id, (int, np.integer)):
        raise TypeError(f"Point id {pnt_id!r} is not an integer.")
    idx = int(pnt_id)
    if not store.has_id(idx):
        raise IndexError(f"Point id {idx} is outside the point store (size {len(store)}).")
    return idx


def validate_fragments(ply_vec: Sequence["Polyline"]) -> "PointStore":
    """Check a fragment set for merging and return the shared point store."""

    if not ply_vec:
        raise ValueError("At least one polyline fragment is required.")
    store = ply_vec[0].points_vec
    for idx, ply in enumerate(ply_vec):
        if ply.points_vec is not store:
            raise ValidationError(f"Fragment {idx} references a different point store.")
        if ply.number_of_points == 0:
            raise ValidationError(f"Fragment {idx} has no points.")
    return store
