from __future__ import annotations

import warnings
from enum import Enum
from typing import IO, ClassVar, Iterable, Iterator, Sequence

import numpy as np

from polygeo.geo_object import GeoType
from polygeo.io.text import format_polyline, write_polyline
from polygeo.points import PointStore, _require_point
from polygeo.validation import require_point_id, validate_fragments

_EPS = float(np.finfo(float).eps)


class GeometryWarning(UserWarning):
    """Issued for recoverable geometric conditions (partial merges, bad edges)."""


class Location(Enum):
    """Position of a point relative to a directed line segment."""

    LEFT = "left"
    RIGHT = "right"
    BEYOND = "beyond"
    BEHIND = "behind"
    BETWEEN = "between"
    SOURCE = "source"
    DESTINATION = "destination"


def location_of_point(source: Sequence[float], dest: Sequence[float], pnt: Sequence[float]) -> Location:
    """Classify ``pnt`` against the directed segment ``source -> dest``.

    Only x and y are used. Collinear points are placed along the segment with
    the parameter of the dominant axis of ``dest - source``. A degenerate
    segment (``source == dest``) gives no meaningful answer.
    """

    a = np.asarray(dest, dtype=float)[:2] - np.asarray(source, dtype=float)[:2]
    b = np.asarray(pnt, dtype=float)[:2] - np.asarray(source, dtype=float)[:2]
    cross = float(a[0] * b[1] - a[1] * b[0])
    tol = _EPS * float(np.linalg.norm(a) * np.linalg.norm(b))
    if cross > tol:
        return Location.LEFT
    if cross < -tol:
        return Location.RIGHT

    axis = 0 if abs(a[0]) >= abs(a[1]) else 1
    if a[axis] == 0.0:
        return Location.SOURCE if not np.any(b) else Location.BEYOND
    t = float(b[axis] / a[axis])
    if abs(t) <= _EPS:
        return Location.SOURCE
    if abs(t - 1.0) <= _EPS:
        return Location.DESTINATION
    if t < 0.0:
        return Location.BEHIND
    if t > 1.0:
        return Location.BEYOND
    return Location.BETWEEN


def points_are_identical(store: PointStore, i: int, j: int, prox: float) -> bool:
    """True if ids ``i`` and ``j`` match or their points lie within ``prox``."""

    if i == j:
        return True
    return store.distance(i, j) <= prox


def _check_index(idx: int, size: int, label: str) -> None:
    if not 0 <= idx < size:
        raise IndexError(f"{label} {idx} out of range for polyline with {size} points.")


class Polyline:
    """Ordered sequence of point ids into a shared :class:`PointStore`.

    The polyline never owns coordinates. Cumulative lengths are cached per
    point (``length_vec[0] == 0``) and kept in sync by every mutation.
    """

    geo_type: ClassVar[GeoType] = GeoType.POLYLINE

    def __init__(self, points: PointStore, point_ids: Iterable[int] = ()) -> None:
        self._points = points
        self._ids: list[int] = []
        self._length = np.zeros(0, dtype=float)
        for pnt_id in point_ids:
            self.add_point(pnt_id)

    # -- mutation -----------------------------------------------------------

    def add_point(self, pnt_id: int) -> None:
        """Append a point id; it must already exist in the point store."""

        pnt_id = require_point_id(self._points, pnt_id)
        self._ids.append(pnt_id)
        self._update_lengths(len(self._ids) - 1)

    def insert_point(self, pos: int, pnt_id: int) -> None:
        """Insert a point id at ``pos`` (``0 <= pos <= number_of_points``)."""

        if not 0 <= pos <= len(self._ids):
            raise IndexError(f"Insert position {pos} out of range for polyline with {len(self._ids)} points.")
        pnt_id = require_point_id(self._points, pnt_id)
        self._ids.insert(pos, pnt_id)
        self._update_lengths(pos)

    def set_point_id(self, idx: int, pnt_id: int) -> None:
        """Replace the id stored at position ``idx``."""

        _check_index(idx, len(self._ids), "Position")
        pnt_id = require_point_id(self._points, pnt_id)
        self._ids[idx] = pnt_id
        self._update_lengths(idx)

    def _assign(self, point_ids: Sequence[int]) -> None:
        self._ids = list(point_ids)
        self._update_lengths(0)

    def _update_lengths(self, start: int) -> None:
        head = self._length[:start]
        ids = self._ids[max(start - 1, 0):]
        if not ids:
            self._length = head.copy()
            return
        coords = self._points.coordinates[np.asarray(ids, dtype=int)]
        steps = np.linalg.norm(np.diff(coords, axis=0), axis=1)
        if start == 0:
            tail = np.concatenate([[0.0], np.cumsum(steps)])
        else:
            tail = head[-1] + np.cumsum(steps)
        self._length = np.concatenate([head, tail])

    # -- queries ------------------------------------------------------------

    @property
    def points_vec(self) -> PointStore:
        return self._points

    @property
    def point_ids(self) -> tuple[int, ...]:
        return tuple(self._ids)

    @property
    def number_of_points(self) -> int:
        return len(self._ids)

    def get_point_id(self, i: int) -> int:
        _check_index(i, len(self._ids), "Index")
        return self._ids[i]

    def get_point(self, i: int) -> np.ndarray:
        return self._points[self.get_point_id(i)]

    def is_point_id_in_polyline(self, pnt_id: int) -> bool:
        return pnt_id in self._ids

    def is_closed(self) -> bool:
        if len(self._ids) < 3:
            return False
        return self._ids[0] == self._ids[-1]

    def get_length(self, k: int) -> float:
        """Length of the polyline from its first point up to point ``k``."""

        _check_index(k, len(self._ids), "Index")
        return float(self._length[k])

    @property
    def length_vec(self) -> np.ndarray:
        view = self._length.view()
        view.flags.writeable = False
        return view

    @property
    def total_length(self) -> float:
        return float(self._length[-1]) if self._ids else 0.0

    def segments(self) -> Iterator[tuple[int, int]]:
        for k in range(len(self._ids) - 1):
            yield self._ids[k], self._ids[k + 1]

    def get_location_of_point(self, k: int, pnt: Sequence[float]) -> Location:
        """2D location of ``pnt`` relative to the k-th segment (z is ignored)."""

        _check_index(k, len(self._ids) - 1, "Segment")
        return location_of_point(self.get_point(k), self.get_point(k + 1), pnt)

    # -- derived construction ----------------------------------------------

    def copy(self) -> "Polyline":
        ply = Polyline(self._points)
        ply._ids = list(self._ids)
        ply._length = self._length.copy()
        return ply

    __copy__ = copy

    @staticmethod
    def close_polyline(ply: "Polyline") -> "Polyline | None":
        return close_polyline(ply)

    @staticmethod
    def construct_polyline_from_segments(ply_vec: Sequence["Polyline"], prox: float = 0.0) -> "Polyline":
        return construct_polyline_from_segments(ply_vec, prox)

    # -- output / protocol --------------------------------------------------

    def write(self, stream: IO[str]) -> None:
        write_polyline(self, stream)

    def __getitem__(self, i: int) -> np.ndarray:
        return self.get_point(i)

    def __iter__(self) -> Iterator[np.ndarray]:
        for pnt_id in self._ids:
            yield self._points[pnt_id]

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polyline):
            return NotImplemented
        if len(self._ids) != len(other._ids):
            return False
        return self._ids == other._ids or self._ids == other._ids[::-1]

    def __str__(self) -> str:
        return format_polyline(self)

    def __repr__(self) -> str:
        return f"Polyline(point_ids={self._ids!r})"


def contains_edge(ply: Polyline, id0: int, id1: int) -> bool:
    """True if ``id0`` and ``id1`` are consecutive in ``ply`` (either order)."""

    if id0 == id1:
        warnings.warn(f"No valid edge: id0 == id1 == {id0}.", GeometryWarning, stacklevel=2)
        return False
    edge = {id0, id1}
    return any({a, b} == edge for a, b in ply.segments())


_OPPOSITE = {Location.LEFT: Location.RIGHT, Location.RIGHT: Location.LEFT}


def _strictly_opposite(first: Location, second: Location) -> bool:
    return _OPPOSITE.get(first) is second


def is_line_segment_intersecting(ply: Polyline, s0: Sequence[float], s1: Sequence[float]) -> bool:
    """Test whether segment ``(s0, s1)`` properly crosses a segment of ``ply``.

    Only proper crossings count: touching an endpoint or running along a
    segment is not an intersection.
    """

    s0 = _require_point(s0, "s0")
    s1 = _require_point(s1, "s1")
    for k in range(ply.number_of_points - 1):
        if not _strictly_opposite(ply.get_location_of_point(k, s0), ply.get_location_of_point(k, s1)):
            continue
        a = ply.get_point(k)
        b = ply.get_point(k + 1)
        if _strictly_opposite(location_of_point(s0, s1, a), location_of_point(s0, s1, b)):
            return True
    return False


def close_polyline(ply: Polyline) -> Polyline | None:
    """Return a closed copy of ``ply``, or None if it has fewer than 3 points."""

    if ply.number_of_points < 3:
        warnings.warn(
            "close_polyline needs a polyline with at least three points.",
            GeometryWarning,
            stacklevel=2,
        )
        return None
    closed = ply.copy()
    if not closed.is_closed():
        closed.add_point(closed.get_point_id(0))
    return closed


def _attach(chain: Polyline, fragment: Polyline, prox: float) -> bool:
    store = chain.points_vec
    ids = list(fragment.point_ids)
    chain_ids = list(chain.point_ids)
    head, tail = chain_ids[0], chain_ids[-1]
    if points_are_identical(store, tail, ids[0], prox):
        chain._assign(chain_ids + ids[1:])
    elif points_are_identical(store, tail, ids[-1], prox):
        chain._assign(chain_ids + ids[-2::-1])
    elif points_are_identical(store, head, ids[-1], prox):
        chain._assign(ids[:-1] + chain_ids)
    elif points_are_identical(store, head, ids[0], prox):
        chain._assign(ids[:0:-1] + chain_ids)
    else:
        return False
    return True


def construct_polyline_from_segments(ply_vec: Sequence[Polyline], prox: float = 0.0) -> Polyline:
    """Chain fragments sharing one point store into a single polyline.

    Endpoints closer than ``prox`` count as the same point. Fragments are
    tried in input order against both free ends of the growing chain, so a
    point shared by more than two fragment ends is resolved by input order.
    If some fragments cannot be connected the partial chain is returned and a
    :class:`GeometryWarning` is issued. A chain of four or more points whose
    last point lies within ``prox`` of its first is closed on the first id.
    """

    fragments = list(ply_vec)
    validate_fragments(fragments)
    if prox < 0:
        raise ValueError("prox must be non-negative.")

    chain = fragments[0].copy()
    pool = fragments[1:]
    while pool:
        for idx, fragment in enumerate(pool):
            if _attach(chain, fragment, prox):
                del pool[idx]
                break
        else:
            warnings.warn(
                f"{len(pool)} of {len(fragments)} fragments are not connected to the chain; "
                "returning a partial polyline.",
                GeometryWarning,
                stacklevel=2,
            )
            break

    # a loop that meets its start only within prox ends on the head id
    n_pts = chain.number_of_points
    head, tail = chain.get_point_id(0), chain.get_point_id(n_pts - 1)
    if n_pts >= 4 and head != tail and points_are_identical(chain.points_vec, head, tail, prox):
        chain.set_point_id(n_pts - 1, head)
    return chain


__all__ = [
    "GeometryWarning",
    "Location",
    "Polyline",
    "close_polyline",
    "construct_polyline_from_segments",
    "contains_edge",
    "is_line_segment_intersecting",
    "location_of_point",
    "points_are_identical",
]
