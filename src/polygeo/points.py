from __future__ import annotations

from typing import ClassVar, Iterable, Iterator, Sequence

import numpy as np

from polygeo.geo_object import GeoType


def _require_point(value: Sequence[float], label: str = "point") -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(-1)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D or 3D coordinate.") from exc
    if arr.shape[0] == 2:
        arr = np.append(arr, 0.0)
    if arr.shape[0] != 3:
        raise ValueError(f"{label} must be a 2D or 3D coordinate.")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


class PointStore:
    """Append-only collection of 3D points addressed by integer ids.

    Polylines keep ids into a store rather than coordinates, so a store must
    outlive every polyline bound to it. Coordinates are never changed after
    insertion; the arrays handed out are read-only views.
    """

    geo_type: ClassVar[GeoType] = GeoType.POINT

    def __init__(self, points: Iterable[Sequence[float]] = ()) -> None:
        self._coords = np.zeros((0, 3), dtype=float)
        self._size = 0
        self.extend(points)

    def add(self, point: Sequence[float]) -> int:
        arr = _require_point(point)
        if self._size == self._coords.shape[0]:
            capacity = max(8, 2 * self._coords.shape[0])
            grown = np.zeros((capacity, 3), dtype=float)
            grown[: self._size] = self._coords[: self._size]
            self._coords = grown
        self._coords[self._size] = arr
        self._size += 1
        return self._size - 1

    def extend(self, points: Iterable[Sequence[float]]) -> list[int]:
        return [self.add(p) for p in points]

    def has_id(self, pnt_id: int) -> bool:
        return 0 <= pnt_id < self._size

    @property
    def coordinates(self) -> np.ndarray:
        view = self._coords[: self._size]
        view.flags.writeable = False
        return view

    def distance(self, i: int, j: int) -> float:
        return float(np.linalg.norm(self[i] - self[j]))

    def __getitem__(self, pnt_id: int) -> np.ndarray:
        if isinstance(pnt_id, bool) or not isinstance(pnt_id, (int, np.integer)):
            raise TypeError("Point ids must be integers.")
        if not self.has_id(pnt_id):
            raise IndexError(f"Point id {pnt_id} is outside the point store (size {self._size}).")
        view = self._coords[pnt_id]
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[np.ndarray]:
        for idx in range(self._size):
            yield self[idx]

    def __repr__(self) -> str:
        return f"PointStore(n_points={self._size})"


__all__ = ["PointStore"]
