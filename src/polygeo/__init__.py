"""polygeo – index-based polylines over a shared point store."""

from __future__ import annotations

from .geo_object import GeoType
from .points import PointStore
from .polyline import (
    GeometryWarning,
    Location,
    Polyline,
    close_polyline,
    construct_polyline_from_segments,
    contains_edge,
    is_line_segment_intersecting,
    location_of_point,
    points_are_identical,
)
from .validation import ValidationError

__all__ = [
    "__version__",
    "GeoType",
    "GeometryWarning",
    "Location",
    "PointStore",
    "Polyline",
    "ValidationError",
    "close_polyline",
    "construct_polyline_from_segments",
    "contains_edge",
    "is_line_segment_intersecting",
    "location_of_point",
    "points_are_identical",
]

__version__ = "0.1.0"
