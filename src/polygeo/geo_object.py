from __future__ import annotations

from enum import Enum


class GeoType(Enum):
    """Tag for the fixed set of geometry kinds handled by polygeo."""

    POINT = "point"
    POLYLINE = "polyline"


__all__ = ["GeoType"]
