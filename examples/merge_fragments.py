"""Example: stitch boundary fragments into a closed polyline."""

from __future__ import annotations

from polygeo import PointStore, Polyline, close_polyline, construct_polyline_from_segments


def build() -> Polyline:
    """Merge two noisy fragments of a triangle and close the result."""

    store = PointStore(
        [
            (0.0, 0.0, 0.0),
            (10.0, 0.0, 0.0),
            (10.0005, 0.0, 0.0),
            (5.0, 8.0, 0.0),
        ]
    )
    fragments = [
        Polyline(store, [0, 1]),
        Polyline(store, [3, 2]),
    ]
    chain = construct_polyline_from_segments(fragments, prox=1e-3)
    return close_polyline(chain)


if __name__ == "__main__":
    print(build(), end="")
