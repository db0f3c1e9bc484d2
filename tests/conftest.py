from __future__ import annotations

import os
from pathlib import Path

import pytest

from polygeo import PointStore, Polyline

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def square_store() -> PointStore:
    """Unit-ish square (ids 0-3) plus a few helper points."""
    return PointStore(
        [
            (0.0, 0.0, 0.0),
            (3.0, 0.0, 0.0),
            (3.0, 4.0, 0.0),
            (0.0, 4.0, 0.0),
            (1.5, 2.0, 0.0),
            (6.0, 0.0, 0.0),
        ]
    )


@pytest.fixture
def open_square(square_store: PointStore) -> Polyline:
    return Polyline(square_store, [0, 1, 2, 3])


@pytest.fixture
def chain_store() -> PointStore:
    """Points A-D on a line, plus a near-duplicate of B and C."""
    return PointStore(
        [
            (0.0, 0.0, 0.0),  # 0 A
            (1.0, 0.0, 0.0),  # 1 B
            (2.0, 0.0, 0.0),  # 2 C
            (3.0, 0.0, 0.0),  # 3 D
            (1.0, 0.01, 0.0),  # 4 B'
            (2.0, 0.5, 0.0),  # 5 far from C
        ]
    )
