from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from polygeo.polyline import Polyline


def _xy_lines(ply: "Polyline") -> list[str]:
    lines = []
    for pnt in ply:
        x, y = float(pnt[0]), float(pnt[1])
        lines.append(f"{x!r} {y!r}")
    return lines


def format_polyline(ply: "Polyline") -> str:
    """Return the x/y text layout: one ``"x y"`` line per point."""

    return "".join(line + "\n" for line in _xy_lines(ply))


def write_polyline(ply: "Polyline", stream: IO[str]) -> None:
    stream.write(format_polyline(ply))


def save_polyline(ply: "Polyline", path: Path) -> None:
    path = Path(path)
    path.write_text(format_polyline(ply))
