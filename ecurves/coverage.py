"""Approximate pixel coverage of a polyline against small square cells.

Cells are ``(..., 4)`` arrays ``[x0, y0, x1, y1]`` with ``x0 < x1`` and
``y0 < y1``.  Coordinates follow the screen convention used by the renderer
(``y`` grows downward), so the ``y1`` border is the visual bottom of a cell
and the overlap of a segment is the area between it and that border.

Two anti-aliasing strategies are offered:

* :func:`polyline_coverage` — sum of trapezoidal overlaps of every edge,
  mapped through ``smoothstep(0, cell_area, overlap)``;
* :func:`polyline_fill` — the signed-distance alternative,
  ``1 - smoothstep(-s/2, s/2, sdPolyline(p))`` for a cell of size ``s``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from . import primitives as sdf

_Array = npt.NDArray[np.floating]

# Below this |Δx| a segment adds no area; below this |Δy| it is horizontal.
FLAT_EPS = 1.0e-8


def pixel_cells(centers: _Array, size: float) -> _Array:
    """Square cells of side *size* around *centers* (shape ``(..., 2)``)."""
    centers = np.asarray(centers, dtype=float)
    h = 0.5 * size
    return np.concatenate([centers - h, centers + h], axis=-1)


def line_square_overlap(
    p0: Sequence[float],
    p1: Sequence[float],
    sq: _Array,
    eps: float = FLAT_EPS,
) -> _Array:
    """Area between segment *p0* → *p1* and the ``y1`` border of each cell.

    Only the part of the segment inside the cell's x-range counts.  A
    leftward segment returns the negated overlap of its reversed segment, so
    the overlaps of a closed polygon's edges add up to its covered area.
    """
    p0 = np.asarray(p0, dtype=float)
    p1 = np.asarray(p1, dtype=float)
    sq = np.asarray(sq, dtype=float)
    delta = p1 - p0
    dx, dy = float(delta[0]), float(delta[1])

    if abs(dx) < eps:
        return np.zeros(sq.shape[:-1])
    if dx < 0.0:
        return -line_square_overlap(p1, p0, sq, eps)

    x0 = sq[..., 0];  y0 = sq[..., 1]
    x1 = sq[..., 2];  y1 = sq[..., 3]
    x_start = sdf.clamp(p0[0], x0, x1)
    x_end   = sdf.clamp(p1[0], x0, x1)

    if abs(dy) < eps:
        y = sdf.clamp(p0[1], y0, y1)
        return (x_end - x_start) * (y1 - y)

    def x_at(y: _Array) -> _Array:
        return dx * (y - p0[1]) / dy + p0[0]

    def y_at(x: _Array) -> _Array:
        return dy * (x - p0[0]) / dx + p0[1]

    if dy > 0.0:
        # enters through the top border, leaves through the bottom one
        x_is = sdf.clamp(x_at(y0), x_start, x_end)
        y_is = sdf.clamp(y_at(x_is), y0, y1)
        x_ie = sdf.clamp(x_at(y1), x_start, x_end)
        y_ie = sdf.clamp(y_at(x_ie), y0, y1)
        return ((x_is - x_start) * (y1 - y_is)
                + (x_ie - x_is) * (y1 - 0.5 * (y_is + y_ie)))

    # enters through the bottom border, leaves through the top one
    x_is = sdf.clamp(x_at(y1), x_start, x_end)
    y_is = sdf.clamp(y_at(x_is), y0, y1)
    x_ie = sdf.clamp(x_at(y0), x_start, x_end)
    y_ie = sdf.clamp(y_at(x_ie), y0, y1)
    return ((x_ie - x_is) * (y1 - 0.5 * (y_is + y_ie))
            + (x_end - x_ie) * (y1 - y_ie))


def polyline_overlap(points: _Array, sq: _Array) -> _Array:
    """Summed :func:`line_square_overlap` of every edge of the polyline."""
    v = np.asarray(points, dtype=float).reshape(-1, 2)
    sq = np.asarray(sq, dtype=float)
    total = np.zeros(sq.shape[:-1])
    for i in range(len(v) - 1):
        total = total + line_square_overlap(v[i], v[i + 1], sq)
    return total


def polyline_coverage(points: _Array, sq: _Array) -> _Array:
    """Coverage in ``[0, 1]`` of each cell by the region under the polyline."""
    sq = np.asarray(sq, dtype=float)
    area = (sq[..., 2] - sq[..., 0]) * (sq[..., 3] - sq[..., 1])
    return sdf.smoothstep(0.0, area, polyline_overlap(points, sq))


def polyline_fill(points: _Array, p: _Array, cell_size: float) -> _Array:
    """Smooth-step fill of the region under the polyline at query points *p*."""
    d = sdf.sdPolyline(np.asarray(p, dtype=float), np.asarray(points, dtype=float).reshape(-1, 2))
    return 1.0 - sdf.smoothstep(-0.5 * cell_size, 0.5 * cell_size, d)
