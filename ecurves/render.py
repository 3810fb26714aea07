"""Per-frame evaluation of the curve over a pixel grid.

Pixels are addressed like fragments with an upper-left origin: the centre of
pixel ``(row, col)`` is ``(col + 0.5, row + 0.5)``.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .biarc import solve_control_set
from .config import Settings
from .coverage import pixel_cells, polyline_coverage, polyline_fill
from .geometry import Geometry2D
from .points import PointStore

log = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]

MODES = ("biarc", "polyline", "coverage")

_POINT_COLOR     = np.array([1.0, 0.0, 0.0])
_HIGHLIGHT_COLOR = np.array([1.0, 0.5, 0.5])
_JOINT_COLOR     = np.array([0.0, 0.0, 1.0])


def pixel_centers(width: int, height: int) -> _Array:
    """Shape ``(height, width, 2)`` array of pixel-centre coordinates."""
    xs = np.arange(width, dtype=float) + 0.5
    ys = np.arange(height, dtype=float) + 0.5
    Y, X = np.meshgrid(ys, xs, indexing="ij")
    return np.stack([X, Y], axis=-1)


def sample_geometry(geom: Geometry2D, width: int, height: int) -> _Array:
    """Evaluate *geom* at every pixel centre; shape ``(height, width)``."""
    return geom.sdf(pixel_centers(width, height))


def stroke_intensity(d: _Array, inner: float = 2.0, outer: float = 4.0) -> _Array:
    """Anti-aliased stroke: 1 within *inner* of the curve, 0 beyond *outer*."""
    return 1.0 - sdf.smoothstep(inner, outer, np.abs(d))


def render_frame(
    store: PointStore,
    highlighted: int = -1,
    mode: str = "biarc",
    settings: Optional[Settings] = None,
) -> _Array:
    """Render the current points into an ``(H, W, 3)`` float RGB image.

    ``biarc`` draws the biarc stroke and its joint once four points exist;
    ``polyline`` and ``coverage`` fill the region under the polyline through
    all points with the SDF or trapezoidal strategy.  Points are always drawn
    on top, *highlighted* one larger.
    """
    if mode not in MODES:
        raise ValueError(f"unknown mode {mode!r}; expected one of {MODES}")
    settings = settings or store.settings
    p = pixel_centers(settings.width, settings.height)
    img = np.zeros(p.shape[:-1] + (3,))
    points = store.snapshot()

    if mode == "biarc":
        cs = store.control_set()
        if cs is not None:
            solution = solve_control_set(cs)
            d = solution.sdf(p)
            img[...] = stroke_intensity(d, settings.stroke_inner, settings.stroke_outer)[..., None]
            joint = sdf.dot2(p - solution.joint) <= settings.joint_radius ** 2
            img[joint] = _JOINT_COLOR
    elif len(points) >= 2:
        if mode == "polyline":
            fill = polyline_fill(points, p, settings.cell_size)
        else:
            fill = polyline_coverage(points, pixel_cells(p, settings.cell_size))
        img[...] = fill[..., None]

    for i, point in enumerate(points):
        is_hl = i == highlighted
        radius = settings.highlight_radius if is_hl else settings.point_radius
        mask = sdf.length(p - point) <= radius
        img[mask] = _HIGHLIGHT_COLOR if is_hl else _POINT_COLOR

    log.debug("rendered %s frame with %d points", mode, len(points))
    return img


def save_npy(path: str, arr: _Array) -> None:
    """Save *arr* to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, arr)
