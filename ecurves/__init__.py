"""
ecurves — biarc curves and their signed distance fields
=======================================================

Turns a handful of user-placed 2D points and tangent handles into a biarc
(two tangent-continuous circular arcs) and evaluates signed distances to it,
vectorised with NumPy, for anti-aliased rendering and hit-testing.

Implemented features
--------------------
- Distance primitives: segment, signed polygon edge, signed circular arc
- Biarc construction: :func:`solve_biarc` (with a straight-line fallback)
- Coverage: trapezoidal cell overlap and smooth-step polyline fill
- Points: :class:`PointStore`, nearest-point picking, place/move editing
- Frames: :func:`render_frame` samples everything over a pixel grid

Quick start
-----------

::

    import numpy as np
    from ecurves import Biarc2D

    curve = Biarc2D((0, 0), (0, 1), (10, 0), (0, 1))
    curve.joint                        # array([5., 5.])
    curve.sdf(np.array([[5.0, 0.0]]))  # distance from the chord midpoint
"""

from .biarc import (
    ArcDescriptor,
    Biarc,
    ControlSet,
    ParallelTangents,
    solve_biarc,
    solve_control_set,
)
from .config import Settings, load_settings
from .coverage import (
    line_square_overlap,
    pixel_cells,
    polyline_coverage,
    polyline_fill,
    polyline_overlap,
)
from .geometry import (
    Geometry2D,
    Segment2D,
    LineEdge2D,
    Polyline2D,
    CircleArc2D,
    Biarc2D,
)
from .points import EditMode, PointEditor, PointStore, find_nearest_point
from .render import pixel_centers, render_frame, sample_geometry, save_npy, stroke_intensity

__version__ = "0.1.0"

__all__ = [
    # Biarc construction
    "ArcDescriptor",
    "Biarc",
    "ControlSet",
    "ParallelTangents",
    "solve_biarc",
    "solve_control_set",

    # Geometry
    "Geometry2D",
    "Segment2D",
    "LineEdge2D",
    "Polyline2D",
    "CircleArc2D",
    "Biarc2D",

    # Coverage
    "line_square_overlap",
    "pixel_cells",
    "polyline_coverage",
    "polyline_fill",
    "polyline_overlap",

    # Points
    "EditMode",
    "PointEditor",
    "PointStore",
    "find_nearest_point",

    # Frames
    "pixel_centers",
    "render_frame",
    "sample_geometry",
    "save_npy",
    "stroke_intensity",

    # Configuration
    "Settings",
    "load_settings",
]
