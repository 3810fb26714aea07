"""Curve geometries and composition for signed distance evaluation."""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
import numpy.typing as npt

from . import primitives as sdf
from .biarc import BiarcResult, ControlSet, solve_control_set

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]


# ===========================================================================
# Base class
# ===========================================================================

class Geometry2D:
    """Base class for 2D curve geometries.

    A ``Geometry2D`` wraps a callable ``func(p) -> distances`` where *p* is
    a ``(..., 2)`` array of 2D points and the return value is a ``(...)``
    array of signed distances.

    Subclasses override ``__init__`` to pass the appropriate primitive SDF to
    ``super().__init__(func)``.

    Implements:
    - Composition: :meth:`crossing` (even-odd)
    - Modifiers:   :meth:`onion`
    - Transforms:  :meth:`translate`
    """

    def __init__(self, func: _SDFFunc) -> None:
        self._func = func

    def sdf(self, p: _Array) -> _Array:
        """Evaluate signed distance at *p* (shape ``(..., 2)``)."""
        return self._func(np.asarray(p, dtype=float))

    def __call__(self, p: _Array) -> _Array:
        return self.sdf(p)

    def crossing(self, other: Geometry2D) -> Geometry2D:
        """Join with *other* under the even-odd rule."""
        return Geometry2D(lambda p: sdf.opCrossing(self.sdf(p), other.sdf(p)))

    def onion(self, thickness: float) -> Geometry2D:
        """Turn the curve into a stroke of half-width *thickness*."""
        return Geometry2D(lambda p: np.abs(self.sdf(p)) - thickness)

    def translate(self, tx: float, ty: float) -> Geometry2D:
        """Translate by ``(tx, ty)``."""
        t = np.array([tx, ty])
        return Geometry2D(lambda p: self.sdf(p - t))


# ===========================================================================
# Lines
# ===========================================================================

class Segment2D(Geometry2D):
    """Line segment from *point_a* to *point_b* (unsigned)."""

    def __init__(
        self, point_a: Sequence[float], point_b: Sequence[float]
    ) -> None:
        a = np.array(point_a, dtype=float)
        b = np.array(point_b, dtype=float)
        super().__init__(lambda p: sdf.sdSegment(p, a, b))


class LineEdge2D(Geometry2D):
    """Directed polygon edge from *point_a* to *point_b* (signed)."""

    def __init__(
        self, point_a: Sequence[float], point_b: Sequence[float]
    ) -> None:
        a = np.array(point_a, dtype=float)
        b = np.array(point_b, dtype=float)
        super().__init__(lambda p: sdf.sdLineEdge(p, a, b))


class Polyline2D(Geometry2D):
    """Polyline through *vertices*, closed into a polygon when *closed*."""

    def __init__(self, vertices: Sequence[Sequence[float]], closed: bool = False) -> None:
        v = np.array(vertices, dtype=float).reshape(-1, 2)
        super().__init__(lambda p: sdf.sdPolyline(p, v, closed=closed))


# ===========================================================================
# Arcs
# ===========================================================================

class CircleArc2D(Geometry2D):
    """Circular arc from *start* to *end* leaving *start* along *tangent*."""

    def __init__(
        self,
        start: Sequence[float],
        end: Sequence[float],
        tangent: Sequence[float],
    ) -> None:
        a = np.array(start, dtype=float)
        b = np.array(end, dtype=float)
        t = sdf.normalize(np.array(tangent, dtype=float))
        super().__init__(lambda p: sdf.sdCircleArc(p, a, b, t))


class Biarc2D(Geometry2D):
    """Biarc between *p0* and *p1* with unit tangents *t0*, *t1* into the curve.

    The solved construction (joint point and both arcs, or the
    :class:`~ecurves.biarc.ParallelTangents` fallback) is kept on
    :attr:`solution`.
    """

    def __init__(
        self,
        p0: Sequence[float],
        t0: Sequence[float],
        p1: Sequence[float],
        t1: Sequence[float],
    ) -> None:
        cs = ControlSet(
            p0=np.array(p0, dtype=float),
            t0=sdf.normalize(np.array(t0, dtype=float)),
            p1=np.array(p1, dtype=float),
            t1=sdf.normalize(np.array(t1, dtype=float)),
        )
        self.solution: BiarcResult = solve_control_set(cs)
        super().__init__(self.solution.sdf)

    @classmethod
    def from_points(
        cls,
        p0: Sequence[float],
        aux0: Sequence[float],
        p1: Sequence[float],
        aux1: Sequence[float],
    ) -> Biarc2D:
        """Build from anchors and tangent handles as placed by the user."""
        cs = ControlSet.from_points(p0, aux0, p1, aux1)
        return cls(cs.p0, cs.t0, cs.p1, cs.t1)

    @property
    def joint(self) -> _Array:
        return self.solution.joint
