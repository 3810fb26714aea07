"""Biarc construction from two endpoints and two tangent directions.

A biarc is a pair of circular arcs meeting at a *joint* point with a shared
tangent.  Given endpoints ``p0``, ``p1`` and unit tangents ``t0``, ``t1``
(each pointing from its endpoint into the curve), every point on a certain
circle through ``p0`` and ``p1`` is a valid joint.  :func:`solve_biarc`
picks the intersection of that locus circle with the chord's perpendicular
bisector that lies on the near side of the chord, then rebuilds each half
with :func:`~ecurves.primitives.circleFromTangent`.

When the tangents leave no unique locus circle (they are parallel to each
other in a way that makes the bisector construction collapse) the solver
returns :class:`ParallelTangents`, a straight-line fallback with the same
interface as :class:`Biarc`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from . import primitives as sdf
from .primitives import _F

log = logging.getLogger(__name__)

# Below this |dot(r, t0 - a)| the locus circle is undefined.
PARALLEL_EPS = 1.0e-8
# Relative size of cross(p0 - c, d) under which both joint roots tie.
TIE_EPS = 1.0e-12


def _as_point(v: Sequence[float]) -> _F:
    return np.asarray(v, dtype=float).reshape(2)


# ===========================================================================
# Data types
# ===========================================================================

@dataclass(frozen=True)
class ControlSet:
    """One biarc segment: endpoints and unit tangents pointing into the curve."""

    p0: _F
    t0: _F
    p1: _F
    t1: _F

    @classmethod
    def from_points(
        cls,
        p0: Sequence[float],
        aux0: Sequence[float],
        p1: Sequence[float],
        aux1: Sequence[float],
    ) -> ControlSet:
        """Build from anchor/handle pairs; ``tangent = normalize(aux - anchor)``."""
        p0 = _as_point(p0)
        p1 = _as_point(p1)
        return cls(
            p0=p0,
            t0=sdf.normalize(_as_point(aux0) - p0),
            p1=p1,
            t1=sdf.normalize(_as_point(aux1) - p1),
        )


@dataclass(frozen=True)
class ArcDescriptor:
    """One circular arc from *start* to *end* with unit *tangent* at *start*.

    ``degenerate`` arcs behave as the straight edge ``start -> end``.  For
    arcs that only became degenerate through their size, ``center`` and
    ``radius2`` still describe the (huge) circle; for straight fallbacks the
    centre is the chord midpoint and ``radius2`` is ``0.0``.  The column
    through ``end`` takes part in the even-odd count only with
    ``include_end``.
    """

    center: _F
    radius2: float
    start: _F
    end: _F
    tangent: _F
    degenerate: bool = False
    include_end: bool = False

    @property
    def radius(self) -> float:
        return float(np.sqrt(self.radius2))

    @classmethod
    def line(cls, start: _F, end: _F, include_end: bool = False) -> ArcDescriptor:
        """Straight edge from *start* to *end*."""
        return cls(
            center=0.5 * (start + end),
            radius2=0.0,
            start=start,
            end=end,
            tangent=sdf.normalize(end - start),
            degenerate=True,
            include_end=include_end,
        )

    @classmethod
    def from_tangent(
        cls,
        start: _F,
        end: _F,
        tangent: _F,
        include_end: bool = False,
        radius2_limit: float = sdf.ARC_DEGENERATE_RADIUS2,
    ) -> ArcDescriptor:
        """Arc through *start* and *end* leaving *start* along *tangent*."""
        circ = sdf.circleFromTangent(start, end, tangent)
        if circ is None:
            return cls.line(start, end, include_end)
        center, radius2, _ = circ
        return cls(
            center=center,
            radius2=radius2,
            start=start,
            end=end,
            tangent=tangent,
            degenerate=radius2 > radius2_limit,
            include_end=include_end,
        )

    def sdf(self, p: _F) -> _F:
        """Signed distance from *p* (shape ``(..., 2)``) to this arc."""
        if self.degenerate:
            return sdf.sdLineEdge(p, self.start, self.end, self.include_end)
        return sdf.sdCircleArc(p, self.start, self.end, self.tangent, self.include_end)


@dataclass(frozen=True)
class Biarc:
    """Solved biarc: ``arcs[0]`` runs ``p0 -> joint``, ``arcs[1]`` runs ``p1 -> joint``.

    ``arcs[0]`` includes the joint column, so the vertical line through the
    joint crosses the curve once.
    """

    joint: _F
    locus_center: _F
    locus_radius2: float
    arcs: Tuple[ArcDescriptor, ArcDescriptor]

    def sdf(self, p: _F) -> _F:
        return sdf.opCrossing(self.arcs[0].sdf(p), self.arcs[1].sdf(p))


@dataclass(frozen=True)
class ParallelTangents:
    """Straight-line fallback used when no locus circle exists."""

    p0: _F
    p1: _F
    joint: _F
    arcs: Tuple[ArcDescriptor, ArcDescriptor]

    @classmethod
    def between(cls, p0: _F, p1: _F) -> ParallelTangents:
        m = 0.5 * (p0 + p1)
        return cls(p0=p0, p1=p1, joint=m,
                   arcs=(ArcDescriptor.line(p0, m), ArcDescriptor.line(p1, m)))

    def sdf(self, p: _F) -> _F:
        # one edge, so the midpoint column is not skipped by both halves
        return sdf.sdLineEdge(p, self.p0, self.p1)


BiarcResult = Union[Biarc, ParallelTangents]


# ===========================================================================
# Solver
# ===========================================================================

def solve_biarc(
    p0: Sequence[float],
    t0: Sequence[float],
    p1: Sequence[float],
    t1: Sequence[float],
    eps: float = PARALLEL_EPS,
) -> BiarcResult:
    """Join *p0* and *p1* with two tangent-continuous circular arcs.

    Parameters
    ----------
    p0, p1:
        Endpoints.
    t0, t1:
        Unit tangents at *p0* and *p1*, each pointing into the curve.
    eps:
        Threshold on the locus denominator below which the tangents count
        as parallel.

    Returns
    -------
    Biarc or ParallelTangents
    """
    p0 = _as_point(p0);  t0 = _as_point(t0)
    p1 = _as_point(p1);  t1 = _as_point(t1)
    a  = -t1  # direction of travel when arriving at p1

    # chord and the direction along which the locus centre lies
    d   = p0 - p1
    r   = sdf.perp(d)
    den = float(sdf.dot(r, t0 - a))
    if abs(den) < eps:
        log.debug("parallel tangents at %s, %s: straight fallback", p0, p1)
        return ParallelTangents.between(p0, p1)

    lam = 0.5 * float(sdf.dot(d, t0 + a)) / den
    c   = 0.5 * (p0 + p1) + lam * r
    p0c = p0 - c
    r2  = float(sdf.dot2(p0c))

    # near-side intersection of the bisector with the locus circle; when the
    # centre sits on the chord both roots are equally near and the joint goes
    # to the side the tangents turn towards
    cr = float(sdf.cross(p0c, d))
    if abs(cr) <= TIE_EPS * float(sdf.dot2(d)):
        side = 1.0 if den > 0.0 else -1.0
    else:
        side = 1.0 if cr > 0.0 else -1.0
    joint = c + side * np.sqrt(r2) * r / float(sdf.length(r))

    return Biarc(
        joint=joint,
        locus_center=c,
        locus_radius2=r2,
        arcs=(
            ArcDescriptor.from_tangent(p0, joint, t0, include_end=True),
            ArcDescriptor.from_tangent(p1, joint, t1),
        ),
    )


def solve_control_set(cs: ControlSet, eps: float = PARALLEL_EPS) -> BiarcResult:
    """:func:`solve_biarc` for a :class:`ControlSet`."""
    return solve_biarc(cs.p0, cs.t0, cs.p1, cs.t1, eps=eps)
