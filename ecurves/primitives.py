"""2-D distance primitives for the ecurves package.

Re-exports all shared helpers from :mod:`ecurves._common`, then adds the
line, line-edge and circular-arc distance functions the biarc pipeline is
built from.

All functions accept and return ``numpy.ndarray`` objects and support
broadcasting over arbitrary leading batch dimensions.  A "point array" *p*
has shape ``(..., 2)``; scalar results have shape ``(...,)``.  Curve
parameters (endpoints, tangents) are single ``(2,)`` vectors.

Sign convention
---------------
Signed primitives use the even-odd rule along a vertical ray cast from the
query point towards ``-y``: each piece of curve the ray crosses flips the
sign once.  Pieces compose with :func:`opCrossing`, so an open polyline or
biarc yields a negative distance "above" the curve in ``y``-down screen
coordinates and positive elsewhere.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from ._common import *  # noqa: F401, F403

# Below this |Δx| an edge counts as vertical and never flips the sign.
VERTICAL_EPS = 1.0e-8
# Below this |dot(perp(t), b - a)| a tangent runs along its chord.
CHORD_EPS = 1.0e-8
# Beyond this squared radius an arc is evaluated as its chord.
ARC_DEGENERATE_RADIUS2 = 1.0e8


# ===========================================================================
# Lines
# ===========================================================================

def sdSegment(p: _F, a: _F, b: _F) -> _F:
    """Unsigned distance to the segment from *a* to *b*."""
    pa = p - a
    ba = b - a
    h  = clamp(safe_div(dot(pa, ba), dot2(ba)), 0.0, 1.0)
    return length(pa - ba * h[..., None])


def sdLineEdge(
    p: _F, a: _F, b: _F, include_end: bool = False, eps: float = VERTICAL_EPS
) -> _F:
    """Signed distance to the directed polygon edge *a* → *b*.

    The magnitude is :func:`sdSegment`.  The result is negative when the
    edge passes strictly below *p* inside the half-open x-span of the edge,
    start inclusive, end exclusive.  With *include_end* the column through
    *b* counts as well.
    """
    d  = sdSegment(p, a, b)
    dx = float(b[0] - a[0])
    if abs(dx) < eps:
        return d
    px = p[..., 0];  py = p[..., 1]
    if dx > 0.0:
        span = (px >= a[0]) & (px < b[0])
    else:
        span = (px <= a[0]) & (px > b[0])
    if include_end:
        span = span | (px == b[0])
    y_edge = a[1] + (px - a[0]) * (b[1] - a[1]) / dx
    return np.where(span & (y_edge < py), -d, d)


def opCrossing(d1: _F, d2: _F) -> _F:
    """Even-odd composition of two signed pieces: signs multiply, nearest wins."""
    s = np.where(d1 < 0.0, -1.0, 1.0) * np.where(d2 < 0.0, -1.0, 1.0)
    return s * np.minimum(np.abs(d1), np.abs(d2))


def sdPolyline(p: _F, v: _F, closed: bool = False) -> _F:
    """Signed distance to the polyline through vertices *v* (shape ``(N, 2)``).

    With *closed* the last vertex connects back to the first and the sign is
    the usual inside/outside of the polygon.
    """
    v = np.asarray(v, dtype=float)
    n = v.shape[0]
    if n == 0:
        return np.full(p.shape[:-1], np.inf)
    if n == 1:
        return length(p - v[0])
    d = sdLineEdge(p, v[0], v[1])
    edges = n if closed and n > 2 else n - 1
    for i in range(1, edges):
        d = opCrossing(d, sdLineEdge(p, v[i], v[(i + 1) % n]))
    return d


# ===========================================================================
# Circular arcs
# ===========================================================================

def circleFromTangent(
    a: _F, b: _F, t: _F, eps: float = CHORD_EPS
) -> Optional[Tuple[_F, float, float]]:
    """Circle through *a* and *b* whose tangent at *a* is *t*.

    Returns ``(center, radius2, lam)`` where ``center = a + lam * perp(t)``,
    or ``None`` when *t* is parallel to the chord (the "circle" is a line).
    The result does not depend on the orientation of *t*.
    """
    n  = perp(t)
    d  = b - a
    nd = float(dot(n, d))
    if abs(nd) < eps:
        return None
    lam = 0.5 * float(dot2(d)) / nd
    return a + lam * n, lam * lam * float(dot2(n)), lam


def sdCircleArc(
    p: _F,
    a: _F,
    b: _F,
    t: _F,
    include_end: bool = False,
    radius2_limit: float = ARC_DEGENERATE_RADIUS2,
) -> _F:
    """Signed distance to the circular arc from *a* to *b* with tangent *t* at *a*.

    Crossings follow the :func:`sdLineEdge` rule: the column through *a*
    counts, the column through *b* only with *include_end*.  Arcs flatter
    than *radius2_limit* (and straight ones) are evaluated with
    :func:`sdLineEdge`, which they converge to.
    """
    circ = circleFromTangent(a, b, t)
    if circ is None or circ[1] > radius2_limit:
        return sdLineEdge(p, a, b, include_end=include_end)
    c, r2, lam = circ
    r  = np.sqrt(r2)
    # n points at the middle of the gap; cos_open is cos(opening) * |n| * r
    n  = lam * perp(b - a)
    A  = a - c;  B = b - c
    cos_open = float(dot(n, A))
    X  = p - c
    xx = X[..., 0];  xy = X[..., 1]

    # Vertical line through X meets the circle at y = ±h.  On the columns
    # through a and b the candidate at the endpoint is decided by the column
    # rule, not by the angular test; at most one candidate per endpoint.
    at_a = xx == A[0]
    at_b = xx == B[0]
    h2  = r2 - xx * xx
    hit = (h2 >= 0.0) | at_a | at_b
    h   = np.sqrt(np.maximum(h2, 0.0))
    tol = 1.0e-6 * r
    took_a = np.zeros_like(at_a)
    took_b = np.zeros_like(at_b)
    s   = np.ones_like(xx, dtype=float)
    for yc in (h, -h):
        is_a = at_a & ~took_a & (np.abs(yc - A[1]) <= tol)
        is_b = at_b & ~took_b & (np.abs(yc - B[1]) <= tol)
        took_a = took_a | is_a
        took_b = took_b | is_b
        on_arc = (dot(n, vec2(xx, yc)) < cos_open) & ~is_b
        on_arc = on_arc | is_a | (is_b & include_end)
        s = np.where(hit & (yc < xy) & on_arc, -s, s)

    xl     = length(X)
    in_arc = dot(n, X) * r < cos_open * xl
    radial = np.abs(xl - r)
    ends   = np.sqrt(np.minimum(dot2(p - a), dot2(p - b)))
    return s * np.where(in_arc, radial, ends)
