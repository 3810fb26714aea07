"""Shared vector helpers used by every ecurves module.

This module provides:

* **Type alias**: :data:`_F`
* **Vector constructors**: :func:`vec2`
* **Math helpers**: :func:`length`, :func:`dot`, :func:`dot2`, :func:`cross`,
  :func:`perp`, :func:`normalize`, :func:`clamp`, :func:`safe_div`,
  :func:`smoothstep`

Not meant to be imported directly by end users — import from
``ecurves.primitives`` instead.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------
_F = npt.NDArray[np.floating]

__all__ = [
    "_F",
    "vec2",
    "length", "dot", "dot2", "cross", "perp", "normalize",
    "clamp", "safe_div", "smoothstep",
]


# ===========================================================================
# Vector constructors
# ===========================================================================

def vec2(x: _F, y: _F) -> _F:
    """Stack *x* and *y* into a ``(..., 2)`` array."""
    x, y = np.broadcast_arrays(x, y)
    return np.stack([x, y], axis=-1)


# ===========================================================================
# Math helpers
# ===========================================================================

def length(v: _F) -> _F:
    """Euclidean length along the last axis."""
    return np.linalg.norm(v, axis=-1)


def dot(a: _F, b: _F) -> _F:
    """Dot product along the last axis."""
    return np.sum(a * b, axis=-1)


def dot2(a: _F) -> _F:
    """Squared length: ``dot(a, a)``."""
    return dot(a, a)


def cross(a: _F, b: _F) -> _F:
    """2-D cross product ``a.x * b.y - a.y * b.x``."""
    return a[..., 0] * b[..., 1] - a[..., 1] * b[..., 0]


def perp(v: _F) -> _F:
    """Rotate *v* by -90°: ``(x, y) -> (y, -x)``."""
    return vec2(v[..., 1], -v[..., 0])


def normalize(v: _F, eps: float = 1e-12) -> _F:
    """Unit vector along *v*; vectors shorter than *eps* come back as zero."""
    n = length(v)[..., None]
    return np.where(n < eps, 0.0, v / np.where(n < eps, 1.0, n))


def clamp(x: _F, lo: float | _F, hi: float | _F) -> _F:
    """Clamp *x* element-wise to ``[lo, hi]``."""
    return np.minimum(np.maximum(x, lo), hi)


def safe_div(n: _F, d: _F, eps: float = 1e-12) -> _F:
    """Division that avoids exact zero in the denominator."""
    return n / np.where(np.abs(d) < eps, np.sign(d) * eps + eps, d)


def smoothstep(edge0: float | _F, edge1: float | _F, x: _F) -> _F:
    """Hermite step from 0 at *edge0* to 1 at *edge1* (GLSL ``smoothstep``)."""
    t = clamp(safe_div(np.asarray(x, dtype=float) - edge0, np.asarray(edge1 - edge0, dtype=float)), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)
