"""Tests for ecurves/primitives.py — distance primitives and vector helpers.

Tests verify:
- Zero distance on the curve, exact distances at analytically known points
- Sign flips of the even-odd rule, including the half-open edge convention
- Degenerate arcs fall back to (and converge to) the straight edge
"""

import numpy as np
import numpy.testing as npt
import pytest

from ecurves import primitives as sdf


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _p2(*xy) -> np.ndarray:
    """Single 2-D point as shape ``(1, 2)``."""
    return np.array([list(xy)], dtype=float)


def _v(*xy) -> np.ndarray:
    return np.array(xy, dtype=float)


def _grid2(n: int = 9, lo: float = -2.0, hi: float = 12.0) -> np.ndarray:
    lin = np.linspace(lo, hi, n)
    Y, X = np.meshgrid(lin, lin, indexing="ij")
    return np.stack([X, Y], axis=-1)


def _flat_tangent(k: float) -> np.ndarray:
    return sdf.normalize(_v(1.0, -k))


# ===========================================================================
# Shared helpers
# ===========================================================================

class TestVecHelpers:
    def test_perp_rotates_clockwise(self):
        npt.assert_allclose(sdf.perp(_v(1.0, 0.0)), [0.0, -1.0])
        npt.assert_allclose(sdf.perp(_v(0.0, 1.0)), [1.0, 0.0])

    def test_cross(self):
        assert sdf.cross(_v(1.0, 0.0), _v(0.0, 1.0)) == pytest.approx(1.0)

    def test_normalize_unit(self):
        npt.assert_allclose(sdf.length(sdf.normalize(_v(3.0, 4.0))), 1.0)

    def test_normalize_zero_is_zero(self):
        npt.assert_array_equal(sdf.normalize(_v(0.0, 0.0)), [0.0, 0.0])

    def test_smoothstep_edges(self):
        npt.assert_allclose(sdf.smoothstep(2.0, 4.0, np.array([1.0, 3.0, 5.0])), [0.0, 0.5, 1.0])

    def test_safe_div_no_nan(self):
        assert np.isfinite(sdf.safe_div(np.array([1.0]), np.array([0.0]))).all()


# ===========================================================================
# Segment
# ===========================================================================

class TestSegment:
    A = _v(0.0, 0.0)
    B = _v(10.0, 0.0)

    def test_zero_on_segment(self):
        p = np.array([[0.0, 0.0], [2.5, 0.0], [10.0, 0.0]])
        npt.assert_allclose(sdf.sdSegment(p, self.A, self.B), 0.0, atol=1e-12)

    def test_increasing_with_offset(self):
        offsets = np.linspace(0.0, 5.0, 11)
        p = np.stack([np.full_like(offsets, 4.0), offsets], axis=-1)
        d = sdf.sdSegment(p, self.A, self.B)
        npt.assert_allclose(d, offsets, atol=1e-12)
        assert (np.diff(d) > 0).all()

    def test_beyond_end_measures_to_endpoint(self):
        npt.assert_allclose(sdf.sdSegment(_p2(13.0, 4.0), self.A, self.B), [5.0])

    def test_zero_length_segment(self):
        npt.assert_allclose(sdf.sdSegment(_p2(3.0, 4.0), self.A, self.A), [5.0])

    def test_broadcast_shape(self):
        assert sdf.sdSegment(_grid2(), self.A, self.B).shape == (9, 9)


# ===========================================================================
# Signed line edge
# ===========================================================================

class TestLineEdge:
    A = _v(0.0, 0.0)
    B = _v(10.0, 0.0)

    def test_magnitude_is_segment_distance(self):
        p = _grid2()
        npt.assert_allclose(np.abs(sdf.sdLineEdge(p, self.A, self.B)), sdf.sdSegment(p, self.A, self.B))

    def test_edge_below_point_flips(self):
        npt.assert_allclose(sdf.sdLineEdge(_p2(5.0, 3.0), self.A, self.B), [-3.0])

    def test_edge_above_point_keeps_sign(self):
        npt.assert_allclose(sdf.sdLineEdge(_p2(5.0, -3.0), self.A, self.B), [3.0])

    def test_outside_span_keeps_sign(self):
        assert sdf.sdLineEdge(_p2(12.0, 3.0), self.A, self.B)[0] > 0

    def test_start_inclusive_end_exclusive(self):
        assert sdf.sdLineEdge(_p2(0.0, 3.0), self.A, self.B)[0] < 0
        assert sdf.sdLineEdge(_p2(10.0, 3.0), self.A, self.B)[0] > 0

    def test_leftward_edge_start_inclusive(self):
        assert sdf.sdLineEdge(_p2(10.0, 3.0), self.B, self.A)[0] < 0
        assert sdf.sdLineEdge(_p2(0.0, 3.0), self.B, self.A)[0] > 0

    def test_include_end_counts_end_column(self):
        npt.assert_allclose(sdf.sdLineEdge(_p2(10.0, 3.0), self.A, self.B, include_end=True), [-3.0])
        npt.assert_allclose(sdf.sdLineEdge(_p2(0.0, 3.0), self.B, self.A, include_end=True), [-3.0])
        npt.assert_allclose(sdf.sdLineEdge(_p2(0.0, 3.0), self.A, self.B, include_end=True), [-3.0])

    def test_sloped_edge(self):
        a, b = _v(0.0, 0.0), _v(10.0, 10.0)
        assert sdf.sdLineEdge(_p2(5.0, 6.0), a, b)[0] < 0
        assert sdf.sdLineEdge(_p2(5.0, 4.0), a, b)[0] > 0

    def test_vertical_edge_never_flips(self):
        a, b = _v(5.0, -10.0), _v(5.0, 10.0)
        assert (sdf.sdLineEdge(_grid2(), a, b) >= 0).all()

    @pytest.mark.parametrize("chain", [
        [(0.0, 0.0), (5.0, 1.0), (10.0, 0.0)],
        [(10.0, 0.0), (5.0, 1.0), (0.0, 0.0)],
    ])
    def test_shared_vertex_flips_once(self, chain):
        v = np.array(chain)
        x = _p2(5.0, 4.0)
        d = sdf.opCrossing(sdf.sdLineEdge(x, v[0], v[1]), sdf.sdLineEdge(x, v[1], v[2]))
        assert d[0] < 0
        npt.assert_allclose(np.abs(d), [3.0])


class TestOpCrossing:
    def test_two_flips_cancel(self):
        npt.assert_allclose(sdf.opCrossing(np.array([-2.0]), np.array([-3.0])), [2.0])

    def test_one_flip_negative(self):
        npt.assert_allclose(sdf.opCrossing(np.array([4.0]), np.array([-3.0])), [-3.0])


class TestPolyline:
    SQUARE = np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]])

    def test_closed_inside_negative(self):
        npt.assert_allclose(sdf.sdPolyline(_p2(5.0, 5.0), self.SQUARE, closed=True), [-5.0])

    def test_closed_outside_positive(self):
        npt.assert_allclose(sdf.sdPolyline(_p2(15.0, 5.0), self.SQUARE, closed=True), [5.0])
        npt.assert_allclose(sdf.sdPolyline(_p2(5.0, 15.0), self.SQUARE, closed=True), [5.0])

    def test_open_polyline_sign_by_side(self):
        v = np.array([[0.0, 0.0], [5.0, 2.0], [10.0, 0.0]])
        assert sdf.sdPolyline(_p2(5.0, 6.0), v)[0] < 0
        assert sdf.sdPolyline(_p2(5.0, -6.0), v)[0] > 0

    def test_single_vertex(self):
        npt.assert_allclose(sdf.sdPolyline(_p2(3.0, 4.0), np.array([[0.0, 0.0]])), [5.0])

    def test_empty_is_infinite(self):
        assert np.isinf(sdf.sdPolyline(_p2(1.0, 1.0), np.zeros((0, 2)))).all()


# ===========================================================================
# Circle from tangent
# ===========================================================================

class TestCircleFromTangent:
    def test_quarter_circle(self):
        center, r2, _ = sdf.circleFromTangent(_v(0.0, 0.0), _v(5.0, 5.0), _v(0.0, 1.0))
        npt.assert_allclose(center, [5.0, 0.0])
        assert r2 == pytest.approx(25.0)

    def test_orientation_independent(self):
        a, b = _v(1.0, 2.0), _v(4.0, 7.0)
        t = sdf.normalize(_v(1.0, 3.0))
        c1, r1, l1 = sdf.circleFromTangent(a, b, t)
        c2, r2, l2 = sdf.circleFromTangent(a, b, -t)
        npt.assert_allclose(c1, c2)
        assert r1 == pytest.approx(r2)
        assert l1 == pytest.approx(-l2)

    def test_parallel_tangent_is_none(self):
        assert sdf.circleFromTangent(_v(0.0, 0.0), _v(10.0, 0.0), _v(1.0, 0.0)) is None


# ===========================================================================
# Signed circular arc
# ===========================================================================

class TestCircleArc:
    # Quarter circle centred at (5, 0), radius 5, from (0, 0) up to (5, 5).
    A = _v(0.0, 0.0)
    B = _v(5.0, 5.0)
    T = _v(0.0, 1.0)

    def _on_circle(self, deg, radius=5.0):
        th = np.deg2rad(deg)
        return _p2(5.0 + radius * np.cos(th), radius * np.sin(th))

    def test_zero_on_arc(self):
        for deg in (100.0, 135.0, 170.0):
            npt.assert_allclose(sdf.sdCircleArc(self._on_circle(deg), self.A, self.B, self.T), [0.0], atol=1e-9)

    def test_query_at_start_is_zero(self):
        npt.assert_allclose(np.abs(sdf.sdCircleArc(_p2(0.0, 0.0), self.A, self.B, self.T)), [0.0], atol=1e-9)

    def test_query_at_end_is_zero(self):
        npt.assert_allclose(np.abs(sdf.sdCircleArc(_p2(5.0, 5.0), self.A, self.B, self.T)), [0.0], atol=1e-9)

    def test_radial_distance_above_arc_is_negative(self):
        npt.assert_allclose(sdf.sdCircleArc(self._on_circle(135.0, 6.0), self.A, self.B, self.T), [-1.0], atol=1e-9)

    def test_radial_distance_inside_circle(self):
        d = sdf.sdCircleArc(self._on_circle(135.0, 4.0), self.A, self.B, self.T)
        npt.assert_allclose(np.abs(d), [1.0], atol=1e-9)

    def test_gap_measures_to_endpoints(self):
        x = self._on_circle(-45.0, 7.0)
        d = sdf.sdCircleArc(x, self.A, self.B, self.T)
        expected = min(np.linalg.norm(x[0] - self.A), np.linalg.norm(x[0] - self.B))
        npt.assert_allclose(np.abs(d), [expected], atol=1e-9)
        assert d[0] > 0

    def test_major_arc_with_reversed_tangent(self):
        # Leaving (0, 0) downward traverses the other 270° of the same circle.
        x = self._on_circle(-90.0)
        npt.assert_allclose(sdf.sdCircleArc(x, self.A, self.B, -self.T), [0.0], atol=1e-9)
        assert abs(sdf.sdCircleArc(x, self.A, self.B, self.T)[0]) > 1.0

    def test_parallel_tangent_is_line_edge(self):
        a, b = _v(0.0, 0.0), _v(10.0, 0.0)
        p = _grid2()
        npt.assert_allclose(sdf.sdCircleArc(p, a, b, _v(1.0, 0.0)), sdf.sdLineEdge(p, a, b))

    def test_beyond_limit_delegates_to_line_edge(self):
        a, b = _v(0.0, 0.0), _v(10.0, 0.0)
        t = _flat_tangent(4.0e-4)
        assert sdf.circleFromTangent(a, b, t)[1] > sdf.ARC_DEGENERATE_RADIUS2
        p = _grid2()
        npt.assert_allclose(sdf.sdCircleArc(p, a, b, t), sdf.sdLineEdge(p, a, b))

    def test_converges_to_line_edge_below_limit(self):
        a, b = _v(0.0, 0.0), _v(10.0, 0.0)
        t = _flat_tangent(5.6e-4)
        r2 = sdf.circleFromTangent(a, b, t)[1]
        assert 0.5 * sdf.ARC_DEGENERATE_RADIUS2 < r2 < sdf.ARC_DEGENERATE_RADIUS2
        p = np.array([[5.0, 3.0], [5.0, -3.0], [2.0, 1.0], [8.0, -2.0], [12.0, 1.0], [-3.0, -4.0],
                      [0.0, 3.0], [0.0, -3.0], [10.0, 3.0], [10.0, -3.0]])
        npt.assert_allclose(sdf.sdCircleArc(p, a, b, t), sdf.sdLineEdge(p, a, b), atol=1e-2)
        npt.assert_allclose(sdf.sdCircleArc(p, a, b, t, include_end=True),
                            sdf.sdLineEdge(p, a, b, include_end=True), atol=1e-2)

    def test_start_column_counts(self):
        d = sdf.sdCircleArc(_p2(0.0, 2.0), self.A, self.B, self.T)
        assert d[0] < 0
        npt.assert_allclose(d, [5.0 - np.sqrt(29.0)], atol=1e-9)

    def test_end_column_needs_include_end(self):
        x = _p2(5.0, 7.0)
        npt.assert_allclose(sdf.sdCircleArc(x, self.A, self.B, self.T), [2.0], atol=1e-9)
        npt.assert_allclose(sdf.sdCircleArc(x, self.A, self.B, self.T, include_end=True), [-2.0], atol=1e-9)

    def test_broadcast_shape(self):
        assert sdf.sdCircleArc(_grid2(), self.A, self.B, self.T).shape == (9, 9)
