"""Biarc through two anchors and two tangent handles.

Demonstrates: Biarc2D.from_points, sample_geometry, stroke_intensity
Output:       examples/biarc_example.png

Identities verified:
    |joint - p0| == |joint - p1|            (joint on the perpendicular bisector)
    |joint - locus centre|^2 == locus r^2    (joint on the locus circle)
    sdf(p0) == sdf(p1) == sdf(joint) == 0
"""
import os, sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from ecurves import Biarc, Biarc2D, sample_geometry, stroke_intensity

_W, _H = 600, 400
_OUT   = os.path.join(os.path.dirname(__file__), "biarc_example.png")


def _render_png(img, joint, out_path, title=""):
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        print("  matplotlib not available, skipping PNG")
        return

    fig, ax = plt.subplots(figsize=(6, 4), facecolor="#111")
    ax.imshow(img, cmap="gray", origin="upper", vmin=0.0, vmax=1.0)
    ax.plot(*joint, "o", color="#39f", ms=5)
    ax.set_axis_off()
    ax.set_title(title, color="white", fontsize=10)
    plt.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="#111")
    plt.close()
    print(f"  Saved: {out_path}")


def main():
    print("=" * 60)
    print("BIARC: S-curve between two anchors")
    print("  p0 (120, 300)  handle (180, 120)")
    print("  p1 (480, 100)  handle (420, 300)")
    print("=" * 60)

    p0, aux0 = (120.0, 300.0), (180.0, 120.0)
    p1, aux1 = (480.0, 100.0), (420.0, 300.0)
    curve = Biarc2D.from_points(p0, aux0, p1, aux1)
    sol   = curve.solution

    if not isinstance(sol, Biarc):
        print("\nTangents are parallel: straight fallback")
        return

    j   = curve.joint
    d0  = np.linalg.norm(j - np.array(p0))
    d1  = np.linalg.norm(j - np.array(p1))
    on_locus = abs(float(np.sum((j - sol.locus_center) ** 2)) - sol.locus_radius2)

    print(f"\nJoint          : ({j[0]:.3f}, {j[1]:.3f})")
    print(f"Arc radii      : {sol.arcs[0].radius:.3f}, {sol.arcs[1].radius:.3f}")
    print(f"|J-p0| - |J-p1| = {d0 - d1:.2e}  (should be ~0)")
    print(f"locus residual  = {on_locus:.2e}  (should be ~0)")

    # --- spot checks ---
    pts  = np.array([p0, p1, j])
    vals = np.abs(curve.sdf(pts))
    print(f"\n|sdf| at p0, p1, joint: {vals[0]:.2e} {vals[1]:.2e} {vals[2]:.2e}")

    ok = abs(d0 - d1) < 1e-6 and on_locus < 1e-6 * sol.locus_radius2 and vals.max() < 1e-6
    print("\n" + ("PASSED PASSED" if ok else "FAILED FAILED"))

    d = sample_geometry(curve, _W, _H)
    _render_png(stroke_intensity(d), j, _OUT, "Biarc: two tangent-continuous arcs")


if __name__ == "__main__":
    main()
