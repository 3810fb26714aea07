"""Render one frame of placed points and their curve to a PNG.

Usage::

    python scripts/render_frame.py                          # default biarc, frame.png
    python scripts/render_frame.py --points 300,400 300,200 900,400 900,200
    python scripts/render_frame.py --mode coverage --out fill.png \\
        --points 100,500 400,300 700,450 1100,250

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Tuple

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ecurves import EditMode, PointEditor, PointStore, load_settings, render_frame
from ecurves.log import setup_logging
from ecurves.render import MODES

log = logging.getLogger("render_frame")

_DEFAULT_POINTS = ["300,450", "300,200", "900,450", "900,200"]


def _parse_point(text: str) -> Tuple[float, float]:
    try:
        x, y = (float(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {text!r}")
    return x, y


def save_png(img, out_path: str) -> None:
    h, w = img.shape[:2]
    fig = plt.figure(figsize=(w / 100.0, h / 100.0), dpi=100)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_axis_off()
    ax.imshow(img, origin="upper", interpolation="nearest")
    fig.savefig(out_path, dpi=100)
    plt.close(fig)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Render placed points and their curve to a PNG.")
    parser.add_argument("--points", nargs="+", type=_parse_point,
                        default=[_parse_point(p) for p in _DEFAULT_POINTS],
                        help="Points as x,y in pixels (p0 aux0 p1 aux1 for a biarc)")
    parser.add_argument("--mode", choices=MODES, default="biarc", help="What to draw")
    parser.add_argument("--hover", type=_parse_point, default=None,
                        help="Cursor position; highlights the nearest point")
    parser.add_argument("--settings", default=None, help="JSON settings file")
    parser.add_argument("--out", default="frame.png", help="Output PNG path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    settings = load_settings(args.settings)

    store = PointStore(settings)
    editor = PointEditor(store)
    for point in args.points:
        editor.press(point)

    highlighted = -1
    if args.hover is not None:
        editor.mode = EditMode.MOVE
        highlighted = editor.hover(args.hover)

    img = render_frame(store, highlighted=highlighted, mode=args.mode, settings=settings)
    save_png(img, args.out)
    log.info("Saved: %s", args.out)


if __name__ == "__main__":
    main()
