"""User-placed points: storage, nearest-point picking and place/move editing.

The first four points of a :class:`PointStore` form the biarc control set
``p0, aux0, p1, aux1``; the tangent at each anchor is ``aux - anchor``.
"""

from __future__ import annotations

import enum
import logging
from typing import Iterator, List, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .biarc import ControlSet
from .config import Settings

log = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


def find_nearest_point(
    position: Sequence[float],
    points: Sequence[Sequence[float]],
    threshold: float = 50.0,
) -> Optional[int]:
    """Index of the point nearest to *position* closer than *threshold*.

    Linear scan; on equal distances the lower index wins.  Returns ``None``
    when *points* is empty or nothing is close enough.
    """
    x = np.asarray(position, dtype=float)
    best = threshold
    nearest = None
    for i, point in enumerate(points):
        dist = float(np.linalg.norm(x - np.asarray(point, dtype=float)))
        if dist < best:
            best = dist
            nearest = i
    return nearest


class PointStore:
    """Ordered, append-only list of 2-D points that can be moved by index."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._points: List[_Array] = []
        self.settings = settings or Settings()

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> _Array:
        return self._points[index].copy()

    def __iter__(self) -> Iterator[_Array]:
        return (p.copy() for p in self._points)

    def append(self, point: Sequence[float]) -> int:
        """Add *point* at the end and return its index."""
        p = np.asarray(point, dtype=float).reshape(2)
        self._points.append(p)
        log.debug("adding point at %f %f", p[0], p[1])
        return len(self._points) - 1

    def update(self, index: int, point: Sequence[float]) -> None:
        """Move the point at *index* to *point*; raises :class:`IndexError`."""
        if not -len(self._points) <= index < len(self._points):
            raise IndexError(f"point index {index} out of range")
        p = np.asarray(point, dtype=float).reshape(2)
        self._points[index] = p
        log.debug("moved point %d to %f %f", index, p[0], p[1])

    def snapshot(self) -> _Array:
        """Copy of all points as an ``(N, 2)`` array."""
        if not self._points:
            return np.zeros((0, 2))
        return np.stack(self._points)

    def control_set(self) -> Optional[ControlSet]:
        """Biarc control set from the first four points, if there are four."""
        if len(self._points) < 4:
            return None
        p0, aux0, p1, aux1 = self._points[:4]
        return ControlSet.from_points(p0, aux0, p1, aux1)

    def nearest(
        self, position: Sequence[float], threshold: Optional[float] = None
    ) -> Optional[int]:
        if threshold is None:
            threshold = self.settings.nearest_threshold
        return find_nearest_point(position, self._points, threshold)


# ===========================================================================
# Editing
# ===========================================================================

class EditMode(enum.Enum):
    PLACE = "place"
    MOVE = "move"


class PointEditor:
    """Input handling on top of a :class:`PointStore`.

    In ``PLACE`` mode a press appends a point.  In ``MOVE`` mode a press grabs
    the point nearest the cursor and subsequent drags move it until release.
    :attr:`highlighted` is the hovered point index, ``-1`` when none.
    """

    def __init__(
        self,
        store: PointStore,
        mode: EditMode = EditMode.PLACE,
        threshold: Optional[float] = None,
    ) -> None:
        self.store = store
        self.mode = mode
        self.threshold = threshold
        self.highlighted = -1
        self.grabbed = -1

    def _nearest(self, position: Sequence[float]) -> int:
        index = self.store.nearest(position, self.threshold)
        return -1 if index is None else index

    def hover(self, position: Sequence[float]) -> int:
        if self.mode is EditMode.MOVE:
            self.highlighted = self._nearest(position)
        else:
            self.highlighted = -1
        return self.highlighted

    def press(self, position: Sequence[float]) -> int:
        """Handle a button press; returns the affected index or ``-1``."""
        if self.mode is EditMode.PLACE:
            return self.store.append(position)
        self.grabbed = self.hover(position)
        return self.grabbed

    def drag(self, position: Sequence[float]) -> None:
        if self.mode is EditMode.MOVE and self.grabbed != -1:
            self.store.update(self.grabbed, position)
            self.highlighted = self.grabbed

    def release(self) -> None:
        self.grabbed = -1
