"""Policy values for picking and frame rendering.

Defaults live on :class:`Settings`.  A JSON file named
``ecurves_settings.json`` (searched upwards from the working directory, or
passed explicitly) may override any of them::

    {"nearest_threshold": 30.0, "cell_size": 8.0}

Unknown keys and unreadable files are reported through :mod:`logging` and
otherwise ignored.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

log = logging.getLogger(__name__)

SETTINGS_FILENAME = "ecurves_settings.json"


@dataclass(frozen=True)
class Settings:
    # picking
    nearest_threshold: float = 50.0
    # curve stroke: 1 - smoothstep(stroke_inner, stroke_outer, |d|)
    stroke_inner: float = 2.0
    stroke_outer: float = 4.0
    # markers
    joint_radius: float = 4.0
    point_radius: float = 5.0
    highlight_radius: float = 8.0
    # coverage cell side, in pixels
    cell_size: float = 10.0
    # frame
    width: int = 1200
    height: int = 675


def find_settings_path(start: Optional[Path] = None) -> Optional[Path]:
    """Look for :data:`SETTINGS_FILENAME` in *start* (or the CWD) and its parents."""
    start = (start or Path.cwd()).resolve()
    for p in (start, *start.parents):
        candidate = p / SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def _coerce(data: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name: f.type for f in fields(Settings)}
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            log.warning("Ignoring unknown setting %r", key)
            continue
        cast = int if known[key] in (int, "int") else float
        try:
            out[key] = cast(value)
        except (TypeError, ValueError):
            log.warning("Ignoring setting %r: cannot convert %r", key, value)
    return out


def load_settings(path: Union[str, os.PathLike, None] = None) -> Settings:
    """Return :class:`Settings`, overridden by the JSON file at *path* if any.

    Never raises for a missing or malformed file; defaults are used instead.
    """
    p = Path(path) if path is not None else find_settings_path()
    if p is None:
        return Settings()
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Could not read settings from %s: %s", p, e)
        return Settings()
    if not isinstance(data, dict):
        log.warning("Settings file %s does not hold a JSON object", p)
        return Settings()
    settings = replace(Settings(), **_coerce(data))
    log.debug("Loaded settings from %s", p)
    return settings
