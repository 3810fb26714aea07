"""Logging setup shared by the scripts.

Handlers are attached to the root logger under fixed names, so calling
:func:`setup_logging` again is a no-op.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

LOG_FILENAME = "ecurves.log"

_CONSOLE_HANDLER = "ecurves.console"
_FILE_HANDLER    = "ecurves.file"
_FORMATTER = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _named(handler: logging.Handler, name: str, level: int) -> logging.Handler:
    handler.set_name(name)
    handler.setLevel(level)
    handler.setFormatter(_FORMATTER)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_dir: Union[str, os.PathLike, None] = None,
) -> None:
    """Send records to the console and, with *log_dir*, to ``ecurves.log`` there.

    A log file that cannot be opened is reported and skipped.
    """
    root = logging.getLogger()
    if any(h.get_name() == _CONSOLE_HANDLER for h in root.handlers):
        return

    root.setLevel(level)
    root.addHandler(_named(logging.StreamHandler(), _CONSOLE_HANDLER, level))
    if log_dir is None:
        return

    try:
        d = Path(log_dir)
        d.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(d / LOG_FILENAME, encoding="utf-8")
    except OSError as e:
        log.warning("Could not open log file in %s: %s", log_dir, e)
        return
    root.addHandler(_named(fh, _FILE_HANDLER, level))
