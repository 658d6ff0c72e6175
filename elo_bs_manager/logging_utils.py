from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "elo-bs-manager.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


class BuildLogHandler(logging.FileHandler):
    """File handler owned by this tool; marks the root logger as configured."""


def _existing_handler(root: logging.Logger) -> Optional[BuildLogHandler]:
    for h in root.handlers:
        if isinstance(h, BuildLogHandler):
            return h
    return None


def _open_build_log(log_path: str) -> Tuple[BuildLogHandler, str]:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return BuildLogHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return BuildLogHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Send all records to the build log, and to the console unless disabled.

    Only the level changes on repeated calls. Returns the log file in use,
    which is ``elo-bs-manager.log`` in the working directory when
    ``log_path`` cannot be created.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = _existing_handler(root)
    if existing is not None:
        return existing.baseFilename

    file_handler, chosen_path = _open_build_log(log_path)
    file_handler.setFormatter(_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(_FORMAT)
        root.addHandler(console)

    if chosen_path != log_path:
        logging.getLogger(__name__).warning("Cannot write %s, logging to %s instead", log_path, chosen_path)
    else:
        logging.getLogger(__name__).debug("Logging to %s", chosen_path)
    return chosen_path
