"""
Persistent configuration for scatters: the last directory a collage was
built from, stored as plain text under the user's config directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_config_path

logger = logging.getLogger(__name__)

APP_NAME = "scatters"
LAST_PATH_FILE = "last_path.txt"


def config_dir(create: bool = True) -> Path:
    """Per-user config directory for scatters ($XDG_CONFIG_HOME/scatters on Linux)."""
    path = user_config_path(APP_NAME, appauthor=False)
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def save_last_path(path: Path) -> Path:
    """
    Remember `path` for the next run.

    Returns:
        The file the path was written to

    Raises:
        OSError: If the config directory or file cannot be written
    """
    target = config_dir() / LAST_PATH_FILE
    target.write_text(str(path.resolve()), encoding="utf-8")
    logger.info("Saved last path %s to %s", path, target)
    return target


def load_last_path() -> Path:
    """
    Read the directory saved by save_last_path().

    Raises:
        ValueError: If nothing was saved or the saved directory no longer exists
    """
    target = config_dir(create=False) / LAST_PATH_FILE
    if not target.exists():
        raise ValueError("No previous path saved. Please provide a directory path.")

    path = Path(target.read_text(encoding="utf-8").strip())
    if not path.exists():
        raise ValueError(f"Previously saved path '{path}' no longer exists")
    return path
