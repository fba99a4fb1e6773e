"""Local data directory management and file utilities.

Provides helpers for locating the spaceindices data directory and checking
file freshness.  These are pure-Python utilities with no JAX dependency.

The data root is determined by the ``SPACEINDICES_DATA`` environment
variable.  If unset, it defaults to ``~/.cache/spaceindices``.
"""

from __future__ import annotations

import os
import time
from pathlib import Path

_ENV_VAR = "SPACEINDICES_DATA"
_DEFAULT_SUBDIR = ".cache/spaceindices"


def get_data_dir(subdirectory: str | None = None) -> Path:
    """Return the spaceindices data directory, creating it if needed.

    The root is ``$SPACEINDICES_DATA`` if set, otherwise
    ``~/.cache/spaceindices``.  An optional *subdirectory* is appended and
    also created.

    Args:
        subdirectory: Optional subdirectory to append (e.g. ``"wdc"``).

    Returns:
        Resolved :class:`~pathlib.Path` to the data directory.
    """
    env = os.environ.get(_ENV_VAR)
    if env is not None:
        root = Path(env)
    else:
        root = Path.home() / _DEFAULT_SUBDIR

    if subdirectory is not None:
        root = root / subdirectory

    root.mkdir(parents=True, exist_ok=True)
    return root


def get_wdc_data_dir() -> Path:
    """Return the WDC file directory (``<data>/wdc``).

    Returns:
        Path to the WDC file directory.
    """
    return get_data_dir("wdc")


def file_age_seconds(filepath: str | Path) -> float:
    """Return the age of *filepath* in seconds since last modification.

    Args:
        filepath: Path to the file.

    Returns:
        Seconds elapsed since the file was last modified.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No such file: '{filepath}'")
    return max(0.0, time.time() - filepath.stat().st_mtime)


def is_file_stale(filepath: str | Path, max_age_seconds: float) -> bool:
    """Check whether *filepath* is missing or older than *max_age_seconds*.

    Args:
        filepath: Path to the file.
        max_age_seconds: Maximum acceptable age in seconds.

    Returns:
        ``True`` if the file is missing or stale.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        return True
    return file_age_seconds(filepath) > max_age_seconds
