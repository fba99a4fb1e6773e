"""Factory functions for creating IndexTable instances.

Provides convenience constructors for common index configurations:

- :func:`static_space_indices`: Constant Kp/Ap values (useful for testing
  or when a fixed activity level is assumed).
- :func:`load_wdc_from_files`: Load from explicit ``(path, year)`` pairs.
- :func:`load_wdc_from_directory`: Load a range of yearly ``kpYYYY.wdc``
  files from a local data directory.

Fetching and refreshing the files is left to the caller; these functions
only read what is on disk.
"""

from __future__ import annotations

import datetime
import logging
import math
from collections.abc import Iterable
from pathlib import Path

import jax.numpy as jnp

from spaceindices.config import get_dtype
from spaceindices.utils.caching import get_wdc_data_dir, is_file_stale
from spaceindices.wdc._lookup import build_index_table
from spaceindices.wdc._parsers import parse_wdc_files
from spaceindices.wdc._types import IndexTable

logger = logging.getLogger(__name__)

_CURRENT_YEAR_MAX_AGE_DAYS: float = 1.0
"""The current year's file is expected to be refreshed daily."""


def wdc_filename(year: int) -> str:
    """Return the archive filename for *year* (e.g. ``kp2020.wdc``).

    Args:
        year: Calendar year.

    Returns:
        Filename of the yearly WDC file.
    """
    return f"kp{year}.wdc"


def static_space_indices(
    kp: float = 1.0,
    ap: int = 4,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> IndexTable:
    """Create an IndexTable with constant values.

    The resulting table contains two days (at mjd_min and mjd_max) with
    identical values, so lookups return the constant everywhere.

    Args:
        kp: Constant Kp index. Default: 1.0.
        ap: Constant Ap index. Default: 4.
        mjd_min: First MJD of the table. Default: 0.0.
        mjd_max: Last MJD of the table. Default: 99999.0.

    Returns:
        IndexTable with constant values.

    Examples:
        ```python
        from spaceindices.wdc import static_space_indices, get_kp_bucket
        table = static_space_indices(kp=3.0)
        val = get_kp_bucket(table, 59569.0)  # returns 3.0
        ```
    """
    dtype = get_dtype()
    return IndexTable(
        mjd=jnp.array([mjd_min, mjd_max], dtype=dtype),
        day=jnp.array([math.floor(mjd_min), math.floor(mjd_max)], dtype=jnp.int32),
        kp=jnp.full((2, 8), kp, dtype=dtype),
        ap=jnp.full((2, 8), ap, dtype=jnp.int32),
        ap_daily=jnp.array([ap, ap], dtype=dtype),
        mjd_min=jnp.array(mjd_min, dtype=dtype),
        mjd_max=jnp.array(mjd_max, dtype=dtype),
    )


def load_wdc_from_files(files: Iterable[tuple[str | Path, int]]) -> IndexTable:
    """Load Kp/Ap indices from WDC files.

    Args:
        files: ``(path, year)`` pairs, one per yearly file, in any order.

    Returns:
        IndexTable ready for lookups.

    Raises:
        FileNotFoundError: If a file does not exist.
        ParseError: If a file is malformed.
        BuildError: If the files overlap (the same day appears twice) or
            no files were given.

    Examples:
        ```python
        from spaceindices.wdc import load_wdc_from_files, get_kp_bucket
        table = load_wdc_from_files([("kp2020.wdc", 2020)])
        val = get_kp_bucket(table, 58849.3)
        ```
    """
    files = [(Path(filepath), year) for filepath, year in files]
    for filepath, _ in files:
        if not filepath.exists():
            raise FileNotFoundError(f"WDC file not found: {filepath}")

    logger.info("Loading %d WDC file(s)", len(files))
    return build_index_table(parse_wdc_files(files))


def load_wdc_from_directory(
    directory: str | Path | None = None,
    *,
    oldest_year: int,
    newest_year: int | None = None,
) -> IndexTable:
    """Load every yearly WDC file from *oldest_year* to *newest_year*.

    Files must be named as by :func:`wdc_filename`. A warning is logged when
    the current year's file has not been refreshed in the last day; it is
    loaded regardless.

    Args:
        directory: Directory holding the files. When ``None`` (the default),
            uses ``<data_dir>/wdc``.
        oldest_year: First year to load. Clamped to *newest_year* when later.
        newest_year: Last year to load. Defaults to the current UTC year.

    Returns:
        IndexTable covering the requested years.

    Raises:
        FileNotFoundError: If the file for any year is missing.
        ParseError: If a file is malformed.
    """
    if directory is None:
        directory = get_wdc_data_dir()
    else:
        directory = Path(directory)

    current_year = datetime.datetime.now(datetime.timezone.utc).year
    if newest_year is None:
        newest_year = current_year
    oldest_year = min(oldest_year, newest_year)

    files = [(directory / wdc_filename(y), y) for y in range(oldest_year, newest_year + 1)]

    current_file = directory / wdc_filename(current_year)
    if oldest_year <= current_year <= newest_year and current_file.exists():
        if is_file_stale(current_file, _CURRENT_YEAR_MAX_AGE_DAYS * 86400.0):
            logger.warning(
                "WDC file for the current year %s is older than %.0f day(s); "
                "recent Kp/Ap values may be missing.",
                current_file,
                _CURRENT_YEAR_MAX_AGE_DAYS,
            )

    return load_wdc_from_files(files)
