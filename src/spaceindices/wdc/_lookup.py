"""Index table construction and JIT-compatible Kp/Ap lookups.

The query functions use only JAX primitives (``jnp.searchsorted``, array
indexing, ``jnp.where``) and are compatible with ``jax.jit`` and
``jax.vmap``. :func:`get_ap_window_mean` takes its window as Python ints,
which must be static under ``jax.jit``.

Day selection is nearest-neighbour on the noon timestamps with flat
extrapolation: queries before the first or after the last day return that
boundary day, and a query exactly halfway between two days resolves to the
earlier one.

Query MJDs are split into a whole day (``int32``) and a fraction of a day
before anything is cast to the table's float dtype. A ``float32`` MJD near
60000 only resolves about 5.6 minutes; the fraction alone resolves a few
milliseconds. Python floats and NumPy arrays are split in ``float64``. JAX
arrays, including traced values under ``jax.jit``, are split in their own
dtype, so pass MJDs as Python floats or NumPy arrays when x64 is disabled.
"""

from __future__ import annotations

import logging
import math
import operator
from collections.abc import Sequence

import jax.numpy as jnp
import numpy as np
from jax import Array
from jax.typing import ArrayLike

from spaceindices.config import get_dtype
from spaceindices.constants import HOURS_PER_DAY, INTERVAL_HOURS, INTERVALS_PER_DAY
from spaceindices.wdc._errors import BuildError, RangeError
from spaceindices.wdc._types import DailyRecord, IndexTable

logger = logging.getLogger(__name__)

_MS_PER_DAY = 86400000.0
_MS_PER_HOUR = 3600000.0


def build_index_table(records: Sequence[DailyRecord]) -> IndexTable:
    """Build an immutable index table from parsed daily records.

    Records may arrive in any order; they are sorted by MJD.

    Args:
        records: Parsed daily records.

    Returns:
        IndexTable ready for lookups.

    Raises:
        BuildError: If *records* is empty, a record does not hold exactly
            8 Kp and 8 Ap values, or two records fall on the same day.
    """
    if not records:
        raise BuildError("Cannot build an index table from zero records")

    for record in records:
        if len(record.kp) != INTERVALS_PER_DAY or len(record.ap) != INTERVALS_PER_DAY:
            raise BuildError(
                f"Record at MJD {record.mjd} has {len(record.kp)} Kp and "
                f"{len(record.ap)} Ap values, expected {INTERVALS_PER_DAY} of each"
            )

    ordered = sorted(records, key=lambda r: r.mjd)
    days = [math.floor(r.mjd) for r in ordered]
    for prev, curr, day in zip(ordered, ordered[1:], days[1:]):
        if day == math.floor(prev.mjd):
            raise BuildError(f"Duplicate record for MJD day {day} ({prev.mjd} and {curr.mjd})")

    dtype = get_dtype()
    mjds = [r.mjd for r in ordered]
    ap = jnp.array([r.ap for r in ordered], dtype=jnp.int32)

    table = IndexTable(
        mjd=jnp.array(mjds, dtype=dtype),
        day=jnp.array(days, dtype=jnp.int32),
        kp=jnp.array([r.kp for r in ordered], dtype=dtype),
        ap=ap,
        ap_daily=jnp.mean(ap.astype(dtype), axis=1),
        mjd_min=jnp.array(mjds[0], dtype=dtype),
        mjd_max=jnp.array(mjds[-1], dtype=dtype),
    )
    logger.info("Built index table with %d days (MJD %.1f to %.1f)", len(mjds), mjds[0], mjds[-1])
    return table


def _split_mjd(table: IndexTable, mjd: ArrayLike) -> tuple[Array, Array]:
    """Split an MJD into its whole day and the fraction of that day.

    Args:
        table: Index table; its float dtype is used for the fraction.
        mjd: MJD to query, scalar or array.

    Returns:
        Tuple of ``(day, fraction)``: ``int32`` days and fractions in
        ``[0, 1]`` in the table's float dtype.
    """
    dtype = table.mjd.dtype
    if isinstance(mjd, Array):
        day = jnp.floor(mjd)
        return day.astype(jnp.int32), (mjd - day).astype(dtype)

    mjd = np.asarray(mjd, dtype=np.float64)
    day = np.floor(mjd)
    return jnp.asarray(day, dtype=jnp.int32), jnp.asarray(mjd - day, dtype=dtype)


def _shift(day: Array, fraction: Array, days_back: Array) -> tuple[Array, Array]:
    """Move ``(day, fraction)`` back by *days_back*, keeping the fraction in ``[0, 1)``."""
    shifted = fraction - days_back
    carry = jnp.floor(shifted)
    return day + carry.astype(jnp.int32), shifted - carry


def _day_index(table: IndexTable, day: Array, fraction: Array) -> Array:
    """Find the index of the day nearest to ``day + fraction``.

    Clamps both neighbours of the insertion point to the valid range, so
    out-of-range queries return the boundary day. Ties go to the earlier day.

    The only exact tie between two noon records is midnight. A query at
    exactly 00:00 on day D therefore selects day D-1, and because the
    interval index of 00:00 is 0, bucket lookups return day D-1's
    00:00-03:00 value rather than day D's.

    Args:
        table: Index table.
        day: Whole-day part of the query, ``int32``, scalar or array.
        fraction: Fractional part of the query, scalar or array.

    Returns:
        Index into ``table.mjd``.
    """
    last = table.day.shape[0] - 1
    upper = jnp.searchsorted(table.day, day, side="right")

    # A record on the query's own day but later in that day sorts after it.
    prev = jnp.clip(upper - 1, 0, last)
    prev_fraction = table.mjd[prev] - table.day[prev]
    upper = jnp.where((table.day[prev] == day) & (prev_fraction > fraction), upper - 1, upper)

    lo = jnp.clip(upper - 1, 0, last)
    hi = jnp.clip(upper, 0, last)
    dtype = table.mjd.dtype
    d_lo = jnp.abs((day - table.day[lo]).astype(dtype) + fraction - (table.mjd[lo] - table.day[lo]))
    d_hi = jnp.abs((table.day[hi] - day).astype(dtype) + (table.mjd[hi] - table.day[hi]) - fraction)
    return jnp.where(d_hi < d_lo, hi, lo)


def _interval_index(fraction: Array) -> Array:
    """Get the 3-hour interval index (0-7) from the fraction of a day.

    The time of day is rounded to whole milliseconds first so that interval
    boundaries reached by arithmetic (e.g. ``mjd - 3 / 24``) are not lost to
    float rounding.

    Args:
        fraction: Fraction of the day, scalar or array.

    Returns:
        Integer interval index (0-7).
    """
    hours = jnp.round(fraction * _MS_PER_DAY) / _MS_PER_HOUR
    index = jnp.floor(hours / INTERVAL_HOURS).astype(jnp.int32)
    return jnp.clip(index, 0, INTERVALS_PER_DAY - 1)


def get_kp_bucket(table: IndexTable, mjd: ArrayLike) -> Array:
    """Query the 3-hourly Kp index at the given MJD.

    Args:
        table: Index table.
        mjd: Modified Julian Date to query.

    Returns:
        Kp index (0.0-9.0) for the 3-hour interval containing the MJD.
    """
    day, fraction = _split_mjd(table, mjd)
    return table.kp[_day_index(table, day, fraction), _interval_index(fraction)]


def get_ap_bucket(table: IndexTable, mjd: ArrayLike) -> Array:
    """Query the 3-hourly Ap index at the given MJD.

    Args:
        table: Index table.
        mjd: Modified Julian Date to query.

    Returns:
        Ap index (``int32``) for the 3-hour interval containing the MJD.
    """
    day, fraction = _split_mjd(table, mjd)
    return table.ap[_day_index(table, day, fraction), _interval_index(fraction)]


def get_ap_daily_mean(table: IndexTable, mjd: ArrayLike) -> Array:
    """Query the mean of the 8 Ap values of the day nearest the given MJD.

    Args:
        table: Index table.
        mjd: Modified Julian Date to query.

    Returns:
        Daily mean Ap index.
    """
    day, fraction = _split_mjd(table, mjd)
    return table.ap_daily[_day_index(table, day, fraction)]


def window_hours(hours_start: int, hours_end: int) -> list[int]:
    """List the sample offsets of an Ap averaging window.

    Offsets start at *hours_start* and advance in 3-hour steps while they do
    not exceed *hours_end*. A span that is not a multiple of 3 therefore
    ends at the last full step, e.g. ``(0, 7)`` gives ``[0, 3, 6]``.

    Args:
        hours_start: First offset into the past, in hours.
        hours_end: Last admissible offset into the past, in hours.

    Returns:
        Offsets in hours, never empty.

    Raises:
        RangeError: If either bound is not an integer, or
            ``hours_start > hours_end``.
    """
    try:
        start = operator.index(hours_start)
        end = operator.index(hours_end)
    except TypeError:
        raise RangeError(
            f"Window bounds must be integers, got ({hours_start!r}, {hours_end!r})"
        ) from None

    if start > end:
        raise RangeError(f"start must not exceed end (got start={start}, end={end})")

    return list(range(start, end + 1, INTERVAL_HOURS))


def get_ap_window_mean(
    table: IndexTable,
    mjd: ArrayLike,
    hours_start: int,
    hours_end: int,
) -> Array:
    """Average 3-hourly Ap values over preceding hours.

    Evaluates :func:`get_ap_bucket` at ``mjd - h / 24`` for every offset
    ``h`` from :func:`window_hours` and returns the arithmetic mean. For
    example ``(0, 21)`` averages the 8 intervals ending with the one that
    contains *mjd*. An array of queries gives one mean per query.

    Args:
        table: Index table.
        mjd: Modified Julian Date to query, scalar or array.
        hours_start: First offset into the past, in hours.
        hours_end: Last admissible offset into the past, in hours.

    Returns:
        Mean Ap over the sampled intervals, with the shape of *mjd*.

    Raises:
        RangeError: If the window bounds are invalid.
    """
    hours = window_hours(hours_start, hours_end)

    dtype = table.mjd.dtype
    day, fraction = _split_mjd(table, mjd)
    offsets = jnp.asarray(hours, dtype=dtype) / HOURS_PER_DAY
    day, fraction = _shift(day[..., None], fraction[..., None], offsets)
    samples = table.ap[_day_index(table, day, fraction), _interval_index(fraction)]
    return jnp.mean(samples.astype(dtype), axis=-1)
