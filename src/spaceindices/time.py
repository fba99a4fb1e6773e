from __future__ import annotations

import datetime

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import HOURS_PER_DAY, JD_MJD_OFFSET

# Proleptic Gregorian ordinal of MJD 0 (1858-11-17 00:00).
_MJD_EPOCH_ORDINAL: int = datetime.date(1858, 11, 17).toordinal()


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a calendar date to Modified Julian Date. Algorithm is only valid from year 1583 onward.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date.
        day (ArrayLike): Day of the calendar date.
        hour (ArrayLike): Hour of the calendar date. Default: ``0``
        minute (ArrayLike): Minute of the calendar date. Default: ``0``
        second (ArrayLike): Second of the calendar date. Default: ``0.0``

    Returns:
        Modified Julian Date.

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """

    is_jan_or_feb = month <= 2
    year = jnp.where(is_jan_or_feb, year - 1, year)
    month = jnp.where(is_jan_or_feb, month + 12, month)

    B = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd = 365 * year - 679004 + B + jnp.floor(30.6001 * (month + 1)) + day

    frac_day = (hour + (minute + second / 60.0) / 60.0) / 24.0

    return get_dtype()(jnp.floor(mjd).astype(jnp.int32)) + frac_day


def date_to_mjd(year: int, month: int, day: int, hour: float = 0.0) -> float:
    """Convert a calendar date to a Modified Julian Date as a Python float.

    Plain-Python counterpart of :func:`caldate_to_mjd` for file parsing,
    where one JAX dispatch per line would dominate the load time. Invalid
    dates are rejected instead of being rolled over into the next month.

    Args:
        year: Year of the calendar date.
        month: Month of the calendar date (1-12).
        day: Day of the month.
        hour: Hour of the day. Default: ``0.0``

    Returns:
        Modified Julian Date.

    Raises:
        ValueError: If the date does not exist.
    """
    ordinal = datetime.date(year, month, day).toordinal()
    return float(ordinal - _MJD_EPOCH_ORDINAL) + hour / HOURS_PER_DAY


def datetime_to_mjd(dt: datetime.datetime) -> float:
    """Convert a :class:`~datetime.datetime` to a Modified Julian Date.

    Timezone-aware values are converted to UTC first; naive values are taken
    as UTC.

    Args:
        dt: Date and time to convert.

    Returns:
        Modified Julian Date.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(datetime.timezone.utc)
    hour = dt.hour + (dt.minute + (dt.second + dt.microsecond / 1e6) / 60.0) / 60.0
    return date_to_mjd(dt.year, dt.month, dt.day, hour)


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        Modified Julian Date.
    """

    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        Julian Date.
    """

    return mjd + JD_MJD_OFFSET
