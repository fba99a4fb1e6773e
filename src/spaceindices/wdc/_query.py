"""Initialization and the public Kp/Ap query surface.

Loaded indices live in a caller-owned handle rather than module state:
:func:`init_space_indices` returns a :class:`Ready` handle and every query
takes the handle (or a bare :class:`IndexTable`) explicitly. A handle that
was never loaded is an :class:`Uninitialized` value, and querying it raises
:class:`UninitializedError` instead of returning stale or default data.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from jax import Array
from jax.typing import ArrayLike

from spaceindices.wdc._errors import RangeError, UninitializedError
from spaceindices.wdc._lookup import (
    get_ap_bucket,
    get_ap_daily_mean,
    get_ap_window_mean,
    get_kp_bucket,
    window_hours,
)
from spaceindices.wdc._providers import load_wdc_from_files
from spaceindices.wdc._types import (
    ApQueryMode,
    DailyMean,
    IndexTable,
    PointQuery,
    Ready,
    SpaceIndicesState,
    Uninitialized,
    WindowMean,
)


def init_space_indices(files: Iterable[tuple[str | Path, int]]) -> Ready:
    """Parse WDC files and return a handle ready for queries.

    Args:
        files: ``(path, year)`` pairs, one per yearly file.

    Returns:
        Ready handle wrapping the new index table.

    Raises:
        FileNotFoundError: If a file does not exist.
        ParseError: If a file is malformed.
        BuildError: If the records cannot form a table.
    """
    return Ready(load_wdc_from_files(files))


def _resolve_table(indices: SpaceIndicesState | IndexTable) -> IndexTable:
    if isinstance(indices, IndexTable):
        return indices
    if isinstance(indices, Ready):
        return indices.table
    if isinstance(indices, Uninitialized):
        raise UninitializedError(indices.reason)
    raise TypeError(
        f"Expected Ready, Uninitialized or IndexTable, got {type(indices).__name__}"
    )


def ap_query_mode(
    *,
    window_mean: tuple[int, int] | None = None,
    daily_mean: bool = False,
) -> ApQueryMode:
    """Translate keyword options into an Ap query mode.

    Args:
        window_mean: ``(hours_start, hours_end)`` to average preceding hours.
        daily_mean: If ``True``, average the whole day.

    Returns:
        :class:`WindowMean`, :class:`DailyMean`, or :class:`PointQuery` when
        neither option is given.

    Raises:
        RangeError: If both options are given, or *window_mean* is not a
            pair of integers with start not exceeding end.
    """
    if window_mean is not None and daily_mean:
        raise RangeError("window_mean and daily_mean are mutually exclusive")

    if window_mean is not None:
        try:
            hours_start, hours_end = window_mean
        except (TypeError, ValueError):
            raise RangeError(
                f"window_mean must be a (hours_start, hours_end) pair, got {window_mean!r}"
            ) from None
        window_hours(hours_start, hours_end)
        return WindowMean(hours_start, hours_end)

    if daily_mean:
        return DailyMean()
    return PointQuery()


def get_kp(indices: SpaceIndicesState | IndexTable, mjd: ArrayLike) -> Array:
    """Return the 3-hourly Kp index at *mjd*.

    Args:
        indices: Ready handle or index table.
        mjd: Modified Julian Date to query.

    Returns:
        Kp index for the 3-hour interval containing the MJD.

    Raises:
        UninitializedError: If *indices* is an Uninitialized handle.
    """
    return get_kp_bucket(_resolve_table(indices), mjd)


def get_ap(
    indices: SpaceIndicesState | IndexTable,
    mjd: ArrayLike,
    mode: ApQueryMode | None = None,
) -> Array:
    """Return the Ap index at *mjd* in the requested mode.

    Args:
        indices: Ready handle or index table.
        mjd: Modified Julian Date to query.
        mode: :class:`PointQuery` (the default when ``None``),
            :class:`DailyMean`, or :class:`WindowMean`.

    Returns:
        The 3-hourly Ap, the daily mean Ap, or the window mean Ap.

    Raises:
        UninitializedError: If *indices* is an Uninitialized handle.
        RangeError: If a WindowMean has invalid bounds.
        TypeError: If *mode* is not a query mode.

    Examples:
        ```python
        from spaceindices.wdc import WindowMean, get_ap, init_space_indices
        indices = init_space_indices([("kp2020.wdc", 2020)])
        ap_avg = get_ap(indices, 58849.5, WindowMean(0, 21))
        ```
    """
    table = _resolve_table(indices)

    if mode is None or isinstance(mode, PointQuery):
        return get_ap_bucket(table, mjd)
    if isinstance(mode, DailyMean):
        return get_ap_daily_mean(table, mjd)
    if isinstance(mode, WindowMean):
        return get_ap_window_mean(table, mjd, mode.hours_start, mode.hours_end)
    raise TypeError(f"Unknown Ap query mode: {mode!r}")
