"""Type definitions for WDC geomagnetic index data.

Provides the core data types for Kp/Ap storage and lookup:

- :class:`DailyRecord`: One parsed WDC line (one calendar day).
- :class:`IndexTable`: Immutable container holding sorted index arrays for
  JIT-compatible lookup via ``jnp.searchsorted``.
- :class:`PointQuery`, :class:`DailyMean`, :class:`WindowMean`: the Ap
  query modes accepted by :func:`~spaceindices.wdc.get_ap`.
- :class:`Uninitialized`, :class:`Ready`: the state of a caller-owned
  index handle.

``IndexTable`` is a :class:`~typing.NamedTuple`, which JAX treats as a
pytree automatically. This means it works seamlessly with ``jax.jit``,
``jax.vmap``, and ``jax.lax`` control flow primitives.
"""

from __future__ import annotations

from typing import NamedTuple, Union

from jax import Array


class DailyRecord(NamedTuple):
    """Kp and Ap readings for one calendar day.

    Attributes:
        mjd: Modified Julian Date of local noon on the record's date.
        kp: Eight 3-hourly Kp values (0.0-9.0), starting at 00:00.
        ap: Eight 3-hourly Ap values, starting at 00:00.
    """

    mjd: float
    kp: tuple[float, ...]
    ap: tuple[int, ...]


class IndexTable(NamedTuple):
    """Geomagnetic index data for JIT-compatible lookups.

    Stores one row per day as sorted JAX arrays, enabling O(log n)
    nearest-day lookup inside ``jax.jit`` via ``jnp.searchsorted``.

    Attributes:
        mjd: Strictly increasing noon MJDs (one per day), shape ``(N,)``.
        day: Whole-day part of ``mjd``, ``int32``, shape ``(N,)``. Queries
            are resolved against it so the time of day keeps full precision
            when the float dtype is ``float32``.
        kp: 3-hourly Kp indices (0.0-9.0 scale), shape ``(N, 8)``.
        ap: 3-hourly Ap indices, ``int32``, shape ``(N, 8)``.
        ap_daily: Mean of the 8 Ap values of each day, shape ``(N,)``.
        mjd_min: Scalar, first MJD in the table.
        mjd_max: Scalar, last MJD in the table.
    """

    mjd: Array
    day: Array
    kp: Array
    ap: Array
    ap_daily: Array
    mjd_min: Array
    mjd_max: Array


class PointQuery(NamedTuple):
    """Return the 3-hourly Ap value of the interval containing the query."""


class DailyMean(NamedTuple):
    """Return the mean of the 8 Ap values of the day nearest the query."""


class WindowMean(NamedTuple):
    """Average 3-hourly Ap values sampled over preceding hours.

    Samples are taken at ``hours_start, hours_start + 3, ...`` hours before
    the query, up to and including ``hours_end``.

    Attributes:
        hours_start: First offset into the past, in hours.
        hours_end: Last admissible offset into the past, in hours.
    """

    hours_start: int
    hours_end: int


ApQueryMode = Union[PointQuery, DailyMean, WindowMean]


class Uninitialized(NamedTuple):
    """Handle for indices that have not been loaded yet.

    Attributes:
        reason: Message reported when the handle is queried.
    """

    reason: str = "Space indices are not initialized; call init_space_indices() first."


class Ready(NamedTuple):
    """Handle for loaded indices.

    Attributes:
        table: The index table built at initialization.
    """

    table: IndexTable


SpaceIndicesState = Union[Uninitialized, Ready]
