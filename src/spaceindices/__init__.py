"""
spaceindices serves Kp and Ap geomagnetic activity indices from WDC files as JAX-compatible lookups.
"""

from .constants import (
    JD_MJD_OFFSET,
    HOURS_PER_DAY,
    INTERVAL_HOURS,
    INTERVALS_PER_DAY,
)

from .config import set_dtype, get_dtype

from .time import (
    caldate_to_mjd,
    date_to_mjd,
    datetime_to_mjd,
    jd_to_mjd,
    mjd_to_jd,
)

from .wdc import (
    DailyMean,
    IndexTable,
    PointQuery,
    Ready,
    Uninitialized,
    WindowMean,
    get_ap,
    get_kp,
    init_space_indices,
)

__all__ = [
    # Constants
    "JD_MJD_OFFSET",
    "HOURS_PER_DAY",
    "INTERVAL_HOURS",
    "INTERVALS_PER_DAY",
    # Config
    "set_dtype",
    "get_dtype",
    # Time
    "caldate_to_mjd",
    "date_to_mjd",
    "datetime_to_mjd",
    "jd_to_mjd",
    "mjd_to_jd",
    # WDC indices
    "DailyMean",
    "IndexTable",
    "PointQuery",
    "Ready",
    "Uninitialized",
    "WindowMean",
    "get_ap",
    "get_kp",
    "init_space_indices",
]
