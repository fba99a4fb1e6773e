"""Kp and Ap geomagnetic indices from WDC files for JAX-compatible lookups.

Parses the yearly World Data Centre files (``kpYYYY.wdc``) into an
immutable table of sorted JAX arrays. Bucket queries use
``jnp.searchsorted`` and work inside ``jax.jit`` and ``jax.vmap``.

Typical usage::

    from spaceindices.wdc import DailyMean, get_ap, get_kp, init_space_indices
    indices = init_space_indices([("kp2020.wdc", 2020)])
    kp = get_kp(indices, 58849.3)
    ap_day = get_ap(indices, 58849.3, DailyMean())
"""

from spaceindices.wdc._errors import (
    BuildError,
    ParseError,
    RangeError,
    SpaceIndicesError,
    UninitializedError,
)
from spaceindices.wdc._lookup import (
    build_index_table,
    get_ap_bucket,
    get_ap_daily_mean,
    get_ap_window_mean,
    get_kp_bucket,
    window_hours,
)
from spaceindices.wdc._parsers import parse_wdc_file, parse_wdc_files, parse_wdc_line
from spaceindices.wdc._providers import (
    load_wdc_from_directory,
    load_wdc_from_files,
    static_space_indices,
    wdc_filename,
)
from spaceindices.wdc._query import ap_query_mode, get_ap, get_kp, init_space_indices
from spaceindices.wdc._types import (
    ApQueryMode,
    DailyMean,
    DailyRecord,
    IndexTable,
    PointQuery,
    Ready,
    SpaceIndicesState,
    Uninitialized,
    WindowMean,
)

__all__ = [
    "ApQueryMode",
    "BuildError",
    "DailyMean",
    "DailyRecord",
    "IndexTable",
    "ParseError",
    "PointQuery",
    "RangeError",
    "Ready",
    "SpaceIndicesError",
    "SpaceIndicesState",
    "UninitializedError",
    "Uninitialized",
    "WindowMean",
    "ap_query_mode",
    "build_index_table",
    "get_ap",
    "get_ap_bucket",
    "get_ap_daily_mean",
    "get_ap_window_mean",
    "get_kp",
    "get_kp_bucket",
    "init_space_indices",
    "load_wdc_from_directory",
    "load_wdc_from_files",
    "parse_wdc_file",
    "parse_wdc_files",
    "parse_wdc_line",
    "static_space_indices",
    "wdc_filename",
    "window_hours",
]
