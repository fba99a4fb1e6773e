"""Shared utility functions for spaceindices.

Provides local data directory management.
"""

from spaceindices.utils.caching import (
    file_age_seconds,
    get_data_dir,
    get_wdc_data_dir,
    is_file_stale,
)

__all__ = [
    "file_age_seconds",
    "get_data_dir",
    "get_wdc_data_dir",
    "is_file_stale",
]
