# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "spaceindices"]
#
# [tool.uv.sources]
# spaceindices = { path = ".." }
# ///
"""Print Kp and Ap indices for a UTC time from local WDC files.

Loads the yearly ``kpYYYY.wdc`` files from a directory (default
``$SPACEINDICES_DATA/wdc``) and prints the 3-hourly Kp and Ap, the daily
mean Ap and a window mean Ap for the requested time. Fetching the files is
up to you.

Usage:
    uv run examples/kp_ap_lookup.py TIME [OPTIONS]

Examples:
    # 3-hourly values and the mean over the last 24 hours
    uv run examples/kp_ap_lookup.py 2020-01-01T07:00 --oldest-year 2019 --newest-year 2020

    # NRLMSISE-00 style window: average of the 8 intervals 12-33 h earlier
    uv run examples/kp_ap_lookup.py 2020-01-03T10:30 --window-start 12 --window-end 33 \\
        --directory ./wdc --oldest-year 2020 --newest-year 2020
"""

import datetime
import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import jax.numpy as jnp
import typer

from spaceindices import DailyMean, Ready, WindowMean, get_ap, get_kp, set_dtype
from spaceindices.time import datetime_to_mjd
from spaceindices.wdc import SpaceIndicesError, load_wdc_from_directory


def main(
    time: Annotated[str, typer.Argument(help="UTC time in ISO format, e.g. 2020-01-01T07:00")],
    directory: Annotated[
        Optional[Path], typer.Option(help="Directory holding kpYYYY.wdc files")
    ] = None,
    oldest_year: Annotated[int, typer.Option(help="First year to load")] = 2020,
    newest_year: Annotated[
        Optional[int], typer.Option(help="Last year to load (default: current year)")
    ] = None,
    window_start: Annotated[int, typer.Option(help="Window mean start, hours back")] = 0,
    window_end: Annotated[int, typer.Option(help="Window mean end, hours back")] = 21,
    verbose: Annotated[bool, typer.Option(help="Show loader log messages")] = False,
) -> None:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    set_dtype(jnp.float64)

    try:
        t = datetime.datetime.fromisoformat(time)
    except ValueError:
        print(f"ERROR: cannot parse time {time!r}")
        sys.exit(1)

    try:
        table = load_wdc_from_directory(
            directory, oldest_year=oldest_year, newest_year=newest_year
        )
    except (FileNotFoundError, SpaceIndicesError) as err:
        print(f"ERROR: {err}")
        sys.exit(1)

    indices = Ready(table)
    mjd = datetime_to_mjd(t)

    print(f"Time: {t.isoformat()}  (MJD {mjd:.5f})")
    print(f"  Kp:                      {float(get_kp(indices, mjd)):.1f}")
    print(f"  Ap:                      {int(get_ap(indices, mjd))}")
    print(f"  Ap daily mean:           {float(get_ap(indices, mjd, DailyMean())):.2f}")

    try:
        window = get_ap(indices, mjd, WindowMean(window_start, window_end))
    except SpaceIndicesError as err:
        print(f"ERROR: {err}")
        sys.exit(1)
    print(f"  Ap mean ({window_start}h to {window_end}h back): {float(window):.2f}")


if __name__ == "__main__":
    typer.run(main)
