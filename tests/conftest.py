from __future__ import annotations

from pathlib import Path

import jax.numpy as jnp
import pytest

from spaceindices.config import set_dtype

# 2020-01-01 from the GFZ kp2020.wdc layout.
KP_2020_01_01 = [7, 10, 13, 17, 20, 23, 27, 30]
AP_2020_01_01 = [4, 7, 9, 12, 15, 18, 22, 27]


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    Index tables keep the dtype they were built with, so this must run
    before any table is created. test_config.py overrides it with its own
    autouse fixture that sets float32.
    """
    set_dtype(jnp.float64)


def make_wdc_line(month: int, day: int, kp: list[int], ap: list[int], yy: int = 20) -> str:
    """Format one WDC record line (Kp given as Kp x 10)."""
    ap_day = round(sum(ap) / 8)
    return (
        f"{yy:02d}{month:02d}{day:02d}{2543:4d}{1:2d}"
        + "".join(f"{k:2d}" for k in kp)
        + f"{sum(kp):3d}"
        + "".join(f"{a:3d}" for a in ap)
        + f"{ap_day:3d}0.00"
        + "\n"
    )


@pytest.fixture
def wdc_line():
    """Factory formatting a single WDC record line."""
    return make_wdc_line


@pytest.fixture
def write_wdc(tmp_path: Path):
    """Factory writing WDC lines to ``tmp_path / name`` and returning the path."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def known_day() -> tuple[list[int], list[int]]:
    """Raw ``(kp, ap)`` fields of 2020-01-01."""
    return list(KP_2020_01_01), list(AP_2020_01_01)


@pytest.fixture
def three_day_lines() -> list[str]:
    """Records for 2020-01-01 to 2020-01-03 with distinct Ap rows."""
    return [
        make_wdc_line(1, 1, KP_2020_01_01, AP_2020_01_01),
        make_wdc_line(1, 2, [0, 3, 7, 10, 13, 17, 20, 23], [1, 2, 3, 4, 5, 6, 7, 8]),
        make_wdc_line(1, 3, [40, 43, 47, 50, 53, 57, 60, 90], [10, 20, 30, 40, 50, 60, 70, 80]),
    ]
