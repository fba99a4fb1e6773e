import datetime

import jax
import pytest

from spaceindices.time import (
    caldate_to_mjd,
    date_to_mjd,
    datetime_to_mjd,
    jd_to_mjd,
    mjd_to_jd,
)


def test_caldate_to_mjd():
    assert caldate_to_mjd(2000, 1, 1, 12, 0, 0) == pytest.approx(51544.5, abs=1e-9)


def test_caldate_to_mjd_2020():
    assert caldate_to_mjd(2020, 1, 1, 7, 0, 0) == pytest.approx(58849 + 7 / 24, abs=1e-9)


def test_caldate_to_mjd_february():
    assert caldate_to_mjd(2020, 2, 29) == pytest.approx(58908.0, abs=1e-9)


def test_caldate_to_mjd_jit():
    mjd = jax.jit(caldate_to_mjd)(2000, 1, 1, 12, 0, 0.0)
    assert mjd == pytest.approx(51544.5, abs=1e-9)


def test_jd_to_mjd():
    assert jd_to_mjd(2451545.0) == pytest.approx(51544.5, abs=1e-9)


def test_mjd_to_jd():
    assert mjd_to_jd(51544.5) == pytest.approx(2451545.0, abs=1e-9)


def test_date_to_mjd_matches_caldate_to_mjd():
    for year, month, day, hour in ((1932, 1, 1, 12.0), (2000, 3, 1, 0.0), (2024, 12, 31, 21.0)):
        assert date_to_mjd(year, month, day, hour) == pytest.approx(
            float(caldate_to_mjd(year, month, day, hour)), abs=1e-9
        )


def test_date_to_mjd_noon():
    assert date_to_mjd(2020, 1, 1, 12.0) == 58849.5


def test_date_to_mjd_invalid_date():
    with pytest.raises(ValueError):
        date_to_mjd(2021, 2, 29)


def test_datetime_to_mjd_naive_is_utc():
    assert datetime_to_mjd(datetime.datetime(2020, 1, 1, 7)) == pytest.approx(58849 + 7 / 24)


def test_datetime_to_mjd_aware():
    tz = datetime.timezone(datetime.timedelta(hours=2))
    dt = datetime.datetime(2020, 1, 1, 9, 30, tzinfo=tz)
    assert datetime_to_mjd(dt) == pytest.approx(58849 + 7.5 / 24)
