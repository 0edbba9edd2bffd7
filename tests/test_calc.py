import math
from datetime import date

import pytest

from praytimes import angles
from praytimes.calc import Coordinates, PrayerTimeSet, PrayTimes, SunSolver
from praytimes.errors import InvalidAsrConventionError
from praytimes.settings import CalcConfig, Settings

MECCA = Coordinates(21.4225, 39.8262)
EQUINOX = date(2024, 3, 21)
MINUTE = 1 / 60

ORDER = ["imsak", "fajr", "sunrise", "dhuhr", "asr", "sunset", "maghrib", "isha"]


def mecca_times(config=None, **kwargs):
    return PrayTimes(config).get_times(EQUINOX, MECCA, 3, 0, **kwargs)


def test_mecca_equinox_reference_values():
    times = mecca_times()
    assert times.fajr == pytest.approx(5.1608, abs=MINUTE)
    assert times.sunrise == pytest.approx(6.3937, abs=MINUTE)
    assert times.dhuhr == pytest.approx(12.4625, abs=MINUTE)
    assert times.asr == pytest.approx(15.8776, abs=MINUTE)
    assert times.sunset == pytest.approx(18.5366, abs=MINUTE)
    assert times.isha == pytest.approx(19.6982, abs=MINUTE)
    assert times.midnight == pytest.approx(0.4651, abs=MINUTE)


def test_mecca_sunrise_and_sunset_symmetric_around_dhuhr():
    times = mecca_times()
    assert (times.sunrise + times.sunset) / 2 == pytest.approx(times.dhuhr, abs=2 * MINUTE)


def test_minute_based_settings():
    times = mecca_times()
    assert times.imsak == pytest.approx(times.fajr - 10 / 60)
    assert times.maghrib == pytest.approx(times.sunset)


def test_makkah_isha_is_ninety_minutes_after_maghrib():
    times = mecca_times(CalcConfig.for_method("Makkah"))
    assert times.isha == pytest.approx(times.maghrib + 1.5)
    assert times.fajr < mecca_times().fajr


def test_dhuhr_minutes():
    base = mecca_times()
    times = mecca_times(CalcConfig().adjust(dhuhr="5 min"))
    assert times.dhuhr == pytest.approx(base.dhuhr + 5 / 60)


def test_angle_based_maghrib_follows_sunset():
    times = mecca_times(CalcConfig.for_method("Tehran"))
    assert times.sunset < times.maghrib < times.sunset + 0.5


def test_jafari_midnight_uses_fajr():
    times = mecca_times(CalcConfig.for_method("Jafari"))
    expected = times.sunset + angles.time_diff(times.sunset, times.fajr) / 2
    assert times.midnight == pytest.approx(angles.fix_hour(expected))


def test_standard_midnight_uses_sunrise():
    times = mecca_times()
    expected = times.sunset + angles.time_diff(times.sunset, times.sunrise) / 2
    assert times.midnight == pytest.approx(angles.fix_hour(expected))


def test_hanafi_asr_is_later():
    assert mecca_times(CalcConfig().adjust(asr="Hanafi")).asr > mecca_times().asr + 0.5


def test_numeric_asr_factor_matches_named_convention():
    assert mecca_times(CalcConfig().adjust(asr=2)).asr == mecca_times(CalcConfig().adjust(asr="Hanafi")).asr


def test_invalid_asr_setting_fails_at_compute_time():
    config = CalcConfig(settings=Settings(fajr=18, isha=17, asr="Shafi"))
    with pytest.raises(InvalidAsrConventionError):
        mecca_times(config)


def test_elevation_widens_the_day():
    low = mecca_times()
    high = PrayTimes().get_times(EQUINOX, Coordinates(21.4225, 39.8262, 1000), 3, 0)
    assert high.sunrise < low.sunrise
    assert high.sunset > low.sunset
    assert high.dhuhr == low.dhuhr


def test_dst_adds_an_hour():
    base = mecca_times()
    shifted = PrayTimes().get_times(EQUINOX, MECCA, 3, 1)
    assert shifted.dhuhr == pytest.approx(base.dhuhr + 1)
    assert PrayTimes().get_times(EQUINOX, MECCA, 4, 0) == shifted


def test_accepts_tuples_for_date_and_coordinates():
    times = PrayTimes().get_times((2024, 3, 21), (21.4225, 39.8262), 3, 0)
    assert times == mecca_times()


def test_idempotent():
    pt = PrayTimes(CalcConfig.for_method("ISNA").tune(asr=3))
    first = pt.get_times(EQUINOX, MECCA, 3, 0)
    second = pt.get_times(EQUINOX, MECCA, 3, 0)
    assert list(first) == list(second)


def test_fine_tune_moves_only_that_time():
    base = mecca_times()
    tuned = mecca_times(CalcConfig().tune(asr=7))
    for name in PrayerTimeSet.names():
        if name == "asr":
            assert tuned.asr == pytest.approx(base.asr + 7 / 60)
        else:
            assert tuned[name] == base[name]


def test_more_iterations_converge():
    one = mecca_times()
    three = mecca_times(CalcConfig().with_iterations(3))
    for name in ORDER:
        assert three[name] == pytest.approx(one[name], abs=MINUTE)


@pytest.mark.parametrize("lat", range(-65, 66, 5))
@pytest.mark.parametrize("month", range(1, 13))
def test_times_finite_at_moderate_latitudes(lat, month):
    for lng in (-170, -85, 0, 85, 170):
        times = PrayTimes().get_times(date(2024, month, 10), (lat, lng), round(lng / 15), 0)
        for name, value in times.as_dict().items():
            assert not math.isnan(value), name
            assert 0 <= value < 24, name


@pytest.mark.parametrize("lat", range(-45, 46, 15))
@pytest.mark.parametrize("month", [1, 3, 6, 9, 12])
@pytest.mark.parametrize("asr", ["Standard", "Hanafi"])
def test_monotonic_order(lat, month, asr):
    config = CalcConfig().adjust(asr=asr)
    for lng in (-85, 0, 85):
        times = PrayTimes(config).get_times(date(2024, month, 1), (lat, lng), round(lng / 15), 0)
        values = [times[name] for name in ORDER]
        assert values[0] <= values[1] <= values[2] < values[3] < values[4] < values[5] <= values[6] <= values[7]


HIGH_LAT = Coordinates(66, 25)
NEAR_SOLSTICE = date(2024, 6, 1)


def test_high_latitude_without_correction_is_unavailable():
    times = PrayTimes(CalcConfig().adjust(high_lats="None")).get_times(NEAR_SOLSTICE, HIGH_LAT, 3, 0)
    assert math.isnan(times.fajr)
    assert math.isnan(times.isha)
    assert math.isnan(times.imsak)
    assert not math.isnan(times.sunrise)
    assert set(times.unavailable()) == {"imsak", "fajr", "isha"}


def test_high_latitude_night_middle_clamps_to_half_night():
    times = PrayTimes().get_times(NEAR_SOLSTICE, HIGH_LAT, 3, 0)
    assert times.unavailable() == []
    assert times.fajr == pytest.approx(times.isha)
    assert times.fajr == pytest.approx(times.midnight)
    assert times.imsak == pytest.approx(times.fajr - 10 / 60)


@pytest.mark.parametrize("mode, portion", [("OneSeventh", 1 / 7), ("AngleBased", None)])
def test_high_latitude_night_portions(mode, portion):
    times = PrayTimes(CalcConfig().adjust(high_lats=mode)).get_times(NEAR_SOLSTICE, HIGH_LAT, 3, 0)
    night = angles.time_diff(times.sunset, times.sunrise)
    fajr_portion = portion if portion else 18 / 60
    isha_portion = portion if portion else 17 / 60
    assert times.fajr == pytest.approx(angles.fix_hour(times.sunrise - fajr_portion * night))
    assert times.isha == pytest.approx(angles.fix_hour(times.sunset + isha_portion * night))


def test_high_latitude_correction_leaves_reachable_times_alone():
    corrected = mecca_times()
    uncorrected = mecca_times(CalcConfig().adjust(high_lats="None"))
    assert corrected == uncorrected


def test_polar_day_keeps_nan_through_the_pipeline():
    times = PrayTimes().get_times(date(2024, 6, 21), (70, 25), 2, 0)
    assert math.isnan(times.sunrise)
    assert math.isnan(times.sunset)
    assert math.isnan(times.midnight)
    assert not math.isnan(times.dhuhr)


def test_sun_solver_mid_day_and_angle_time():
    solver = SunSolver(0, 2460390.5)
    noon = solver.mid_day(0.5)
    assert noon == pytest.approx(12.12, abs=0.01)
    morning = solver.sun_angle_time(0, 0.25, "ccw")
    evening = solver.sun_angle_time(0, 0.75)
    assert noon - morning == pytest.approx(6, abs=0.01)
    assert evening - noon == pytest.approx(6, abs=0.01)
    assert math.isnan(SunSolver(89, 2460390.5).sun_angle_time(18, 0.2, "ccw"))


def test_rise_set_angle():
    assert SunSolver(0, 0).rise_set_angle() == 0.833
    assert SunSolver(0, 0, 100).rise_set_angle() == pytest.approx(0.833 + 0.347)


def test_prayer_time_set_access():
    times = mecca_times()
    assert times["dhuhr"] == times.dhuhr
    assert list(times.as_dict()) == PrayerTimeSet.names()
    assert len(list(times)) == 9
    with pytest.raises(KeyError):
        times["jumuah"]
