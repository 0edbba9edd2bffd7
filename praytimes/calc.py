import logging
import math
from dataclasses import astuple, dataclass, fields
from datetime import date

from . import angles
from .astro import julian_date_for, sun_position
from .methods import asr_factor, eval_param, is_minutes
from .render import format_times
from .settings import CalcConfig
from .timezone import AUTO, resolve_offset

log = logging.getLogger(__name__)

# initial guesses in hours, refined by fixed-point iteration
DEFAULT_TIMES = {
    "imsak": 5,
    "fajr": 5,
    "sunrise": 6,
    "dhuhr": 12,
    "asr": 13,
    "sunset": 18,
    "maghrib": 18,
    "isha": 18
}


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float
    elevation: float = 0.0

    @classmethod
    def from_value(cls, value):
        if isinstance(value, cls):
            return value
        return cls(*value)


@dataclass(frozen=True)
class PrayerTimeSet:
    """The nine daily times as fractional hours in [0, 24), NaN when unavailable."""

    imsak: float
    fajr: float
    sunrise: float
    dhuhr: float
    asr: float
    sunset: float
    maghrib: float
    isha: float
    midnight: float

    def __getitem__(self, key):
        if key not in self.names():
            raise KeyError(key)
        return getattr(self, key)

    def __iter__(self):
        return iter(astuple(self))

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]

    def as_dict(self):
        return {name: getattr(self, name) for name in self.names()}

    def unavailable(self):
        return [name for name, value in self.as_dict().items() if math.isnan(value)]


class SunSolver:
    """Angle-to-time inversion for one location and Julian date.

    Times are day fractions relative to ``jdate``; each call takes the
    previous estimate of the time being solved because the declination
    drifts over the day.
    """

    def __init__(self, lat, jdate, elevation=0.0):
        self.lat = lat
        self.jdate = jdate
        self.elevation = elevation

    def mid_day(self, time):
        eqt = sun_position(self.jdate + time).equation
        return angles.fix_hour(12 - eqt)

    def sun_angle_time(self, angle, time, direction="cw"):
        decl = sun_position(self.jdate + time).declination
        noon = self.mid_day(time)
        t = angles.arccos(
            (-angles.sin(angle) - angles.sin(decl) * angles.sin(self.lat))
            / (angles.cos(decl) * angles.cos(self.lat))
        ) / 15.0
        return noon - t if direction == "ccw" else noon + t

    def asr_time(self, factor, time):
        decl = sun_position(self.jdate + time).declination
        angle = -angles.arccot(factor + angles.tan(abs(self.lat - decl)))
        return self.sun_angle_time(angle, time)

    def rise_set_angle(self):
        # approximate dip of the horizon for an observer above sea level
        return 0.833 + 0.0347 * math.sqrt(self.elevation)


def _as_date(day):
    if isinstance(day, date):
        return day
    return date(*day)


class PrayTimes:
    """Prayer time calculator bound to one immutable :class:`CalcConfig`."""

    def __init__(self, config=None):
        self.config = config or CalcConfig()

    @classmethod
    def for_method(cls, method_key):
        return cls(CalcConfig.for_method(method_key))

    @property
    def method(self):
        return self.config.method

    @property
    def settings(self):
        return self.config.settings

    @property
    def offsets(self):
        return self.config.offsets

    def get_times(self, day, coords, timezone=AUTO, dst=AUTO):
        day = _as_date(day)
        coords = Coordinates.from_value(coords)
        tz_hours = resolve_offset(day, timezone, dst)
        solver = SunSolver(coords.lat, julian_date_for(day, coords.lng), coords.elevation)

        times = dict(DEFAULT_TIMES)
        for _ in range(self.config.iterations):
            times = self._compute_prayer_times(solver, times)

        times = self._adjust_times(times, tz_hours, coords.lng)
        times["midnight"] = self._compute_midnight(times)
        times = self._tune_times(times)

        result = PrayerTimeSet(**{k: angles.fix_hour(v) for k, v in times.items()})
        missing = result.unavailable()
        if missing:
            log.debug("No solution for %s at lat=%s on %s", ", ".join(missing), coords.lat, day)
        return result

    def get_formatted_times(self, day, coords, timezone=AUTO, dst=AUTO, time_format="24h", **kwargs):
        return format_times(self.get_times(day, coords, timezone, dst), time_format, **kwargs)

    def _compute_prayer_times(self, solver, times):
        times = {k: v / 24.0 for k, v in times.items()}
        params = self.settings
        rise_set = solver.rise_set_angle()

        return {
            "imsak": solver.sun_angle_time(eval_param(params.imsak), times["imsak"], "ccw"),
            "fajr": solver.sun_angle_time(eval_param(params.fajr), times["fajr"], "ccw"),
            "sunrise": solver.sun_angle_time(rise_set, times["sunrise"], "ccw"),
            "dhuhr": solver.mid_day(times["dhuhr"]),
            "asr": solver.asr_time(asr_factor(params.asr), times["asr"]),
            "sunset": solver.sun_angle_time(rise_set, times["sunset"]),
            "maghrib": solver.sun_angle_time(eval_param(params.maghrib), times["maghrib"]),
            "isha": solver.sun_angle_time(eval_param(params.isha), times["isha"])
        }

    def _adjust_times(self, times, tz_hours, lng):
        params = self.settings
        times = {k: v + tz_hours - lng / 15.0 for k, v in times.items()}

        if params.high_lats != "None":
            times = self._adjust_high_lats(times)

        if is_minutes(params.imsak):
            times["imsak"] = times["fajr"] - eval_param(params.imsak) / 60.0
        if is_minutes(params.maghrib):
            times["maghrib"] = times["sunset"] + eval_param(params.maghrib) / 60.0
        if is_minutes(params.isha):
            times["isha"] = times["maghrib"] + eval_param(params.isha) / 60.0
        times["dhuhr"] += eval_param(params.dhuhr) / 60.0

        return times

    def _compute_midnight(self, times):
        if self.settings.midnight == "Jafari":
            return times["sunset"] + angles.time_diff(times["sunset"], times["fajr"]) / 2.0
        return times["sunset"] + angles.time_diff(times["sunset"], times["sunrise"]) / 2.0

    def _tune_times(self, times):
        return {k: v + self.offsets.get(k, 0) / 60.0 for k, v in times.items()}

    def _adjust_high_lats(self, times):
        params = self.settings
        night = angles.time_diff(times["sunset"], times["sunrise"])

        times["imsak"] = self._adjust_hl_time(
            "imsak", times["imsak"], times["sunrise"], eval_param(params.imsak), night, "ccw")
        times["fajr"] = self._adjust_hl_time(
            "fajr", times["fajr"], times["sunrise"], eval_param(params.fajr), night, "ccw")
        times["isha"] = self._adjust_hl_time(
            "isha", times["isha"], times["sunset"], eval_param(params.isha), night)
        times["maghrib"] = self._adjust_hl_time(
            "maghrib", times["maghrib"], times["sunset"], eval_param(params.maghrib), night)
        return times

    def _adjust_hl_time(self, name, time, base, angle, night, direction="cw"):
        portion = self._night_portion(angle, night)
        if direction == "ccw":
            diff = angles.time_diff(time, base)
        else:
            diff = angles.time_diff(base, time)
        if math.isnan(time) or diff > portion:
            time = base - portion if direction == "ccw" else base + portion
            log.debug("High latitude correction moved %s to %s", name, time)
        return time

    def _night_portion(self, angle, night):
        method = self.settings.high_lats
        portion = 1 / 2
        if method == "AngleBased":
            portion = angle / 60.0
        elif method == "OneSeventh":
            portion = 1 / 7
        return portion * night
