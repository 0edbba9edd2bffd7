import math
from typing import NamedTuple

from . import angles

J2000 = 2451545.0


class SolarPosition(NamedTuple):
    declination: float
    equation: float


def julian_date(y, m, d):
    # Meeus, Astronomical Algorithms; proleptic Gregorian calendar
    if m <= 2:
        y -= 1
        m += 12
    a = math.floor(y / 100)
    b = 2 - a + math.floor(a / 4)
    return math.floor(365.25 * (y + 4716)) + math.floor(30.6001 * (m + 1)) + d + b - 1524.5


def julian_date_for(day, lng):
    """Julian date of ``day`` shifted to local solar time at longitude ``lng``."""
    return julian_date(day.year, day.month, day.day) - lng / (15 * 24)


def sun_position(jd):
    """Solar declination (degrees) and equation of time (hours) at ``jd``.

    Uses the USNO low-precision approximation, good to about 0.01 degrees
    over two centuries around J2000.
    """
    d = jd - J2000
    g = angles.fix_angle(357.529 + 0.98560028 * d)
    q = angles.fix_angle(280.459 + 0.98564736 * d)
    L = angles.fix_angle(q + 1.915 * angles.sin(g) + 0.020 * angles.sin(2 * g))
    e = 23.439 - 0.00000036 * d
    ra = angles.arctan2(angles.cos(e) * angles.sin(L), angles.cos(L)) / 15.0
    eqt = q / 15.0 - angles.fix_hour(ra)
    decl = angles.arcsin(angles.sin(e) * angles.sin(L))
    return SolarPosition(decl, eqt)
