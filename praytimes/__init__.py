from .calc import Coordinates, PrayerTimeSet, PrayTimes, SunSolver
from .errors import InvalidAsrConventionError, InvalidMethodError, InvalidSettingError, PrayTimesError
from .methods import METHODS
from .settings import CalcConfig, Settings

__version__ = "1.0.0"

__all__ = [
    "CalcConfig",
    "Coordinates",
    "InvalidAsrConventionError",
    "InvalidMethodError",
    "InvalidSettingError",
    "METHODS",
    "PrayTimes",
    "PrayTimesError",
    "PrayerTimeSet",
    "Settings",
    "SunSolver",
]
