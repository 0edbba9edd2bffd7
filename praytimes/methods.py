import logging

from .errors import InvalidAsrConventionError, InvalidMethodError

log = logging.getLogger(__name__)

METHODS = {
    "MWL": {"name": "Muslim World League", "params": {"fajr": 18, "isha": 17}},
    "ISNA": {"name": "Islamic Society of North America (ISNA)", "params": {"fajr": 15, "isha": 15}},
    "Egypt": {"name": "Egyptian General Authority of Survey", "params": {"fajr": 19.5, "isha": 17.5}},
    "Makkah": {"name": "Umm Al-Qura University, Makkah", "params": {"fajr": 18.5, "isha": "90 min"}},
    "Karachi": {"name": "University of Islamic Sciences, Karachi", "params": {"fajr": 18, "isha": 18}},
    "Tehran": {
        "name": "Institute of Geophysics, University of Tehran",
        "params": {"fajr": 17.7, "isha": 14, "maghrib": 4.5, "midnight": "Jafari"}
    },
    "Jafari": {
        "name": "Shia Ithna-Ashari, Leva Institute, Qum",
        "params": {"fajr": 16, "isha": 14, "maghrib": 4, "midnight": "Jafari"}
    }
}

DEFAULT_METHOD = "MWL"

DEFAULT_PARAMS = {
    "maghrib": "0 min",
    "midnight": "Standard"
}

ASR_FACTORS = {"Standard": 1, "Hanafi": 2}

HIGH_LAT_METHODS = ("NightMiddle", "AngleBased", "OneSeventh", "None")

MIDNIGHT_METHODS = ("Standard", "Jafari")

TIME_NAMES = {
    "imsak": "Imsak",
    "fajr": "Fajr",
    "sunrise": "Sunrise",
    "dhuhr": "Dhuhr",
    "asr": "Asr",
    "sunset": "Sunset",
    "maghrib": "Maghrib",
    "isha": "Isha",
    "midnight": "Midnight"
}


def get_method(method_key):
    """Return the fully populated parameter set for ``method_key``."""
    method = METHODS.get(method_key)
    if not method:
        raise InvalidMethodError(method_key)
    params = dict(DEFAULT_PARAMS)
    params.update(method["params"])
    log.debug("Selected method %s: %s", method_key, params)
    return params


def method_name(method_key):
    method = METHODS.get(method_key)
    if not method:
        raise InvalidMethodError(method_key)
    return method["name"]


def is_minutes(value):
    return "min" in str(value)


def eval_param(value):
    """Leading number of a parameter such as ``18``, ``"90 min"`` or ``"1.5"``."""
    text = str(value).strip()
    end = 0
    while end < len(text) and (text[end].isdigit() or text[end] in ".+-"):
        end += 1
    try:
        return float(text[:end])
    except ValueError:
        return float("nan")


def asr_factor(value):
    """Shadow factor for an asr convention name or a numeric factor."""
    if value in ASR_FACTORS:
        return ASR_FACTORS[value]
    if isinstance(value, bool):
        raise InvalidAsrConventionError(value)
    try:
        factor = float(value)
    except (TypeError, ValueError):
        raise InvalidAsrConventionError(value) from None
    if not factor > 0:
        raise InvalidAsrConventionError(value)
    return factor
