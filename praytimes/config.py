import json
import logging
import os

from .settings import CalcConfig

log = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "praytimes")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "location": None,
    "locations": {},
    "timezone": "auto",
    "dst": "auto",
    "method": "MWL",
    "settings": {
        "imsak": "10 min",
        "dhuhr": "0 min",
        "asr": "Standard",
        "high_lats": "NightMiddle"
    },
    "adjustments": {
        "imsak": 0,
        "fajr": 0,
        "sunrise": 0,
        "dhuhr": 0,
        "asr": 0,
        "sunset": 0,
        "maghrib": 0,
        "isha": 0,
        "midnight": 0
    },
    "time_format": "24h",
    "invalid_time": "-----"
}


def default_config():
    return json.loads(json.dumps(DEFAULT_CONFIG))


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        log.info("Writing default config to %s", path)
        config = default_config()
        save_config(config, path)
        return config
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def config_to_calc(config):
    """Build the calculation config from a loaded config file."""
    calc = CalcConfig.for_method(config.get("method", "MWL"))
    calc = calc.adjust(**config.get("settings", {}))
    return calc.tune(config.get("adjustments", {}))


def active_location(config):
    key = config.get("location")
    if not key:
        return None, None
    loc = config.get("locations", {}).get(key)
    if not loc:
        raise ValueError(f"Location not found: {key}")
    return key, loc
