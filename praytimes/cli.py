import argparse
import json
import logging
import sys
from datetime import date, datetime

from .calc import Coordinates, PrayTimes
from .config import CONFIG_PATH, active_location, config_to_calc, load_config, save_config
from .methods import METHODS, TIME_NAMES
from .render import TIME_FORMATS, build_table, format_times

log = logging.getLogger(__name__)


def _parse_offset(value):
    if value is None or value == "auto":
        return value
    try:
        return float(value)
    except ValueError:
        return value  # IANA zone name


def _parse_date(value):
    return datetime.strptime(value, "%Y-%m-%d").date()


def _settings_overrides(args):
    overrides = {}
    for key in ("imsak", "dhuhr", "maghrib", "isha", "asr", "high_lats"):
        value = getattr(args, key)
        if value is not None:
            overrides[key] = value
    return overrides


def _resolve_coords(args, config):
    if args.lat is not None and args.lng is not None:
        return Coordinates(float(args.lat), float(args.lng), float(args.elv or 0)), None
    key, loc = active_location(config)
    if not loc:
        raise ValueError("No location given (use --lat/--lng or --set-location)")
    return Coordinates(loc["lat"], loc["lng"], loc.get("elv", 0)), loc


def compute(args, config):
    calc = config_to_calc(config)
    if args.method:
        calc = calc.with_method(args.method)
    calc = calc.adjust(**_settings_overrides(args))
    if args.offset:
        calc = calc.tune({prayer.lower(): float(minutes) for prayer, minutes in args.offset})

    coords, loc = _resolve_coords(args, config)
    timezone = args.tz
    if timezone is None:
        timezone = (loc or {}).get("tz") or config.get("timezone", "auto")
    dst = args.dst if args.dst is not None else config.get("dst", "auto")
    day = args.date or date.today()

    times = PrayTimes(calc).get_times(day, coords, _parse_offset(timezone), _parse_offset(dst))
    return calc, coords, day, times


def handle_cli(args):
    config = load_config(args.config)

    if args.list_methods:
        for key in METHODS:
            params = ", ".join(f"{k}={v}" for k, v in METHODS[key]["params"].items())
            print(f"{key}: {METHODS[key]['name']} ({params})")
        return 0

    if args.set_method:
        config_to_calc(dict(config, method=args.set_method))
        config["method"] = args.set_method
        save_config(config, args.config)
        return 0

    if args.set_offset:
        prayer, minutes = args.set_offset
        prayer_key = prayer.lower()
        if prayer_key not in TIME_NAMES:
            raise ValueError(f"Unknown prayer for offset: {prayer}")
        config.setdefault("adjustments", {})[prayer_key] = float(minutes)
        save_config(config, args.config)
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ValueError("--set-location needs --lat and --lng")
        config.setdefault("locations", {})[args.set_location] = {
            "lat": float(args.lat),
            "lng": float(args.lng),
            "elv": float(args.elv or 0),
            "tz": args.tz or config.get("timezone", "auto")
        }
        config["location"] = args.set_location
        save_config(config, args.config)
        return 0

    calc, coords, day, times = compute(args, config)
    time_format = args.format or config.get("time_format", "24h")
    invalid = config.get("invalid_time", "-----")

    if args.json:
        payload = {
            "date": day.isoformat(),
            "method": calc.method,
            "lat": coords.lat,
            "lng": coords.lng,
            "times": format_times(times, time_format, invalid=invalid)
        }
        print(json.dumps(payload, ensure_ascii=True))
        return 0

    header = f"{day.isoformat()} ({coords.lat}, {coords.lng}) {METHODS[calc.method]['name']}, Asr: {calc.settings.asr}"
    print(build_table(times, time_format, header=header, invalid=invalid))
    return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Compute daily prayer times")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to the JSON config file")
    parser.add_argument("--date", type=_parse_date, help="Date as YYYY-MM-DD (default: today)")
    parser.add_argument("--lat", type=float, help="Latitude in degrees")
    parser.add_argument("--lng", type=float, help="Longitude in degrees")
    parser.add_argument("--elv", type=float, help="Elevation in meters")
    parser.add_argument("--tz", help="UTC offset in hours, 'auto' or an IANA time zone")
    parser.add_argument("--dst", help="Daylight saving: 0, 1 or 'auto'")
    parser.add_argument("--method", help="Calculation method")
    parser.add_argument("--asr", help="Asr convention: Standard, Hanafi or a shadow factor")
    parser.add_argument("--high-lats", dest="high_lats", help="NightMiddle, AngleBased, OneSeventh or None")
    parser.add_argument("--imsak", help="Imsak angle or minutes before fajr (e.g. '10 min')")
    parser.add_argument("--dhuhr", help="Minutes after mid-day (e.g. '1 min')")
    parser.add_argument("--maghrib", help="Maghrib angle or minutes after sunset")
    parser.add_argument("--isha", help="Isha angle or minutes after maghrib")
    parser.add_argument("--offset", nargs=2, action="append", metavar=("PRAYER", "MIN"),
                        help="Tune a time by minutes (repeatable)")
    parser.add_argument("--format", choices=TIME_FORMATS, help="Output time format")
    parser.add_argument("--json", action="store_true", help="Output JSON")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--set-method", help="Save the default calculation method")
    parser.add_argument("--set-offset", nargs=2, metavar=("PRAYER", "MIN"), help="Save a time offset in minutes")
    parser.add_argument("--set-location", help="Save a named location from --lat/--lng/--elv/--tz and make it active")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return handle_cli(args)
    except Exception as exc:
        log.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
