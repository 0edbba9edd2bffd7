import math

from .angles import fix_hour
from .methods import TIME_NAMES

TIME_FORMATS = ("24h", "12h", "12hNS", "Float")
DEFAULT_SUFFIXES = ("am", "pm")
INVALID_TIME = "-----"


def format_time(value, time_format="24h", suffixes=DEFAULT_SUFFIXES, invalid=INVALID_TIME):
    """Render a fractional hour as ``HH:MM``, ``h:MM am``, ``h:MM`` or the raw float."""
    if math.isnan(value):
        return invalid
    if time_format == "Float":
        return value
    if time_format not in TIME_FORMATS:
        raise ValueError(f"Unknown time format: {time_format}")

    value = fix_hour(value + 0.5 / 60)  # round to the nearest minute
    hours = math.floor(value)
    minutes = math.floor((value - hours) * 60)
    if time_format == "24h":
        return f"{hours:02d}:{minutes:02d}"
    hour = (hours + 12 - 1) % 12 + 1
    text = f"{hour}:{minutes:02d}"
    if time_format == "12h":
        text = f"{text} {suffixes[0] if hours < 12 else suffixes[1]}"
    return text


def format_times(times, time_format="24h", suffixes=DEFAULT_SUFFIXES, invalid=INVALID_TIME):
    if hasattr(times, "as_dict"):
        times = times.as_dict()
    return {k: format_time(v, time_format, suffixes, invalid) for k, v in times.items()}


def build_table(times, time_format="24h", header=None, invalid=INVALID_TIME, names=None):
    lines = [header] if header else []
    formatted = format_times(times, time_format, invalid=invalid)
    for key in names or TIME_NAMES:
        lines.append(f"{TIME_NAMES[key]:<9}{formatted[key]}")
    return "\n".join(lines)
