import logging
from datetime import date, datetime

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidSettingError

log = logging.getLogger(__name__)

AUTO = "auto"


def get_timezone(tz_name=None):
    if tz_name:
        try:
            return ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise InvalidSettingError(f"Unknown time zone: {tz_name}") from exc
    return datetime.now().astimezone().tzinfo


def gmt_offset(day, tzinfo=None):
    """UTC offset in hours at local noon of ``day``."""
    if tzinfo is None:
        dt = datetime(day.year, day.month, day.day, 12, 0, 0).astimezone()
    else:
        dt = datetime(day.year, day.month, day.day, 12, 0, 0, tzinfo=tzinfo)
    offset = dt.utcoffset()
    return offset.total_seconds() / 3600.0 if offset else 0.0


def base_offset(year, tzinfo=None):
    """Standard (non-DST) offset: the smaller of the January and July offsets."""
    return min(gmt_offset(date(year, 1, 1), tzinfo), gmt_offset(date(year, 7, 1), tzinfo))


def dst_flag(day, tzinfo=None):
    return 1 if gmt_offset(day, tzinfo) != base_offset(day.year, tzinfo) else 0


def _is_auto(value):
    return value is None or value == AUTO


def resolve_offset(day, timezone=AUTO, dst=AUTO):
    """Effective UTC offset in hours, daylight saving included.

    ``timezone`` is a number of hours, ``"auto"`` (host clock) or an IANA
    name; ``dst`` is 0/1 or ``"auto"``.
    """
    tzinfo = None
    if isinstance(timezone, str) and not _is_auto(timezone):
        tzinfo = get_timezone(timezone)
        timezone = AUTO
    if _is_auto(timezone):
        timezone = base_offset(day.year, tzinfo)
    if _is_auto(dst):
        dst = dst_flag(day, tzinfo)
    hours = float(timezone) + (1 if dst else 0)
    log.debug("Resolved UTC offset for %s: %s (dst=%s)", day, hours, dst)
    return hours
