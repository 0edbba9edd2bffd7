import math


def dtr(d):
    return (d * math.pi) / 180.0


def rtd(r):
    return (r * 180.0) / math.pi


def sin(d):
    return math.sin(dtr(d))


def cos(d):
    return math.cos(dtr(d))


def tan(d):
    return math.tan(dtr(d))


# math.asin/acos raise outside [-1, 1]; an unreachable sun angle has to come
# back as NaN so it can flow through the rest of the pipeline.
def arcsin(x):
    if not -1.0 <= x <= 1.0:
        return math.nan
    return rtd(math.asin(x))


def arccos(x):
    if not -1.0 <= x <= 1.0:
        return math.nan
    return rtd(math.acos(x))


def arctan(x):
    return rtd(math.atan(x))


def arccot(x):
    return rtd(math.atan(1.0 / x))


def arctan2(y, x):
    return rtd(math.atan2(y, x))


def fix(a, b):
    """Reduce ``a`` into ``[0, b)``. NaN is returned unchanged."""
    if math.isnan(a):
        return a
    a = a - b * math.floor(a / b)
    return a + b if a < 0 else a


def fix_angle(a):
    return fix(a, 360.0)


def fix_hour(h):
    return fix(h, 24.0)


def time_diff(time1, time2):
    return fix_hour(time2 - time1)
