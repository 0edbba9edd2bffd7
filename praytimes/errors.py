class PrayTimesError(ValueError):
    """Base class for configuration errors raised by praytimes."""


class InvalidMethodError(PrayTimesError):
    def __init__(self, method):
        self.method = method
        super().__init__(f"Unknown method: {method}")


class InvalidAsrConventionError(PrayTimesError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid asr convention: {value!r} (expected Standard, Hanafi or a shadow factor)")


class InvalidSettingError(PrayTimesError):
    pass
