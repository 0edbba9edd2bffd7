from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union

from .errors import InvalidSettingError
from .methods import (
    DEFAULT_METHOD,
    HIGH_LAT_METHODS,
    MIDNIGHT_METHODS,
    TIME_NAMES,
    asr_factor,
    get_method,
)

log = logging.getLogger(__name__)

# degrees, or a string carrying the "min" marker such as "10 min"
AngleOrMinutes = Union[float, str]


@dataclass(frozen=True)
class Settings:
    fajr: AngleOrMinutes
    isha: AngleOrMinutes
    imsak: AngleOrMinutes = "10 min"
    dhuhr: AngleOrMinutes = "0 min"
    asr: Union[str, float] = "Standard"
    maghrib: AngleOrMinutes = "0 min"
    midnight: str = "Standard"
    high_lats: str = "NightMiddle"

    @classmethod
    def for_method(cls, method_key):
        return cls(**get_method(method_key))

    def as_dict(self):
        return dataclasses.asdict(self)


SETTING_NAMES = tuple(f.name for f in dataclasses.fields(Settings))


def _frozen_offsets(values=None):
    offsets = {name: 0 for name in TIME_NAMES}
    if values:
        offsets.update(values)
    return MappingProxyType(offsets)


def _validate(params):
    for key, value in params.items():
        if key not in SETTING_NAMES:
            raise InvalidSettingError(f"Unknown setting: {key}")
        if key == "asr":
            asr_factor(value)
        elif key == "high_lats" and value not in HIGH_LAT_METHODS:
            raise InvalidSettingError(f"Unknown high latitude method: {value}")
        elif key == "midnight" and value not in MIDNIGHT_METHODS:
            raise InvalidSettingError(f"Unknown midnight method: {value}")


@dataclass(frozen=True)
class CalcConfig:
    """Immutable calculation configuration.

    ``with_method``, ``adjust`` and ``tune`` return a new configuration and
    leave the receiver untouched, so one instance can be shared between
    callers without locking.
    """

    method: str = DEFAULT_METHOD
    settings: Settings = field(default_factory=lambda: Settings.for_method(DEFAULT_METHOD))
    offsets: Mapping[str, float] = field(default_factory=_frozen_offsets)
    iterations: int = 1

    @classmethod
    def for_method(cls, method_key):
        return cls(method=method_key, settings=Settings.for_method(method_key))

    def with_method(self, method_key):
        """Re-apply the full parameter set of ``method_key`` over the current settings.

        Settings the method does not define (imsak, dhuhr, asr, high_lats)
        keep their current values. Offsets are never reset.
        """
        params = get_method(method_key)
        return dataclasses.replace(
            self,
            method=method_key,
            settings=dataclasses.replace(self.settings, **params),
        )

    def adjust(self, **params):
        _validate(params)
        if params:
            log.debug("Adjusting settings: %s", params)
        return dataclasses.replace(self, settings=dataclasses.replace(self.settings, **params))

    def tune(self, offsets=None, **kwargs):
        values = dict(offsets or {})
        values.update(kwargs)
        for key, minutes in values.items():
            if key not in TIME_NAMES:
                raise InvalidSettingError(f"Unknown prayer for offset: {key}")
            values[key] = float(minutes)
        merged = dict(self.offsets)
        merged.update(values)
        return dataclasses.replace(self, offsets=_frozen_offsets(merged))

    def with_iterations(self, iterations):
        if iterations < 1:
            raise InvalidSettingError(f"Iteration count must be at least 1, got {iterations}")
        return dataclasses.replace(self, iterations=int(iterations))
