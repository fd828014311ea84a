from dataclasses import dataclass

from .errors import InvalidGain, UnrecognizedParameter
from .fixed_point import WAD, check_int

GAIN_NAMES = {"sg": "kp", "ag": "ki"}


@dataclass(frozen=True)
class ControllerGains:
    kp: int
    ki: int


def validate_gain(value, name="gain"):
    check_int(value, name)
    if value < -WAD or value > WAD:
        raise InvalidGain(f"{name}={value}")
    return value


class GainParameters:
    """Proportional (sg/Kp) and integral (ag/Ki) gains, WAD-scaled, each in [-WAD, WAD]."""

    def __init__(self, kp, ki):
        self._gains = ControllerGains(kp=validate_gain(kp, "sg"), ki=validate_gain(ki, "ag"))

    @property
    def kp(self):
        return self._gains.kp

    @property
    def ki(self):
        return self._gains.ki

    def get(self):
        return self._gains

    def set_gain(self, which, value):
        # accepts the short parameter name or the field name
        field = GAIN_NAMES.get(which, which)
        if field not in ("kp", "ki"):
            raise UnrecognizedParameter(which)
        validate_gain(value, which)
        if field == "kp":
            self._gains = ControllerGains(kp=value, ki=self._gains.ki)
        else:
            self._gains = ControllerGains(kp=self._gains.kp, ki=value)
