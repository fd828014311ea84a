from .auth import ZERO_ADDRESS, Authorizations, to_address
from .calculator import (
    DEFAULT_GLOBAL_TIMELINE,
    NEGATIVE_RATE_LIMIT,
    NextRate,
    RateCalculator,
    riemann_sum,
)
from .clock import ManualClock, SystemClock
from .errors import (
    ArithmeticOverflow,
    CannotOverrideIntegral,
    ControllerError,
    CooldownNotElapsed,
    InvalidGain,
    InvalidIdentity,
    InvalidImportedState,
    InvalidLeak,
    InvalidNoiseBarrier,
    InvalidOutputBound,
    InvalidPeriodSize,
    NotAuthority,
    NotAuthorizedProposer,
    NotReader,
    UnrecognizedParameter,
)
from .fixed_point import RAY, WAD
from .gains import ControllerGains, GainParameters
from .history import DeviationHistory, DeviationObservation
from .migration import ImportedState

__version__ = "0.1.0"
