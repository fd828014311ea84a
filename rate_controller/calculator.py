"""Redemption rate PI controller.

Each update turns the gap between the redemption (target) price and the
market price into a multiplicative per-period rate:

    proportional = redemptionPrice - marketPrice * 1e9
    integral     = leak * lastIntegral / RAY + (p + lastP) / 2 * elapsed
    piOutput     = Kp * proportional / WAD + Ki * integral / WAD
    rate         = RAY + clamp(piOutput)        (RAY when inside the noise barrier)

Prices arrive as WAD (market) and RAY (redemption); the controller state is
RAY. `get_next_redemption_rate` previews exactly what `compute_rate` would
commit.
"""
import logging
import threading
from typing import NamedTuple

from . import fixed_point as fp
from .auth import ZERO_ADDRESS, Authorizations, caller_address, to_address
from .clock import SystemClock
from .errors import (
    ArithmeticOverflow,
    CannotOverrideIntegral,
    CooldownNotElapsed,
    InvalidImportedState,
    InvalidLeak,
    InvalidNoiseBarrier,
    InvalidOutputBound,
    InvalidPeriodSize,
    NotAuthorizedProposer,
    UnrecognizedParameter,
)
from .fixed_point import RAY, UINT256_MAX, WAD
from .gains import GainParameters
from .history import DeviationHistory, DeviationObservation
from .migration import ImportedState

logger = logging.getLogger(__name__)

NEGATIVE_RATE_LIMIT = RAY - 1
DEFAULT_GLOBAL_TIMELINE = 1
# largest upper bound that still leaves RAY + bound inside a uint256
OUTPUT_UPPER_BOUND_CEILING = UINT256_MAX - RAY - 1

ADDR_PARAMETERS = ("seedProposer",)
UINT_PARAMETERS = ("nb", "ips", "foub", "pscl", "allReaderToggle")
INT_PARAMETERS = ("folb", "sg", "ag", "pdc")


class NextRate(NamedTuple):
    rate: int
    proportional: int
    integral: int
    timeline: int


def validate_noise_barrier(nb):
    fp.check_uint(nb, "nb")
    if not (0 < nb <= WAD):
        raise InvalidNoiseBarrier(f"nb={nb}")
    return nb


def validate_period_size(ips):
    fp.check_uint(ips, "ips")
    if ips == 0:
        raise InvalidPeriodSize(f"ips={ips}")
    return ips


def validate_upper_bound(foub):
    fp.check_uint(foub, "foub")
    if not (0 < foub < OUTPUT_UPPER_BOUND_CEILING):
        raise InvalidOutputBound(f"foub={foub}")
    return foub


def validate_lower_bound(folb):
    fp.check_int(folb, "folb")
    if not (-NEGATIVE_RATE_LIMIT <= folb < 0):
        raise InvalidOutputBound(f"folb={folb}")
    return folb


def validate_leak(pscl):
    fp.check_uint(pscl, "pscl")
    if pscl > RAY:
        raise InvalidLeak(f"pscl={pscl}")
    return pscl


def riemann_sum(x, y):
    return fp.divide(fp.add(x, y), 2)


class RateCalculator:
    def __init__(self,
                 kp,
                 ki,
                 per_second_cumulative_leak,
                 integral_period_size,
                 noise_barrier,
                 feedback_output_upper_bound,
                 feedback_output_lower_bound,
                 imported_state=None,
                 *,
                 sender,
                 clock=None,
                 authorizations=None):
        self._lock = threading.RLock()
        self.clock = clock or SystemClock()

        try:
            imported = ImportedState(*(imported_state or ()))
        except TypeError as e:
            raise InvalidImportedState(str(e)) from e
        for name, value in imported._asdict().items():
            try:
                fp.check_int(value, name)
            except ArithmeticOverflow as e:
                raise InvalidImportedState(e.detail) from e
        imported.validate(self.clock.now())

        self._gains = GainParameters(kp, ki)
        self._per_second_cumulative_leak = validate_leak(per_second_cumulative_leak)
        self._integral_period_size = validate_period_size(integral_period_size)
        self._noise_barrier = validate_noise_barrier(noise_barrier)
        self._feedback_output_upper_bound = validate_upper_bound(feedback_output_upper_bound)
        self._feedback_output_lower_bound = validate_lower_bound(feedback_output_lower_bound)
        self._default_redemption_rate = RAY

        deployer = to_address(sender)
        self.auth = authorizations if authorizations is not None else Authorizations()
        self.auth.add_authority(deployer)
        self.auth.add_reader(deployer)
        self._seed_proposer = ZERO_ADDRESS

        self._last_update_time = imported.last_update_time
        self._price_deviation_cumulative = imported.price_deviation_cumulative
        seed_observation = None
        if imported.last_observation_timestamp > 0:
            seed_observation = DeviationObservation(imported.last_observation_timestamp,
                                                    imported.last_proportional,
                                                    imported.last_integral)
        self.history = DeviationHistory(imported.price_deviation_cumulative, seed_observation)

    # --- access -----------------------------------------------------------

    def _reader(self, sender):
        self.auth.require_reader(sender)

    def kp(self, sender=None):
        self._reader(sender)
        return self._gains.kp

    def ki(self, sender=None):
        self._reader(sender)
        return self._gains.ki

    def noise_barrier(self, sender=None):
        self._reader(sender)
        return self._noise_barrier

    def integral_period_size(self, sender=None):
        self._reader(sender)
        return self._integral_period_size

    def feedback_output_upper_bound(self, sender=None):
        self._reader(sender)
        return self._feedback_output_upper_bound

    def feedback_output_lower_bound(self, sender=None):
        self._reader(sender)
        return self._feedback_output_lower_bound

    def per_second_cumulative_leak(self, sender=None):
        self._reader(sender)
        return self._per_second_cumulative_leak

    def default_redemption_rate(self, sender=None):
        self._reader(sender)
        return self._default_redemption_rate

    def price_deviation_cumulative(self, sender=None):
        self._reader(sender)
        return self._price_deviation_cumulative

    def last_update_time(self, sender=None):
        self._reader(sender)
        return self._last_update_time

    def rate_timeline(self, sender=None):
        self._reader(sender)
        return DEFAULT_GLOBAL_TIMELINE

    def seed_proposer(self):
        return self._seed_proposer

    def observation_count(self, sender=None):
        self._reader(sender)
        return self.history.count()

    def historical_count(self, sender=None):
        self._reader(sender)
        return self.history.cumulative_count()

    def deviation_observation(self, index, sender=None):
        self._reader(sender)
        return self.history.observation(index)

    def historical_cumulative_deviation(self, index, sender=None):
        self._reader(sender)
        return self.history.cumulative(index)

    def last_proportional_term(self, sender=None):
        self._reader(sender)
        return self.history.last_proportional()

    def last_integral_term(self, sender=None):
        self._reader(sender)
        return self.history.last_integral()

    def time_since_last_update(self, sender=None):
        self._reader(sender)
        with self._lock:
            return self._elapsed(self.clock.now())

    # --- roles --------------------------------------------------------------

    def add_authority(self, account, sender=None):
        self.auth.require_authority(sender)
        self.auth.add_authority(account)

    def remove_authority(self, account, sender=None):
        self.auth.require_authority(sender)
        self.auth.remove_authority(account)

    def add_reader(self, account, sender=None):
        self.auth.require_authority(sender)
        self.auth.add_reader(account)

    def remove_reader(self, account, sender=None):
        self.auth.require_authority(sender)
        self.auth.remove_reader(account)

    # --- administration -------------------------------------------------

    def modify_parameters_addr(self, parameter, addr, sender=None):
        self.auth.require_authority(sender)
        if parameter != "seedProposer":
            raise UnrecognizedParameter(parameter)
        addr = to_address(addr)
        with self._lock:
            if self._seed_proposer != ZERO_ADDRESS:
                self.auth.remove_reader(self._seed_proposer)
            self._seed_proposer = addr
            self.auth.add_reader(addr)
        logger.info("ModifyParameters %s=%s", parameter, addr)

    def modify_parameters_uint(self, parameter, val, sender=None):
        self.auth.require_authority(sender)
        with self._lock:
            if parameter == "nb":
                self._noise_barrier = validate_noise_barrier(val)
            elif parameter == "ips":
                self._integral_period_size = validate_period_size(val)
            elif parameter == "foub":
                self._feedback_output_upper_bound = validate_upper_bound(val)
            elif parameter == "pscl":
                self._per_second_cumulative_leak = validate_leak(val)
            elif parameter == "allReaderToggle":
                self.auth.all_reader_toggle = fp.check_uint(val, parameter)
            else:
                raise UnrecognizedParameter(parameter)
        logger.info("ModifyParameters %s=%s", parameter, val)

    def modify_parameters_int(self, parameter, val, sender=None):
        self.auth.require_authority(sender)
        with self._lock:
            if parameter == "folb":
                self._feedback_output_lower_bound = validate_lower_bound(val)
            elif parameter in ("sg", "ag"):
                self._gains.set_gain(parameter, val)
            elif parameter == "pdc":
                if self._gains.ki != 0:
                    raise CannotOverrideIntegral(f"ki={self._gains.ki}")
                self._price_deviation_cumulative = fp.check_int(val, parameter)
            else:
                raise UnrecognizedParameter(parameter)
        logger.info("ModifyParameters %s=%s", parameter, val)

    def modify_parameters(self, parameter, value, sender=None):
        if parameter in ADDR_PARAMETERS:
            return self.modify_parameters_addr(parameter, value, sender=sender)
        if parameter in UINT_PARAMETERS:
            return self.modify_parameters_uint(parameter, value, sender=sender)
        if parameter in INT_PARAMETERS:
            return self.modify_parameters_int(parameter, value, sender=sender)
        self.auth.require_authority(sender)
        raise UnrecognizedParameter(parameter)

    # --- controller math ------------------------------------------------

    def _elapsed(self, now):
        if self._last_update_time == 0:
            return 0
        return fp.subtract(now, self._last_update_time, signed=False)

    def _next_price_deviation_cumulative(self, proportional_term, accumulated_leak, now):
        last_proportional_term = self.history.last_proportional()
        time_elapsed = self._elapsed(now)
        new_time_adjusted_deviation = fp.multiply(riemann_sum(proportional_term, last_proportional_term),
                                                  time_elapsed)
        leaked_price_cumulative = fp.divide(fp.multiply(accumulated_leak, self._price_deviation_cumulative),
                                            RAY)
        return (fp.add(leaked_price_cumulative, new_time_adjusted_deviation), new_time_adjusted_deviation)

    def _gain_adjusted_terms(self, proportional_term, integral_term):
        gains = self._gains.get()
        return (fp.divide(fp.multiply(proportional_term, gains.kp), WAD),
                fp.divide(fp.multiply(integral_term, gains.ki), WAD))

    def _breaks_noise_barrier(self, pi_sum, redemption_price):
        delta_noise = fp.subtract(2 * WAD, self._noise_barrier, signed=False)
        threshold = fp.subtract(fp.wmultiply(redemption_price, delta_noise, signed=False),
                                redemption_price, signed=False)
        return pi_sum >= threshold

    def _bounded_redemption_rate(self, pi_output):
        bounded_pi_output = pi_output
        if pi_output < self._feedback_output_lower_bound:
            bounded_pi_output = self._feedback_output_lower_bound
        elif pi_output > self._feedback_output_upper_bound:
            bounded_pi_output = self._feedback_output_upper_bound

        # the rate is a multiplicative factor and never reaches zero
        if bounded_pi_output <= -NEGATIVE_RATE_LIMIT:
            new_redemption_rate = fp.subtract(self._default_redemption_rate, NEGATIVE_RATE_LIMIT, signed=False)
        else:
            new_redemption_rate = fp.add(self._default_redemption_rate, bounded_pi_output, signed=False)
        return new_redemption_rate, bounded_pi_output

    def _next_rate(self, market_price, redemption_price, accumulated_leak, now):
        fp.check_uint(market_price, "market-price")
        fp.check_uint(redemption_price, "redemption-price")
        fp.check_uint(accumulated_leak, "accumulated-leak")

        proportional_term = fp.subtract(redemption_price, fp.wad_to_ray(market_price, signed=True))
        cumulative_deviation, _ = self._next_price_deviation_cumulative(proportional_term, accumulated_leak, now)
        gain_p, gain_i = self._gain_adjusted_terms(proportional_term, cumulative_deviation)
        pi_output = fp.add(gain_p, gain_i)

        if pi_output != 0 and self._breaks_noise_barrier(fp.absolute(pi_output), redemption_price):
            new_redemption_rate, _ = self._bounded_redemption_rate(pi_output)
        else:
            logger.debug("pi output %s inside noise barrier, rate unchanged", pi_output)
            new_redemption_rate = self._default_redemption_rate
        return NextRate(new_redemption_rate, proportional_term, cumulative_deviation, DEFAULT_GLOBAL_TIMELINE)

    # reader-gated views of the individual pipeline steps

    def get_next_price_deviation_cumulative(self, proportional_term, accumulated_leak, sender=None):
        self._reader(sender)
        with self._lock:
            return self._next_price_deviation_cumulative(proportional_term, accumulated_leak, self.clock.now())

    def get_gain_adjusted_terms(self, proportional_term, integral_term, sender=None):
        self._reader(sender)
        with self._lock:
            return self._gain_adjusted_terms(proportional_term, integral_term)

    def get_gain_adjusted_pi_output(self, proportional_term, integral_term, sender=None):
        self._reader(sender)
        with self._lock:
            return fp.add(*self._gain_adjusted_terms(proportional_term, integral_term))

    def breaks_noise_barrier(self, pi_sum, redemption_price, sender=None):
        self._reader(sender)
        with self._lock:
            return self._breaks_noise_barrier(pi_sum, redemption_price)

    def get_bounded_redemption_rate(self, pi_output, sender=None):
        self._reader(sender)
        with self._lock:
            return self._bounded_redemption_rate(pi_output)

    def get_next_redemption_rate(self, market_price, redemption_price, accumulated_leak, sender=None):
        self._reader(sender)
        with self._lock:
            preview = self._next_rate(market_price, redemption_price, accumulated_leak, self.clock.now())
        logger.debug("preview %s", preview)
        return preview

    def compute_rate(self, market_price, redemption_price, accumulated_leak, sender=None):
        with self._lock:
            if self._seed_proposer == ZERO_ADDRESS or caller_address(sender) != self._seed_proposer:
                raise NotAuthorizedProposer(f"{sender}")
            now = self.clock.now()
            if now < self._last_update_time:
                raise CooldownNotElapsed(f"now={now} before last update {self._last_update_time}")
            if self._last_update_time != 0 and self._elapsed(now) < self._integral_period_size:
                raise CooldownNotElapsed(f"elapsed={self._elapsed(now)} ips={self._integral_period_size}")

            result = self._next_rate(market_price, redemption_price, accumulated_leak, now)

            self.history.commit(DeviationObservation(now, result.proportional, result.integral))
            self._price_deviation_cumulative = result.integral
            self._last_update_time = now

        logger.info("UpdateRedemptionRate rate=%s proportional=%s integral=%s ts=%s",
                    result.rate, result.proportional, result.integral, now)
        return result.rate

    def export_state(self, sender=None):
        self._reader(sender)
        with self._lock:
            last_observation_timestamp = 0
            if self.history.count():
                last_observation_timestamp = self.history.observation(-1).timestamp
            return ImportedState(self._last_update_time,
                                 self.history.last_proportional(),
                                 self.history.last_integral(),
                                 self._price_deviation_cumulative,
                                 last_observation_timestamp)
