import dataclasses

import pytest

from rate_controller import (
    ControllerGains,
    DeviationHistory,
    DeviationObservation,
    GainParameters,
    InvalidGain,
    ManualClock,
    UnrecognizedParameter,
)

EIGHTEEN_DECIMAL_NUMBER = int(10 ** 18)

class TestDeviationHistory:
    def test_empty(self):
        history = DeviationHistory()
        assert history.count() == 0
        assert history.cumulative_count() == 1
        assert history.cumulative(0) == 0
        assert history.last_proportional() == 0
        assert history.last_integral() == 0

    def test_seeded(self):
        history = DeviationHistory(-9, DeviationObservation(100, -5, -9))
        assert history.count() == 1
        assert history.cumulative_count() == 1
        assert history.last_proportional() == -5
        assert history.last_integral() == -9

    def test_commit_appends_in_order(self):
        history = DeviationHistory()
        for ts in range(1, 4):
            history.commit(DeviationObservation(ts * 3600, -ts, -10 * ts))
        assert history.count() == 3
        assert history.cumulative_count() == 4
        assert [o.timestamp for o in history.observations()] == [3600, 7200, 10800]
        assert [history.cumulative(i) for i in range(4)] == [0, -10, -20, -30]
        assert history.last_proportional() == -3
        assert history.last_integral() == -30
        assert history.observation(0) == DeviationObservation(3600, -1, -10)

    def test_observation_is_immutable(self):
        obs = DeviationObservation(1, 2, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            obs.integral = 4

class TestGainParameters:
    def test_set_gain(self):
        gains = GainParameters(1, 2)
        assert gains.get() == ControllerGains(kp=1, ki=2)
        gains.set_gain("sg", EIGHTEEN_DECIMAL_NUMBER)
        gains.set_gain("ki", -EIGHTEEN_DECIMAL_NUMBER)
        assert gains.kp == EIGHTEEN_DECIMAL_NUMBER
        assert gains.ki == -EIGHTEEN_DECIMAL_NUMBER

    def test_fail_set_gain(self):
        gains = GainParameters(1, 2)
        with pytest.raises(InvalidGain):
            gains.set_gain("ag", EIGHTEEN_DECIMAL_NUMBER + 1)
        with pytest.raises(InvalidGain):
            gains.set_gain("kp", -EIGHTEEN_DECIMAL_NUMBER - 1)
        assert gains.get() == ControllerGains(kp=1, ki=2)
        with pytest.raises(UnrecognizedParameter, match="modify-unrecognized-param"):
            gains.set_gain("co_bias", 1)
        assert gains.get() == ControllerGains(kp=1, ki=2)

    def test_fail_construct(self):
        with pytest.raises(InvalidGain):
            GainParameters(EIGHTEEN_DECIMAL_NUMBER + 1, 0)

class TestManualClock:
    def test_mine(self):
        chain = ManualClock(1000)
        assert chain.now() == 1000
        chain.mine(5)
        assert chain.pending_timestamp == 1060
        chain.mine(1, timestamp=chain.pending_timestamp + 3600)
        assert chain.now() == 4660
        with pytest.raises(ValueError):
            chain.mine(1, timestamp=0)
