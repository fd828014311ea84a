from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DeviationObservation:
    timestamp: int
    proportional: int
    integral: int


class DeviationHistory:
    """Append-only record of committed observations and cumulative deviations.

    Nothing is ever pruned or reordered. The cumulative log carries one
    extra seed entry (the starting integral) when no observation was imported.
    """

    def __init__(self, seed_cumulative=0, seed_observation=None):
        self._observations: List[DeviationObservation] = []
        self._cumulative: List[int] = []
        if seed_observation is not None:
            self._observations.append(seed_observation)
        self._cumulative.append(seed_cumulative)

    def last_proportional(self):
        if not self._observations:
            return 0
        return self._observations[-1].proportional

    def last_integral(self):
        if not self._observations:
            return 0
        return self._observations[-1].integral

    def count(self):
        return len(self._observations)

    def cumulative_count(self):
        return len(self._cumulative)

    def observation(self, index):
        return self._observations[index]

    def cumulative(self, index):
        return self._cumulative[index]

    def observations(self):
        return tuple(self._observations)

    def commit(self, observation: DeviationObservation):
        self._cumulative.append(observation.integral)
        self._observations.append(observation)
