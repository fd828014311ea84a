from typing import NamedTuple

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError

from .errors import InvalidImportedState

IMPORTED_STATE_TYPES = ['int256', 'int256', 'int256', 'int256', 'int256']


class ImportedState(NamedTuple):
    """Snapshot a predecessor controller hands to its successor."""
    last_update_time: int = 0
    last_proportional: int = 0
    last_integral: int = 0
    price_deviation_cumulative: int = 0
    last_observation_timestamp: int = 0

    def encode(self):
        try:
            return encode(IMPORTED_STATE_TYPES, list(self))
        except EncodingError as e:
            raise InvalidImportedState(str(e)) from e

    @classmethod
    def decode(cls, data):
        if isinstance(data, str):
            data = bytes.fromhex(data[2:] if data.startswith("0x") else data)
        try:
            return cls(*decode(IMPORTED_STATE_TYPES, data))
        except DecodingError as e:
            raise InvalidImportedState(str(e)) from e

    def validate(self, now):
        if self.last_update_time < 0 or self.last_update_time > now:
            raise InvalidImportedState(f"invalid-imported-time {self.last_update_time}")
        if self.last_observation_timestamp < 0 or self.last_observation_timestamp > now:
            raise InvalidImportedState(f"invalid-observation-time {self.last_observation_timestamp}")
        return self
