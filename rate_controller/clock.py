import time


class SystemClock:
    def now(self):
        return int(time.time())


class ManualClock:
    """Clock advanced by hand. `pending_timestamp` is what the next call sees."""

    def __init__(self, timestamp=None):
        self.pending_timestamp = int(time.time()) if timestamp is None else timestamp

    def now(self):
        return self.pending_timestamp

    def mine(self, num_blocks=1, timestamp=None, block_time=12):
        if timestamp is not None:
            if timestamp < self.pending_timestamp:
                raise ValueError("cannot move the clock backwards")
            self.pending_timestamp = timestamp
        else:
            self.pending_timestamp += num_blocks * block_time
        return self.pending_timestamp
