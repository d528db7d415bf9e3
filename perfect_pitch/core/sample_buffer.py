import collections

import numpy as np


class SampleBuffer:
    """
    Sliding window over the most recent samples, oldest first.

    Holds at most `capacity` samples; pushing into a full buffer drops the
    oldest one. advance() drops a hop's worth so consecutive snapshots
    overlap by capacity - hop samples.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._samples = collections.deque(maxlen=capacity)

    def __len__(self):
        return len(self._samples)

    def push(self, sample: float):
        self._samples.append(float(sample))

    def extend(self, samples):
        """Push every sample of a batch, in order."""
        self._samples.extend(float(s) for s in samples)

    def is_ready(self) -> bool:
        return len(self._samples) >= self.capacity

    def snapshot(self) -> np.ndarray:
        """Copy of the current window as float32. Call only when is_ready()."""
        return np.fromiter(self._samples, dtype=np.float32, count=len(self._samples))

    def advance(self, hop: int):
        for _ in range(min(hop, len(self._samples))):
            self._samples.popleft()

    def clear(self):
        self._samples.clear()
