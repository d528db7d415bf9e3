"""
One-way queues between the three threads of control.

    capture callback --SampleChannel--> PitchEngine --ReportChannel--> display

Both wrap queue.SimpleQueue, which is unbounded, FIFO and safe for one
producer and one consumer on different threads.
"""

import queue
import threading

import numpy as np

# End-of-stream marker on the sample queue.
_CLOSED = None


class ChannelClosed(Exception):
    """The receiving side of a ReportChannel has gone away."""


class SampleChannel:
    def __init__(self):
        self._queue = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, samples):
        """Enqueue a batch without blocking. Dropped silently once closed."""
        if self._closed.is_set():
            return
        self._queue.put_nowait(np.asarray(samples, dtype=np.float32).ravel())

    def close(self):
        if self._closed.is_set():
            return
        self._closed.set()
        self._queue.put_nowait(_CLOSED)

    def recv(self, timeout: float | None = None):
        """Block for the next batch. None means the channel is closed.

        Raises queue.Empty if a timeout is given and runs out.
        """
        batch = self._queue.get(timeout=timeout)
        if batch is _CLOSED:
            # Leave the marker for any later reader.
            self._queue.put_nowait(_CLOSED)
            return None
        return batch

    def drain(self) -> tuple[list, bool]:
        """All batches available right now, and whether end of stream was reached."""
        batches = []
        while True:
            try:
                batch = self._queue.get_nowait()
            except queue.Empty:
                return batches, False
            if batch is _CLOSED:
                self._queue.put_nowait(_CLOSED)
                return batches, True
            batches.append(batch)


class ReportChannel:
    def __init__(self):
        self._queue = queue.SimpleQueue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, report):
        if self._closed.is_set():
            raise ChannelClosed("report consumer is gone")
        self._queue.put_nowait(report)

    def latest(self):
        """Most recent pending report, discarding older ones. Never blocks."""
        report = None
        while True:
            try:
                report = self._queue.get_nowait()
            except queue.Empty:
                return report

    def close(self):
        self._closed.set()
