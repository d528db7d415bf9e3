import logging

import numpy as np
import pyaudio

from perfect_pitch.input.channels import SampleChannel

logger = logging.getLogger(__name__)


class MicListener:
    """
    Captures mono float32 audio from the default input device and forwards
    every hardware buffer to a SampleChannel.

    The PyAudio callback runs on PortAudio's own thread, so it only converts
    and enqueues; it never blocks and never raises.
    """

    def __init__(self, sample_channel: SampleChannel, buffer_size: int = 1024, sample_rate: int | None = None):
        self.sample_channel = sample_channel
        self.BUFFER_SIZE = buffer_size
        self.FORMAT = pyaudio.paFloat32
        self.sample_rate = sample_rate
        self.device_name = None
        self.overflows = 0
        self.is_running = False
        self._pa = None
        self._stream = None

    def _callback(self, in_data, frame_count, time_info, status):
        if status & pyaudio.paInputOverflow:
            self.overflows += 1
        self.sample_channel.send(np.frombuffer(in_data, dtype=np.float32))
        return None, pyaudio.paContinue

    def start(self) -> int:
        """Open the input stream. Returns the sample rate actually in use."""
        if self.is_running:
            return self.sample_rate
        self._pa = pyaudio.PyAudio()
        try:
            device = self._pa.get_default_input_device_info()
            self.device_name = device.get("name")
            if self.sample_rate is None:
                self.sample_rate = int(device["defaultSampleRate"])
            self._stream = self._pa.open(format=self.FORMAT, channels=1, rate=self.sample_rate,
                                         input=True, frames_per_buffer=self.BUFFER_SIZE,
                                         stream_callback=self._callback)
            self._stream.start_stream()
        except OSError as e:
            logger.error("Could not open input stream: %s", e)
            self._shutdown()
            raise
        self.is_running = True
        logger.info("Listening on %r at %d Hz", self.device_name, self.sample_rate)
        return self.sample_rate

    def is_active(self) -> bool:
        """False once the device has stopped delivering audio, e.g. after a failure."""
        return self._stream is not None and self._stream.is_active()

    def stop(self):
        if not self.is_running:
            return
        self.is_running = False
        self._shutdown()
        if self.overflows:
            logger.warning("Input overflowed %d times; some samples were lost", self.overflows)
        logger.info("Listening stopped")

    def _shutdown(self):
        if self._stream is not None:
            try:
                if self._stream.is_active():
                    self._stream.stop_stream()
                self._stream.close()
            except OSError as e:
                logger.error("Error closing input stream: %s", e)
            self._stream = None
        if self._pa is not None:
            self._pa.terminate()
            self._pa = None
        # Lets the engine see end of stream instead of waiting forever.
        self.sample_channel.close()
