"""
The processing loop: samples in, one PitchReport out per analysis cycle.

    FILLING --(buffer full)--> READY --> ANALYZING --(hop discarded)--> READY ...
                                                    `--(buffer short)--> FILLING

The loop ends (STOPPED) when the sample channel is closed and the buffer can
no longer fill, or when the report consumer has gone away. Neither is an
error.
"""

from __future__ import annotations

import enum
import logging
import time

from perfect_pitch.core.config import DEFAULT_CONFIG, PitchConfig
from perfect_pitch.core.note_mapper import NoteMapper
from perfect_pitch.core.pitch_estimator import PitchEstimator
from perfect_pitch.core.sample_buffer import SampleBuffer
from perfect_pitch.core.spectral import SpectralAnalyzer
from perfect_pitch.core.types import NO_PITCH, PitchReport
from perfect_pitch.input.channels import ChannelClosed

logger = logging.getLogger(__name__)


class EngineState(enum.Enum):
    FILLING = "filling"
    READY = "ready"
    ANALYZING = "analyzing"
    STOPPED = "stopped"


class PitchEngine:
    def __init__(self, sample_rate: float, samples, reports,
                 config: PitchConfig = DEFAULT_CONFIG, sleep=time.sleep):
        if not sample_rate > 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        self.sample_rate = float(sample_rate)
        self.samples = samples
        self.reports = reports
        self.config = config
        self._sleep = sleep

        self.buffer = SampleBuffer(config.window_size)
        self.analyzer = SpectralAnalyzer(config)
        self.estimator = PitchEstimator(config)
        self.mapper = NoteMapper(config)

        self.state = EngineState.FILLING
        self.cycles = 0
        self.stop_reason: str | None = None
        self._input_closed = False

    def process_frame(self, frame) -> PitchReport:
        """One estimation cycle over a full window. Does not touch the buffer."""
        spectrum, rms = self.analyzer.analyze_frame(frame)
        estimate = self.estimator.estimate(spectrum, rms, self.config.amplitude_threshold,
                                           self.sample_rate)
        if estimate is None:
            return NO_PITCH
        frequency, amplitude = estimate
        note, octave, cents = self.mapper.map(frequency)
        return PitchReport(note=note, octave=octave, frequency=frequency,
                           cents=cents, amplitude=amplitude)

    def _stop(self, reason: str):
        self.state = EngineState.STOPPED
        self.stop_reason = reason
        logger.info("Pitch engine stopped after %d cycles: %s", self.cycles, reason)

    def _fill(self):
        batches, closed = self.samples.drain()
        for batch in batches:
            self.buffer.extend(batch)
        if closed:
            self._input_closed = True

    def step(self) -> bool:
        """Run one loop iteration. Returns False once the engine has stopped."""
        if self.state is EngineState.STOPPED:
            return False

        self._fill()

        if not self.buffer.is_ready():
            self.state = EngineState.FILLING
            if self._input_closed:
                self._stop("input closed")
                return False
            # Block for more input instead of spinning while the window fills.
            batch = self.samples.recv()
            if batch is None:
                self._input_closed = True
            else:
                self.buffer.extend(batch)
            return True

        self.state = EngineState.ANALYZING
        report = self.process_frame(self.buffer.snapshot())
        self.cycles += 1
        try:
            self.reports.send(report)
        except ChannelClosed:
            self._stop("report consumer gone")
            return False
        logger.debug("cycle %d: %s %.2f Hz %+.1f cents rms=%.4f", self.cycles,
                     report.label, report.frequency, report.cents, report.amplitude)

        self.buffer.advance(self.config.hop_size)
        self.state = EngineState.READY if self.buffer.is_ready() else EngineState.FILLING
        if self.config.pacing_delay_sec:
            self._sleep(self.config.pacing_delay_sec)
        return True

    def run(self):
        logger.info("Pitch engine started: %.0f Hz, window %d, hop %d",
                    self.sample_rate, self.config.window_size, self.config.hop_size)
        while self.step():
            pass
