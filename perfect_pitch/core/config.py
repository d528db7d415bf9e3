"""
Tunables for the pitch-estimation pipeline.

Every component takes a PitchConfig at construction, so tests can run the
whole pipeline with small windows and no pacing delay.
"""

from dataclasses import dataclass

NOTE_NAMES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F",
                               "F#", "G", "G#", "A", "A#", "B")


@dataclass(frozen=True)
class PitchConfig:
    """
    Attributes:
        window_size: Samples per analysis frame (FFT length).
        hop_size: Samples discarded between successive frames.
        amplitude_threshold: RMS at or below this is treated as silence.
        reference_hz: Frequency of A4 (MIDI note 69).
        min_frequency_hz: Estimates at or below this are rejected.
        pacing_delay_sec: Sleep between cycles while the buffer stays full.
        note_names: Pitch-class names, starting at C.
    """

    window_size: int = 4096
    hop_size: int = 512
    amplitude_threshold: float = 0.05
    reference_hz: float = 440.0
    min_frequency_hz: float = 20.0
    pacing_delay_sec: float = 0.005
    note_names: tuple[str, ...] = NOTE_NAMES

    def __post_init__(self) -> None:
        if self.window_size < 4 or self.window_size % 2:
            raise ValueError(f"window_size must be an even number >= 4, got {self.window_size}")
        if not 0 < self.hop_size <= self.window_size:
            raise ValueError(
                f"hop_size must be in (0, {self.window_size}], got {self.hop_size}"
            )
        if self.amplitude_threshold < 0:
            raise ValueError(f"amplitude_threshold must be non-negative, got {self.amplitude_threshold}")
        if self.reference_hz <= 0:
            raise ValueError(f"reference_hz must be positive, got {self.reference_hz}")
        if self.min_frequency_hz < 0:
            raise ValueError(f"min_frequency_hz must be non-negative, got {self.min_frequency_hz}")
        if self.pacing_delay_sec < 0:
            raise ValueError(f"pacing_delay_sec must be non-negative, got {self.pacing_delay_sec}")
        if len(self.note_names) != 12:
            raise ValueError(f"note_names needs 12 entries, got {len(self.note_names)}")

    @property
    def overlap(self) -> int:
        return self.window_size - self.hop_size


DEFAULT_CONFIG = PitchConfig()
"""4096-sample window, 512 hop, 0.05 RMS gate."""

LEGACY_CONFIG = PitchConfig(window_size=2048, hop_size=256)
"""Smaller window: faster response, coarser bins (~21.5 Hz at 44.1 kHz)."""
