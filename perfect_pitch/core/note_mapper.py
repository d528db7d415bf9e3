import math

from perfect_pitch.core.config import PitchConfig

A4_MIDI = 69


def frequency_to_midi(frequency_hz: float, reference_hz: float = 440.0) -> float:
    """Continuous MIDI note number; A4 = reference_hz = 69."""
    return 12.0 * math.log2(frequency_hz / reference_hz) + A4_MIDI


def nearest_note(note_number: float) -> int:
    # Halves round down so cents land in (-50, 50].
    return math.ceil(note_number - 0.5)


class NoteMapper:
    """Maps a frequency to (note name, octave, cents deviation).

    Octaves follow the MIDI 60 = C4 convention.
    """

    def __init__(self, config: PitchConfig):
        self.reference_hz = config.reference_hz
        self.note_names = config.note_names

    def map(self, frequency_hz: float) -> tuple[str, int, float]:
        if not frequency_hz > 0:
            raise ValueError(f"frequency must be positive, got {frequency_hz}")
        note_number = frequency_to_midi(frequency_hz, self.reference_hz)
        nearest = nearest_note(note_number)
        cents = (note_number - nearest) * 100.0
        # Python's % is already non-negative for a positive divisor.
        name = self.note_names[nearest % 12]
        octave = nearest // 12 - 1
        return name, octave, cents
