from dataclasses import dataclass


@dataclass(frozen=True)
class PitchReport:
    """One analysis cycle's result, handed by value to the display side."""
    note: str
    octave: int
    frequency: float
    cents: float
    amplitude: float

    @property
    def is_pitched(self) -> bool:
        return self.frequency > 0

    @property
    def label(self) -> str:
        if not self.is_pitched:
            return NO_PITCH_LABEL
        return f"{self.note}{self.octave}"


NO_PITCH_LABEL = "--"

# Emitted when a cycle finds nothing (silence or sub-floor estimate).
NO_PITCH = PitchReport(note=NO_PITCH_LABEL, octave=0, frequency=0.0, cents=0.0, amplitude=0.0)
