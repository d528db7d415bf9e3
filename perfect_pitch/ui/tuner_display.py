"""
What a tuner screen shows, updated once per refresh tick.

Runs on the display's schedule, not the engine's: each tick takes only the
newest report and lets the level meter decay between reports.
"""

from perfect_pitch.core.config import DEFAULT_CONFIG, PitchConfig
from perfect_pitch.core.types import NO_PITCH_LABEL, PitchReport

AMPLITUDE_DECAY = 0.95
CENTS_SMOOTHING = 0.2
LEVEL_SCALE = 5.0


class TunerDisplay:
    def __init__(self, config: PitchConfig = DEFAULT_CONFIG):
        self.threshold = config.amplitude_threshold
        self.note_text = NO_PITCH_LABEL
        self.freq_text = "0.0 Hz"
        self.amplitude = 0.0
        self.cents = 0.0

    @property
    def is_active(self) -> bool:
        return self.amplitude > self.threshold

    @property
    def level(self) -> float:
        """Meter position in [0, 1]."""
        return min(max(self.amplitude * LEVEL_SCALE, 0.0), 1.0)

    def apply(self, report: PitchReport | None):
        """Fold in one tick's report (None when nothing new arrived)."""
        if report is None:
            if self.amplitude > 0.0:
                self.amplitude *= AMPLITUDE_DECAY
            return

        if report.amplitude <= self.threshold or not report.is_pitched:
            self.amplitude = 0.0
            return

        if report.label != self.note_text:
            self.cents = report.cents
        else:
            self.cents += CENTS_SMOOTHING * (report.cents - self.cents)
        self.note_text = report.label
        self.freq_text = f"{report.frequency:.1f} Hz"
        self.amplitude = report.amplitude

    def tick(self, reports):
        """Read the newest pending report from a ReportChannel and apply it."""
        self.apply(reports.latest())

    def render_text(self) -> str:
        if not self.is_active:
            return f"{self.note_text:>4}  {self.freq_text:>10}  (quiet)"
        bar = "#" * round(self.level * 20)
        return f"{self.note_text:>4}  {self.freq_text:>10}  {self.cents:+5.1f} cents  |{bar:<20}|"
