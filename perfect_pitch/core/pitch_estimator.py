"""
Dominant-peak pitch estimation from a magnitude spectrum.

Steps, per frame:
    1. Silence gate: RMS at or below the threshold means no pitch.
    2. Peak search over bins 1..N/2-1 (DC skipped); the first maximum wins.
    3. Parabolic interpolation through the natural log of the peak magnitude
       and its two neighbours, only for interior peaks and non-degenerate
       curvature.
    4. bin -> Hz: bin * sample_rate / window_size.
    5. Reject estimates at or below the audible floor.

At 44.1 kHz a 4096-point bin is ~10.8 Hz wide, which is about 42 cents at
A4 and more than a semitone below ~180 Hz. Interpolation is what makes the
reading usable for tuning.

The parabola is fitted to log magnitudes: the Hann main lobe is close to a
parabola in dB, so the vertex bias stays under ~0.02 bin. On linear
magnitudes the same fit is off by up to ~0.05 bin, over a cent at A4.
Magnitudes are floored at _LOG_FLOOR before the log.
"""

from __future__ import annotations

import math

import numpy as np

from perfect_pitch.core.config import PitchConfig

# Curvature below this is treated as flat: no refinement.
_MIN_CURVATURE = 1e-12
_LOG_FLOOR = 1e-12


def parabolic_offset(left: float, center: float, right: float) -> float:
    """Vertex offset of the parabola through three equally spaced points.

    Returns 0.0 when the points are (nearly) collinear or any input is
    non-finite, so the caller falls back to the integer bin.
    """
    denominator = left - 2.0 * center + right
    if not math.isfinite(denominator) or abs(denominator) < _MIN_CURVATURE:
        return 0.0
    offset = 0.5 * (left - right) / denominator
    if not math.isfinite(offset):
        return 0.0
    return offset


def refine_peak(spectrum: np.ndarray, peak_index: int) -> float:
    """Sub-bin peak position from log magnitudes. Edge bins are returned unrefined."""
    if not 0 < peak_index < len(spectrum) - 1:
        return float(peak_index)
    neighbourhood = np.asarray(spectrum[peak_index - 1:peak_index + 2], dtype=np.float64)
    left, center, right = np.log(np.maximum(neighbourhood, _LOG_FLOOR))
    return peak_index + parabolic_offset(float(left), float(center), float(right))


def find_peak(spectrum: np.ndarray) -> int | None:
    """Index of the largest magnitude in bins 1.., first occurrence on ties."""
    if len(spectrum) < 2:
        return None
    # argmax returns the first maximum, which is the tie-break we want.
    return int(np.argmax(spectrum[1:])) + 1


class PitchEstimator:
    def __init__(self, config: PitchConfig):
        self.window_size = config.window_size
        self.min_frequency_hz = config.min_frequency_hz

    def estimate(self, spectrum: np.ndarray, rms: float, amplitude_threshold: float,
                 sample_rate: float) -> tuple[float, float] | None:
        """Returns (frequency_hz, rms), or None when there is no pitch."""
        if not math.isfinite(rms) or rms <= amplitude_threshold:
            return None

        spectrum = np.asarray(spectrum)
        if not np.all(np.isfinite(spectrum)):
            return None

        peak_index = find_peak(spectrum)
        if peak_index is None:
            return None

        position = refine_peak(spectrum, peak_index)
        frequency = position * sample_rate / self.window_size

        if not math.isfinite(frequency) or frequency <= self.min_frequency_hz:
            return None
        return frequency, rms
