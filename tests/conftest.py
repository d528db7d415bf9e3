"""
Shared fixtures: synthetic test tones and a small pipeline config.
"""

import numpy as np
import pytest

from perfect_pitch.core.config import PitchConfig

SAMPLE_RATE = 44100


def make_sine(frequency: float, n: int = 4096, amplitude: float = 0.5,
              sample_rate: int = SAMPLE_RATE, start: int = 0) -> np.ndarray:
    """amplitude * sin(2*pi*f*t) for samples start .. start+n-1, float32."""
    t = (np.arange(n) + start) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


@pytest.fixture
def sine():
    return make_sine


@pytest.fixture
def no_pacing_config() -> PitchConfig:
    return PitchConfig(pacing_delay_sec=0.0)
