import math

import music21
import pytest

from perfect_pitch.core.config import NOTE_NAMES, PitchConfig
from perfect_pitch.core.note_mapper import NoteMapper, frequency_to_midi, nearest_note


@pytest.fixture
def mapper():
    return NoteMapper(PitchConfig())


class TestReferencePitches:
    @pytest.mark.parametrize("frequency, name, octave", [
        (440.0, "A", 4),
        (880.0, "A", 5),
        (220.0, "A", 3),
        (261.63, "C", 4),
        (27.5, "A", 0),
        (4186.01, "C", 8),
    ])
    def test_known_notes(self, mapper, frequency, name, octave):
        got_name, got_octave, cents = mapper.map(frequency)
        assert (got_name, got_octave) == (name, octave)
        assert cents == pytest.approx(0.0, abs=0.1)

    def test_a4_is_exact(self, mapper):
        assert mapper.map(440.0) == ("A", 4, 0.0)

    def test_repeatable(self, mapper):
        assert mapper.map(329.0) == mapper.map(329.0)


class TestCents:
    def test_sharp_and_flat(self, mapper):
        _, _, sharp = mapper.map(440.0 * 2 ** (20 / 1200))
        _, _, flat = mapper.map(440.0 * 2 ** (-30 / 1200))
        assert sharp == pytest.approx(20.0, abs=1e-6)
        assert flat == pytest.approx(-30.0, abs=1e-6)

    def test_range(self, mapper):
        for i in range(200):
            frequency = 50.0 * 2 ** (i / 37)
            _, _, cents = mapper.map(frequency)
            assert -50.0 < cents <= 50.0

    def test_halfway_rounds_down(self):
        assert nearest_note(69.5) == 69
        assert nearest_note(-8.5) == -9
        assert nearest_note(69.51) == 70

    def test_custom_reference(self):
        mapper = NoteMapper(PitchConfig(reference_hz=442.0))
        assert mapper.map(442.0) == ("A", 4, 0.0)
        _, _, cents = mapper.map(440.0)
        assert cents == pytest.approx(1200 * math.log2(440 / 442), abs=1e-6)


class TestOctaveBoundaries:
    def test_multiples_of_twelve_are_c(self, mapper):
        for midi in range(0, 128, 12):
            frequency = 440.0 * 2 ** ((midi - 69) / 12)
            name, octave, _ = mapper.map(frequency)
            assert name == "C"
            assert octave == midi // 12 - 1

    def test_b_to_c_crossing(self, mapper):
        assert mapper.map(246.94)[:2] == ("B", 3)
        assert mapper.map(261.63)[:2] == ("C", 4)

    def test_negative_note_numbers(self, mapper):
        # 5 Hz is MIDI ~ -8.5
        assert frequency_to_midi(5.0) < 0
        name, octave, cents = mapper.map(5.0)
        assert name in NOTE_NAMES
        assert name == "D#"
        assert octave == -2
        assert -50.0 < cents <= 50.0

    def test_very_low_frequency_pitch_class_in_range(self, mapper):
        for frequency in (0.01, 0.1, 1.0, 3.3, 8.0):
            name, _, _ = mapper.map(frequency)
            assert name in NOTE_NAMES


class TestEqualTemperedNotes:
    @pytest.mark.parametrize("octave", range(0, 9))
    def test_every_tempered_note_maps_to_itself(self, mapper, octave):
        for index, name in enumerate(NOTE_NAMES):
            midi = (octave + 1) * 12 + index
            frequency = 440.0 * 2 ** ((midi - 69) / 12)
            name_out, octave_out, cents = mapper.map(frequency)
            assert (name_out, octave_out) == (name, octave)
            assert cents == pytest.approx(0.0, abs=1e-6)


class TestAgainstMusic21:
    @pytest.mark.parametrize("frequency", [32.7, 55.0, 98.0, 146.83, 233.08, 311.13, 440.0, 739.99, 1244.5, 3951.07])
    def test_label_names_the_nearest_pitch(self, mapper, frequency):
        name, octave, cents = mapper.map(frequency)
        pitch = music21.pitch.Pitch(f"{name}{octave}")
        assert pitch.midi == nearest_note(frequency_to_midi(frequency))
        assert abs(1200 * math.log2(frequency / pitch.frequency)) <= 50.0
        assert 1200 * math.log2(frequency / pitch.frequency) == pytest.approx(cents, abs=1e-3)


def test_rejects_non_positive(mapper):
    with pytest.raises(ValueError):
        mapper.map(0.0)
    with pytest.raises(ValueError):
        mapper.map(-440.0)
