import numpy as np
import pytest

from tremor_check.features import pitch as pitch_module
from tremor_check.features.framing import frame_length_for
from tremor_check.features.pitch import (
    autocorrelation,
    estimate_pitch,
    f0_statistics,
    normalize_frame,
    track_pitch,
)


class TestNormalizeFrame:
    def test_peak_becomes_one(self):
        out = normalize_frame(np.array([0.1, -0.4, 0.2]))
        assert np.max(np.abs(out)) == pytest.approx(1.0)
        assert out[1] == pytest.approx(-1.0)

    def test_silence_unchanged(self):
        out = normalize_frame(np.zeros(5))
        assert np.array_equal(out, np.zeros(5))


class TestAutocorrelation:
    def test_zero_lag_is_energy(self):
        frame = np.array([1.0, 2.0, 3.0])
        acf = autocorrelation(frame)
        assert len(acf) == 3
        assert acf[0] == pytest.approx(14.0)
        assert acf[1] == pytest.approx(8.0)
        assert acf[2] == pytest.approx(3.0)


class TestEstimatePitch:
    @pytest.mark.parametrize("sr", [16000, 44100])
    @pytest.mark.parametrize("freq", [100.0, 150.0, 220.0, 300.0, 440.0])
    def test_sine_within_one_bin(self, sine, sr, freq):
        frame_length = frame_length_for(sr)
        frame = sine(freq, sr, 1.0)[:frame_length]

        estimate = estimate_pitch(frame, sr)

        assert estimate is not None
        assert estimate == pytest.approx(freq, abs=sr / frame_length)

    def test_silent_frame_has_no_pitch(self):
        assert estimate_pitch(np.zeros(480), 16000) is None

    def test_constant_frame_has_no_peak(self):
        assert estimate_pitch(np.ones(480), 16000) is None

    def test_first_of_equal_peaks_wins(self, monkeypatch):
        acf = np.zeros(480)
        acf[0] = 1.0
        acf[100] = 0.5
        acf[200] = 0.5
        monkeypatch.setattr(pitch_module, 'autocorrelation', lambda frame: acf)

        assert estimate_pitch(np.ones(480), 16000) == pytest.approx(160.0)

    def test_highest_peak_wins(self, monkeypatch):
        acf = np.zeros(480)
        acf[0] = 1.0
        acf[100] = 0.5
        acf[200] = 0.7
        monkeypatch.setattr(pitch_module, 'autocorrelation', lambda frame: acf)

        assert estimate_pitch(np.ones(480), 16000) == pytest.approx(80.0)

    def test_peak_below_threshold_is_ignored(self, monkeypatch):
        acf = np.zeros(480)
        acf[0] = 1.0
        acf[100] = 0.15
        monkeypatch.setattr(pitch_module, 'autocorrelation', lambda frame: acf)

        assert estimate_pitch(np.ones(480), 16000) is None


class TestTrackPitch:
    def test_sine_track(self, sine):
        sr = 16000
        y = sine(200.0, sr, 0.5)

        track = track_pitch(y, sr)

        assert len(track) > 0
        assert np.all((track >= 50) & (track <= 500))
        assert np.median(track) == pytest.approx(200.0, abs=5.0)

    def test_silence_gives_empty_track(self, silence):
        y, sr = silence
        assert track_pitch(y, sr).size == 0


class TestF0Statistics:
    def test_empty_track(self):
        assert f0_statistics(np.array([])) == (0.0, 0.0, 0.0)

    def test_mean_max_min(self):
        assert f0_statistics(np.array([100.0, 200.0, 150.0])) == (150.0, 200.0, 100.0)
