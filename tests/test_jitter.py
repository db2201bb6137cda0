import numpy as np
import pytest

from tremor_check.features.jitter import (
    compute_jitter,
    ddp,
    jitter_abs,
    jitter_percent,
    ppq,
    rap,
    zero_crossing_jitter,
)


class TestJitterFamily:
    def test_constant_track_has_no_jitter(self):
        f0 = np.full(8, 150.0)
        assert jitter_percent(f0) == 0.0
        assert jitter_abs(f0) == 0.0
        assert rap(f0) == 0.0
        assert ppq(f0) == 0.0

    def test_alternating_track(self):
        f0 = np.array([100.0, 200.0, 100.0, 200.0, 100.0])
        # Периоды 10/5 мс: средняя разность 5 мс, средний период 8 мс
        assert jitter_percent(f0) == pytest.approx(62.5)
        assert jitter_abs(f0) == pytest.approx(100.0)
        assert rap(f0) == pytest.approx(0.0)
        assert ppq(f0) == pytest.approx(0.0)

    def test_rap_uses_two_step_difference(self):
        assert rap([100.0, 110.0, 130.0]) == pytest.approx(15.0)
        assert ddp([100.0, 110.0, 130.0]) == pytest.approx(30.0)

    def test_ppq_uses_four_step_difference(self):
        assert ppq([100.0, 101.0, 102.0, 103.0, 120.0]) == pytest.approx(5.0)

    def test_short_tracks_degrade_to_zero(self):
        assert jitter_percent([150.0]) == 0.0
        assert jitter_abs([150.0]) == 0.0
        assert rap([150.0, 160.0]) == 0.0
        assert ppq([150.0, 160.0, 170.0, 180.0]) == 0.0


class TestComputeJitter:
    def test_marks_insufficient_history(self):
        features = compute_jitter(np.array([100.0, 110.0]))

        assert features['jitter_abs'] == pytest.approx(10.0)
        assert features['jitter_percent'] is not None
        assert features['rap'] is None
        assert features['ppq'] is None
        assert features['ddp'] is None

    def test_empty_track(self):
        features = compute_jitter(np.array([]))
        assert all(value is None for value in features.values())


class TestZeroCrossingJitter:
    def test_regular_crossings(self):
        y = np.tile([1.0, 1.0, -1.0, -1.0], 10)
        assert zero_crossing_jitter(y, 1000) == pytest.approx(0.0)

    def test_irregular_crossings(self):
        y = np.array([1.0, -1.0, -1.0, 1.0, 1.0, 1.0, -1.0])
        # Переходы на 1, 3, 6: периоды 2 и 3 отсчёта
        assert zero_crossing_jitter(y, 1) == pytest.approx(0.5)

    def test_no_crossings(self):
        assert zero_crossing_jitter(np.ones(10), 1000) == 0.0
