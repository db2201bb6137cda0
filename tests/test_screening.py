import pytest

from tremor_check.config import Settings
from tremor_check.pipeline import FeatureResult, extract_features
from tremor_check.screening import TremorAssessment, assess_phrases, is_tremor_suspected


def phrase(jitter: float, shimmer: float) -> FeatureResult:
    return FeatureResult(values={'jitter_percent': jitter, 'shimmer_percent': shimmer})


class TestThresholds:
    def test_jitter_at_threshold_is_not_flagged(self):
        assessment = assess_phrases([phrase(20.0, 0.0)])
        assert not assessment.tremor_detected

    def test_jitter_above_threshold_is_flagged(self):
        assessment = assess_phrases([phrase(20.01, 0.0)])
        assert assessment.tremor_detected

    def test_shimmer_at_threshold_is_not_flagged(self):
        assessment = assess_phrases([phrase(0.0, 25.0)])
        assert not assessment.tremor_detected

    def test_shimmer_above_threshold_is_flagged(self):
        assessment = assess_phrases([phrase(0.0, 25.01)])
        assert assessment.tremor_detected

    def test_either_metric_suffices(self):
        assert is_tremor_suspected(21.0, 0.0, 20.0, 25.0)
        assert is_tremor_suspected(0.0, 26.0, 20.0, 25.0)
        assert not is_tremor_suspected(20.0, 25.0, 20.0, 25.0)


class TestAveraging:
    def test_means_over_phrases(self):
        assessment = assess_phrases([phrase(10.0, 20.0), phrase(20.0, 30.0), phrase(30.0, 10.0)])

        assert assessment.average_jitter == pytest.approx(20.0)
        assert assessment.average_shimmer == pytest.approx(20.0)
        assert assessment.n_phrases == 3
        assert not assessment.tremor_detected

    def test_one_outlying_phrase_raises_average(self):
        assessment = assess_phrases([phrase(5.0, 5.0), phrase(5.0, 5.0), phrase(60.0, 5.0)])
        assert assessment.average_jitter == pytest.approx(70.0 / 3)
        assert assessment.tremor_detected

    def test_undefined_metrics_count_as_zero(self, silence):
        y, sr = silence
        assessment = assess_phrases([extract_features(y, sr), phrase(30.0, 0.0)])
        assert assessment.average_jitter == pytest.approx(15.0)
        assert not assessment.tremor_detected

    def test_empty_input(self):
        with pytest.raises(ValueError):
            assess_phrases([])


class TestSettingsOverride:
    def test_lower_thresholds(self):
        custom = Settings(jitter_tremor_threshold=1.0, shimmer_tremor_threshold=1.0)
        assessment = assess_phrases([phrase(1.5, 0.0)], settings=custom)
        assert assessment.tremor_detected

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv('TC_SHIMMER_TREMOR_THRESHOLD', '50')
        assessment = assess_phrases([phrase(0.0, 40.0)], settings=Settings())
        assert not assessment.tremor_detected


class TestTremorAssessment:
    def test_summary(self):
        positive = TremorAssessment(25.0, 10.0, True, 2)
        negative = TremorAssessment(1.0, 2.0, False, 2)
        assert positive.summary().startswith('Возможен тремор')
        assert 'фраз: 2' in negative.summary()
        assert negative.summary().startswith('Признаков тремора не обнаружено')

    def test_as_dict(self):
        assert assess_phrases([phrase(1.0, 2.0)]).as_dict() == {
            'average_jitter': 1.0,
            'average_shimmer': 2.0,
            'tremor_detected': False,
            'n_phrases': 1,
        }
