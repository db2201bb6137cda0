import numpy as np

from tremor_check.features.outliers import remove_outliers


class TestRemoveOutliers:
    def test_short_sequences_unchanged(self):
        for values in ([], [1.0], [1.0, 1000.0], [5.0, 1.0, 900.0, 2.0]):
            assert np.array_equal(remove_outliers(values), np.array(values, dtype=float))

    def test_single_high_outlier_removed(self):
        out = remove_outliers([100.0, 101.0, 102.0, 103.0, 500.0])
        assert np.array_equal(out, [100.0, 101.0, 102.0, 103.0])

    def test_preserves_original_order(self):
        out = remove_outliers([103.0, 100.0, 500.0, 101.0, 102.0])
        assert np.array_equal(out, [103.0, 100.0, 101.0, 102.0])

    def test_bounds_are_inclusive(self):
        # Q1=101, Q3=103, IQR=2 -> верхняя граница 106
        out = remove_outliers([100.0, 101.0, 102.0, 103.0, 106.0])
        assert len(out) == 5

    def test_low_outlier_removed(self):
        out = remove_outliers([10.0, 200.0, 201.0, 202.0, 203.0, 204.0])
        assert 10.0 not in out
        assert len(out) == 5
