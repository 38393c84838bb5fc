"""Tests for max-envelope downsampling."""

import math
import random

import pytest

from tgph.charting.compress import compress, compute_stride


class TestComputeStride:
    def test_at_least_one(self):
        assert compute_stride(10, 100) == 1
        assert compute_stride(0, 100) == 1

    def test_floor_division(self):
        assert compute_stride(100, 50) == 2
        assert compute_stride(101, 50) == 2
        assert compute_stride(149, 50) == 2
        assert compute_stride(150, 50) == 3

    @pytest.mark.parametrize("width", [0, -5])
    def test_rejects_non_positive_width(self, width):
        with pytest.raises(ValueError, match="target_width"):
            compute_stride(10, width)


class TestCompress:
    def test_unchanged_when_shorter_than_width(self):
        series = [3.0, 1.0, 2.0]
        assert compress(series, 10) == series

    def test_unchanged_when_equal_to_width(self):
        series = list(range(50))
        assert compress(series, 50) == series

    def test_unchanged_when_stride_is_one(self):
        series = list(range(99))
        assert compress(series, 50) == series

    def test_pairs(self):
        raw = [float(i) for i in range(100)]
        out = compress(raw, 50)
        assert len(out) == 50
        assert out == [max(raw[2 * i], raw[2 * i + 1]) for i in range(50)]

    def test_partial_last_window(self):
        assert compress([1, 5, 2, 2, 9, 0, 7], 3) == [5, 2, 9, 7]

    def test_preserves_spike(self):
        raw = [0.0] * 1000
        raw[537] = 100.0
        out = compress(raw, 100)
        assert max(out) == 100.0
        assert out.count(100.0) == 1

    def test_empty(self):
        assert compress([], 10) == []

    def test_nan_skipped_in_window(self):
        assert compress([math.nan, 1.0, 3.0, math.nan], 2) == [1.0, 3.0]

    def test_all_nan_window_stays_nan(self):
        out = compress([math.nan, math.nan, 2.0, 4.0], 2)
        assert math.isnan(out[0])
        assert out[1] == 4.0

    def test_infinity_is_a_maximum(self):
        assert compress([1.0, math.inf, 2.0, 3.0], 2) == [math.inf, 3.0]

    def test_does_not_mutate_input(self):
        raw = [4, 3, 2, 1]
        compress(raw, 2)
        assert raw == [4, 3, 2, 1]

    def test_length_and_window_max_properties(self):
        rng = random.Random(7)
        for _ in range(50):
            n = rng.randint(1, 2000)
            width = rng.randint(1, 400)
            raw = [rng.uniform(-50, 50) for _ in range(n)]
            stride = max(1, n // width)

            out = compress(raw, width)

            assert len(out) == math.ceil(n / stride)
            for i, value in enumerate(out):
                assert value == max(raw[i * stride : (i + 1) * stride])
