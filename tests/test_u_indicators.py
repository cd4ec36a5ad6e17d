"""
Unit tests for trailing moving average computation.
"""

import pandas as pd
import polars as pl
import pytest

from patterndrill.indicators import TrendIndicatorCalculator
from patterndrill.schemas import TrendConfig


@pytest.mark.unit
class TestCalculate:
    """Test cases for TrendIndicatorCalculator.calculate."""

    @pytest.fixture
    def calculator(self):
        return TrendIndicatorCalculator()

    def test_default_windows(self, calculator):
        assert calculator.windows == (20, 50)

    def test_simple_average(self, calculator):
        result = calculator.calculate([1.0, 2.0, 3.0, 4.0, 5.0], 3)

        assert result[:2] == [None, None]
        assert result[2:] == pytest.approx([2.0, 3.0, 4.0])

    def test_leading_entries_undefined(self, calculator):
        closes = [float(i) for i in range(60)]
        result = calculator.calculate(closes, 20)

        assert len(result) == 60
        for index, value in enumerate(result):
            assert (value is None) == (index < 19)
        assert result[19] == pytest.approx(sum(range(20)) / 20)

    def test_window_longer_than_series(self, calculator):
        assert calculator.calculate([1.0, 2.0], 5) == [None, None]

    def test_window_of_one_is_identity(self, calculator):
        assert calculator.calculate([3.0, -1.0, 2.5], 1) == pytest.approx([3.0, -1.0, 2.5])

    def test_invalid_window(self, calculator):
        with pytest.raises(ValueError, match="window must be at least 1"):
            calculator.calculate([1.0, 2.0], 0)

    def test_pandas_input(self, calculator):
        result = calculator.calculate(pd.Series([2.0, 4.0, 6.0]), 2)

        assert result[0] is None
        assert result[1:] == pytest.approx([3.0, 5.0])

    def test_polars_input(self, calculator):
        result = calculator.calculate(pl.Series("x", [2, 4, 6]), 2)

        assert result[1:] == pytest.approx([3.0, 5.0])

    def test_tuple_input(self, calculator):
        assert calculator.calculate((1.0, 3.0), 2)[1] == pytest.approx(2.0)

    @pytest.mark.parametrize("data", [42, "1,2,3", {"close": [1.0]}])
    def test_unsupported_input(self, calculator, data):
        with pytest.raises(TypeError, match="Unsupported data type"):
            calculator.calculate(data, 2)


@pytest.mark.unit
class TestProcess:
    """Test cases for warm-up aware processing."""

    @pytest.fixture
    def calculator(self):
        return TrendIndicatorCalculator(TrendConfig(short_window=2, long_window=3, precursor_bars=3))

    def test_precursor_is_dropped(self, calculator):
        result = calculator.process([1.0, 2.0, 3.0], [4.0, 5.0])

        assert set(result) == {2, 3}
        assert result[2] == pytest.approx([3.5, 4.5])
        assert result[3] == pytest.approx([3.0, 4.0])

    def test_output_aligned_with_visible(self, calculator):
        result = calculator.process([1.0] * 10, [2.0] * 7)

        assert len(result[2]) == 7
        assert len(result[3]) == 7
        assert None not in result[3]

    def test_empty_precursor(self, calculator):
        result = calculator.process([], [1.0, 2.0, 3.0])

        assert result[2][0] is None
        assert result[3][:2] == [None, None]
        assert result[3][2] == pytest.approx(2.0)

    def test_mixed_input_types(self, calculator):
        result = calculator.process(pd.Series([1.0, 2.0, 3.0]), pl.Series([4.0, 5.0]))

        assert result[2] == pytest.approx([3.5, 4.5])
