"""
Trailing moving averages over closing prices.

Averages are computed with Polars rolling windows. Patterns that need a trend context pass the
closes of their invisible warm-up bars as well, so every visible bar can carry a full average.
"""

from collections.abc import Sequence

from pandas import Series as PandasSeries
from polars import Float64, concat, from_pandas
from polars import Series as PolarsSeries

from .schemas import TrendConfig


class TrendIndicatorCalculator:
    """Simple moving averages for the short and long trend windows."""

    def __init__(self, config: TrendConfig | None = None):
        """
        Initialize the calculator.

        Args:
            config: Validated TrendConfig with the short and long windows
        """
        self.config = config if config is not None else TrendConfig()

    @property
    def windows(self) -> tuple[int, int]:
        return self.config.short_window, self.config.long_window

    def calculate(self, closes: Sequence[float] | PolarsSeries | PandasSeries, window: int) -> list[float | None]:
        """
        Trailing simple moving average.

        Args:
            closes: Closing prices in time order
            window: Number of closes per average

        Returns:
            List aligned with `closes`; entry `i` is None while `i < window - 1`, otherwise the
            mean of the `window` closes ending at `i`
        """
        if window < 1:
            raise ValueError(f"window must be at least 1, got {window}")

        series = self._convert_to_polars(closes)
        return series.rolling_mean(window_size=window).to_list()

    def process(
        self,
        precursor_closes: Sequence[float] | PolarsSeries | PandasSeries,
        visible_closes: Sequence[float] | PolarsSeries | PandasSeries,
    ) -> dict[int, list[float | None]]:
        """
        Compute both averages over warm-up plus visible history.

        The averages run over `precursor_closes + visible_closes`; the precursor prefix is then
        dropped so each returned list aligns 1:1 with the visible closes.

        Returns:
            Mapping of window size to the visible slice of its moving average
        """
        precursor = self._convert_to_polars(precursor_closes)
        visible = self._convert_to_polars(visible_closes)
        history = concat([precursor, visible])
        offset = len(precursor)

        return {
            window: history.rolling_mean(window_size=window).slice(offset).to_list() for window in self.windows
        }

    def _convert_to_polars(self, data: Sequence[float] | PolarsSeries | PandasSeries) -> PolarsSeries:
        """
        Convert a price series to a Float64 Polars Series named `close`.

        Raises:
            TypeError: For inputs that are not a sequence or a Pandas/Polars Series
        """
        if isinstance(data, PandasSeries):
            return from_pandas(data).cast(Float64).alias("close")
        elif isinstance(data, PolarsSeries):
            return data.cast(Float64).alias("close")
        elif isinstance(data, Sequence) and not isinstance(data, str):
            return PolarsSeries("close", list(data), dtype=Float64)
        else:
            raise TypeError(f"Unsupported data type: {type(data)}. Expected a sequence, pandas.Series or polars.Series")
