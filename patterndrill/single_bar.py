"""
Single bar generation.

Each generator places open/high/low/close so the bar satisfies its classification rule by
construction; no verification pass runs afterwards.

- **Pin**: body sits in the top third (bullish) or bottom third (bearish) of the range
- **Mark Up/Down**: body covers at least two thirds of the range, color carries the sentiment
- **Ice Cream**: body is half the range, the close sits in the top or bottom third
- **Other**: small body in the middle third, no directional meaning
"""

from .base import Component
from .patterns import Bar, BarType

# Single bars are drawn inside -90..90 so a full-size bar never touches the visible edge
MAX_PRICE = 90.0
MIN_PRICE = -90.0
WORLD_RANGE = MAX_PRICE - MIN_PRICE


class SingleBarGenerator(Component):
    """
    Generate one classified bar.

    The `scale` argument of the EXE generators shrinks the world range so pattern assemblers
    can request EXE bars sized to their surroundings.
    """

    def generate(self, bar_type: BarType | None = None, is_bullish: bool | None = None) -> Bar:
        """
        Generate a bar of the requested type.

        Args:
            bar_type: Forced bar type, or None for a random bar
            is_bullish: Sentiment for EXE types (random when None, ignored for OTHER)

        Returns:
            Generated Bar
        """
        if bar_type is None:
            return self.generate_random()
        if bar_type == BarType.OTHER:
            return self.generate_other()

        sentiment = self._resolve_sentiment(is_bullish)
        if bar_type == BarType.PIN:
            return self.generate_pin(sentiment)
        if bar_type == BarType.MARK:
            return self.generate_mark(sentiment)
        if bar_type == BarType.ICE_CREAM:
            return self.generate_ice_cream(sentiment)
        raise ValueError(f"Unsupported bar type: {bar_type}")

    def _range(self, low_fraction: float, high_fraction: float, scale: float) -> tuple[float, float, float]:
        """Draw a bar range and place it inside the world band. Returns (low, high, range)."""
        world = WORLD_RANGE * scale
        span = self.source.uniform(world * low_fraction, world * high_fraction)
        low = self.source.uniform(MIN_PRICE, MAX_PRICE - span)
        return low, low + span, span

    def generate_pin(self, is_bullish: bool, scale: float = 1.0) -> Bar:
        """
        Generate a Pin Bar.

        Sentiment is determined by the POSITION of the body, not its color. The body edge on the
        sentiment side is the bar extreme itself; the other edge falls anywhere in that third.
        """
        low, high, span = self._range(0.5, 0.9, scale)
        one_third = span / 3

        if is_bullish:
            anchor = high
            edge = self.source.uniform(high - one_third, high)
        else:
            anchor = low
            edge = self.source.uniform(low + one_third, low)

        # Which of open/close sits on the extreme only decides the color
        if self.source.chance(0.5):
            open_, close = edge, anchor
        else:
            open_, close = anchor, edge

        return Bar(open=open_, high=high, low=low, close=close, label=BarType.PIN)

    def generate_mark(self, is_bullish: bool, scale: float = 1.0) -> Bar:
        """
        Generate a Mark Up/Down Bar.

        Sentiment is determined by the COLOR of the body. Body is at least 2/3 of the range.
        """
        low, high, span = self._range(0.7, 0.95, scale)
        body = span * self.source.uniform(2 / 3, 0.9)

        if is_bullish:
            open_ = self.source.uniform(low, high - body)
            close = min(open_ + body, high)
        else:
            open_ = self.source.uniform(low + body, high)
            close = max(open_ - body, low)

        return Bar(open=open_, high=high, low=low, close=close, label=BarType.MARK)

    def generate_ice_cream(self, is_bullish: bool, scale: float = 1.0) -> Bar:
        """
        Generate an Ice Cream Bar.

        Sentiment is determined by the POSITION of the close: top third when bullish, bottom
        third when bearish. The half-range body extends from the close back into the bar.
        """
        low, high, span = self._range(0.5, 0.9, scale)
        body = span / 2

        if is_bullish:
            close = self.source.uniform(high - span / 3, high)
            open_ = max(close - body, low)
        else:
            close = self.source.uniform(low, low + span / 3)
            open_ = min(close + body, high)

        return Bar(open=open_, high=high, low=low, close=close, label=BarType.ICE_CREAM)

    def generate_other(self, scale: float = 1.0) -> Bar:
        """Generate an indecisive bar: a small body centered in the middle third."""
        low, high, span = self._range(0.3, 0.6, scale)

        body = self.source.uniform(span * 0.05, span * 0.25)
        bottom = self.source.uniform(low + span / 3, high - span / 3 - body)
        top = bottom + body

        if self.source.chance(0.5):
            open_, close = bottom, top
        else:
            open_, close = top, bottom

        return Bar(open=open_, high=high, low=low, close=close, label=BarType.OTHER)

    def generate_exe(self, is_bullish: bool, scale: float = 1.0) -> Bar:
        """Generate a Pin, Mark or Ice Cream bar, chosen uniformly."""
        generators = (self.generate_pin, self.generate_mark, self.generate_ice_cream)
        return self.source.choice(generators)(is_bullish, scale)

    def generate_random(self) -> Bar:
        """Generate an EXE bar with random sentiment or an Other bar, 50/50."""
        if self.source.random() > 0.5:
            return self.generate_exe(self.source.random() > 0.5)
        return self.generate_other()
