"""
Approach-and-reversal cluster construction.

Every breakout-style pattern ends with a short run of bars that pushes through a level and a
terminal bar that reverses back across it. This module builds those clusters and holds the
sequential bar primitives the pattern assemblers share. All sequences keep price continuity:
each bar opens exactly at the previous bar's close.
"""

from .base import Component
from .patterns import Bar, BarType
from .random_source import RandomSource
from .schemas import GeneratorConfig
from .single_bar import SingleBarGenerator

# Wick padding added beyond the body of plain sequential bars
PAD_RANGE = (0.5, 2.5)
# Smallest wick on either side of a repositioned bar
MIN_WICK = 0.25

DEFAULT_STEP_RANGE = (5.0, 15.0)
DEFAULT_MARGIN_RANGE = (2.0, 10.0)


class ReversalClusterBuilder(Component):
    """
    Build the approach + reversal bar cluster shared by all Force Strike style patterns.

    A bullish cluster approaches a level from above, trades below it and closes back above it;
    a bearish cluster is the mirror image.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        source: RandomSource | None = None,
        bar_generator: SingleBarGenerator | None = None,
    ):
        super().__init__(config, source)
        self.bar_generator = bar_generator if bar_generator is not None else SingleBarGenerator(self.config, self.source)

    def generate(self, *args, **kwargs) -> list[Bar]:
        return self.build(*args, **kwargs)

    def build(
        self,
        reference: Bar,
        is_bullish: bool,
        level: float | None = None,
        is_slow: bool = False,
        no_exe: bool = False,
        step_range: tuple[float, float] = DEFAULT_STEP_RANGE,
        margin_range: tuple[float, float] = DEFAULT_MARGIN_RANGE,
        exe_scale: float | None = None,
    ) -> list[Bar]:
        """
        Build an approach-then-reversal cluster.

        Args:
            reference: Bar supplying the starting price band (usually the mother bar)
            is_bullish: Direction of the reversal
            level: Breakout level, defaults to the reference low (bullish) or high (bearish)
            is_slow: Generate 4-5 bars instead of 1-3, which is too slow for a valid pattern
            no_exe: End on an indecisive bar instead of a repositioned EXE bar
            step_range: Price move of each approach bar toward the level
            margin_range: Distance the terminal close clears the level by
            exe_scale: World-range scale of the terminal EXE bar

        Returns:
            Ordered bars, always ending with a close on the reversing side of the level
        """
        direction = 1 if is_bullish else -1
        length = self.source.integer(4, 6) if is_slow else self.source.integer(1, 4)
        if level is None:
            level = reference.low if is_bullish else reference.high
        if exe_scale is None:
            exe_scale = self.config.force_strike_exe_scale

        price = self.source.uniform(reference.body_bottom, reference.body_top)
        bars = self.run(price, length - 1, -direction, step_range)
        if bars:
            price = bars[-1].close

        if no_exe:
            terminal = self.non_exe_terminal(price, level, direction, margin_range)
        else:
            pierce = level - direction * self.source.uniform(1, 5)
            exe = self.bar_generator.generate_exe(is_bullish, exe_scale)
            terminal = self.continue_from(exe, price, level, direction, margin_range, pierce=pierce)

        bars.append(terminal)
        return bars

    def padded_bar(
        self, open_price: float, close: float, pad_range: tuple[float, float] = PAD_RANGE
    ) -> Bar:
        """Plain bar with random wicks beyond both ends of the body."""
        high = max(open_price, close) + self.source.uniform(*pad_range)
        low = min(open_price, close) - self.source.uniform(*pad_range)
        return Bar(open=open_price, high=high, low=low, close=close, label=BarType.OTHER)

    def run(
        self,
        start: float,
        count: int,
        direction: int,
        step_range: tuple[float, float],
        pad_range: tuple[float, float] = PAD_RANGE,
    ) -> list[Bar]:
        """Directional run of `count` bars, each closing a random step further in `direction`."""
        bars = []
        price = start
        for _ in range(count):
            close = price + direction * self.source.uniform(*step_range)
            bars.append(self.padded_bar(price, close, pad_range))
            price = close
        return bars

    def approach(
        self,
        start: float,
        target: float,
        count: int,
        pad_range: tuple[float, float] = PAD_RANGE,
    ) -> list[Bar]:
        """
        Move from `start` to `target` over `count` bars.

        Intermediate closes are monotone between the two prices and the last close is exactly
        `target`.
        """
        fractions = sorted(self.source.random() for _ in range(count - 1))
        closes = [start + (target - start) * fraction for fraction in fractions] + [target]

        bars = []
        price = start
        for close in closes:
            bars.append(self.padded_bar(price, close, pad_range))
            price = close
        return bars

    def continue_from(
        self,
        bar: Bar,
        open_price: float,
        clear_level: float,
        direction: int,
        margin_range: tuple[float, float],
        pierce: float | None = None,
    ) -> Bar:
        """
        Reposition a generated bar so it continues a sequence and clears a level.

        The new bar keeps the label and high-low span of `bar` (widened only when the body does
        not fit), opens at `open_price` and closes `margin_range` beyond `clear_level` in
        `direction`. Most of the spare range goes to the wick opposite `direction`.

        Args:
            bar: Source bar, usually a fresh EXE bar
            open_price: Previous close the bar continues from
            clear_level: Level the close must clear
            direction: +1 to close above the level, -1 to close below it
            margin_range: Random distance between the close and the level
            pierce: Price the wick opposite `direction` must reach

        Returns:
            New Bar; the source bar is left untouched
        """
        close = clear_level + direction * self.source.uniform(*margin_range)
        top = max(open_price, close)
        bottom = min(open_price, close)

        spare = max(bar.span - (top - bottom), 2 * MIN_WICK)
        trailing = spare * self.source.uniform(0.55, 0.85)
        leading = spare - trailing

        if direction > 0:
            low = bottom - trailing
            high = top + leading
            if pierce is not None:
                low = min(low, pierce)
        else:
            high = top + trailing
            low = bottom - leading
            if pierce is not None:
                high = max(high, pierce)

        return Bar(open=open_price, high=high, low=low, close=close, label=bar.label)

    def non_exe_terminal(
        self,
        open_price: float,
        clear_level: float,
        direction: int,
        margin_range: tuple[float, float],
    ) -> Bar:
        """
        Indecisive terminal bar that still clears the level.

        The body covers at most a quarter of the range and sits inside the middle third, so the
        bar fails every EXE rule.
        """
        close = clear_level + direction * self.source.uniform(*margin_range)
        top = max(open_price, close)
        bottom = min(open_price, close)
        body = top - bottom

        span = max(body / self.source.uniform(0.1, 0.25), 6.0)
        low = bottom - self.source.uniform(span / 3, 2 * span / 3 - body)
        high = low + span

        return Bar(open=open_price, high=max(high, top), low=low, close=close, label=BarType.OTHER)
