"""
Multi-bar pattern assembly.

One assembler per pattern family. Each composes mother/inside bars, swing points and reversal
clusters into a labeled `Pattern`, and each has its own branch for deliberate negative examples
("flaws") that resemble the pattern but break one of its rules. A realized flaw always turns the
label into `PatternType.OTHER`.

Geometry is written once with a `direction` sign (+1 up, -1 down) so the bullish and bearish
variants of every family share the same code.
"""

from abc import abstractmethod
from typing import ClassVar

from .base import Component
from .clusters import PAD_RANGE, ReversalClusterBuilder
from .indicators import TrendIndicatorCalculator
from .patterns import Bar, BarType, LevelAnnotation, Mode, Pattern, PatternType
from .random_source import RandomSource
from .schemas import GeneratorConfig
from .single_bar import MAX_PRICE, MIN_PRICE, SingleBarGenerator

# Reversal 1 flaw modes, exactly one is applied to a flawed instance
SLOW_FLUSH = "slow_flush"
NON_EXE_TERMINAL = "non_exe_terminal"
NO_CLEAR = "no_clear"
REVERSAL_FLAWS = (SLOW_FLUSH, NON_EXE_TERMINAL, NO_CLEAR)

SLOW_BAR_COUNT = 5


class PatternAssembler(Component):
    """Base class for pattern families with the shared mother/inside bar primitives."""

    mode: ClassVar[Mode]

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        source: RandomSource | None = None,
        bar_generator: SingleBarGenerator | None = None,
        cluster_builder: ReversalClusterBuilder | None = None,
    ):
        super().__init__(config, source)
        self.bar_generator = bar_generator if bar_generator is not None else SingleBarGenerator(self.config, self.source)
        self.cluster_builder = (
            cluster_builder
            if cluster_builder is not None
            else ReversalClusterBuilder(self.config, self.source, self.bar_generator)
        )

    def generate(self, is_bullish: bool | None = None) -> Pattern:
        """
        Generate one pattern.

        Args:
            is_bullish: Sentiment of the geometry, random when None

        Returns:
            Pattern with bars, label and level annotations
        """
        return self.assemble(self._resolve_sentiment(is_bullish))

    @abstractmethod
    def assemble(self, is_bullish: bool) -> Pattern:
        """Build the pattern for a resolved sentiment."""
        pass

    def generate_mother_bar(self) -> Bar:
        span = self.source.uniform(80, 120)
        low = self.source.uniform(MIN_PRICE + 40, MAX_PRICE - span - 40)
        high = low + span
        open_ = self.source.uniform(low, high)
        close = self.source.uniform(low, high)
        return Bar(open=open_, high=high, low=low, close=close, label=BarType.OTHER)

    def generate_inside_bar(self, mother: Bar) -> Bar:
        """Bar spanning 20-70% of the mother range, fully inside it."""
        span = self.source.uniform(mother.span * 0.2, mother.span * 0.7)
        high = self.source.uniform(mother.low + span, mother.high)
        low = max(high - span, mother.low)
        open_ = self.source.uniform(low, high)
        close = self.source.uniform(low, high)
        return Bar(open=open_, high=high, low=low, close=close, label=BarType.OTHER)

    def extreme_bar(
        self,
        open_price: float,
        close: float,
        extreme: float,
        side: int,
        pad_range: tuple[float, float] = PAD_RANGE,
    ) -> Bar:
        """Bar whose wick on `side` (+1 high, -1 low) reaches exactly `extreme`."""
        if side > 0:
            high = extreme
            low = min(open_price, close) - self.source.uniform(*pad_range)
        else:
            low = extreme
            high = max(open_price, close) + self.source.uniform(*pad_range)
        return Bar(open=open_price, high=high, low=low, close=close, label=BarType.OTHER)

    @staticmethod
    def extreme_level(bars: list[Bar], offset: int, side: int) -> LevelAnnotation:
        """Highest high (side=+1) or lowest low (side=-1) among `bars`, indexed from `offset`."""
        if side > 0:
            index = max(range(len(bars)), key=lambda i: bars[i].high)
            return LevelAnnotation(level=bars[index].high, source_index=offset + index)
        index = min(range(len(bars)), key=lambda i: bars[i].low)
        return LevelAnnotation(level=bars[index].low, source_index=offset + index)


class BaseForceStrikeAssembler(PatternAssembler):
    """
    Base Force Strike: mother bar, inside bar, then a reversal cluster through the mother range.

    Flaw: a single bar breaks through the mother extreme and fails to close back inside.
    """

    mode = Mode.BASE_FS

    def assemble(self, is_bullish: bool) -> Pattern:
        mother = self.generate_mother_bar()
        inside = self.generate_inside_bar(mother)

        if self.source.chance(self.config.flaws.force_strike):
            failed = self._failed_breakout_bar(mother, is_bullish)
            return Pattern(bars=[mother, inside, failed], label=PatternType.OTHER)

        cluster = self.cluster_builder.build(mother, is_bullish, exe_scale=self.config.force_strike_exe_scale)
        label = PatternType.BULLISH_FS if is_bullish else PatternType.BEARISH_FS
        return Pattern(bars=[mother, inside, *cluster], label=label)

    def _failed_breakout_bar(self, mother: Bar, is_bullish: bool) -> Bar:
        direction = 1 if is_bullish else -1
        level = mother.low if is_bullish else mother.high
        open_ = self.source.uniform(mother.body_bottom, mother.body_top)
        close = level - direction * self.source.uniform(1, 8)
        return self.cluster_builder.padded_bar(open_, close)


class ContinuationForceStrikeAssembler(BaseForceStrikeAssembler):
    """Continuation Force Strike. Built exactly like the base pattern."""

    mode = Mode.CONTINUATION_FS


class SwingPointForceStrikeAssembler(PatternAssembler):
    """
    Force Strike at a swing point.

    A two-bar run makes a swing extreme (annotated), a one-bar retracement pulls away from it, and
    a test bar closes back near the swing level. The test bar then acts as the mother bar of a
    nested mother + inside + reversal cluster step.

    Flaw: the cluster ends on a non-EXE bar.
    """

    mode = Mode.FS_AT_SWING_POINT

    def assemble(self, is_bullish: bool) -> Pattern:
        # Trend runs into the swing, against the reversal
        trend = -1 if is_bullish else 1
        builder = self.cluster_builder

        start = -trend * self.source.uniform(25, 45)
        run = builder.run(start, 2, trend, (8, 15))

        swing_open = run[-1].close
        swing_close = swing_open + trend * self.source.uniform(3, 8)
        swing_level = swing_close + trend * self.source.uniform(4, 10)
        swing = self.extreme_bar(swing_open, swing_close, swing_level, trend)

        retrace_close = swing_close - trend * self.source.uniform(10, 18)
        retrace = builder.padded_bar(swing_close, retrace_close)

        test_close = swing_level - trend * self.source.uniform(1, 5)
        test_extreme = test_close + trend * self.source.uniform(0.5, 3)
        test = self.extreme_bar(retrace_close, test_close, test_extreme, trend)

        inside = self.generate_inside_bar(test)

        flawed = self.source.chance(self.config.flaws.swing_point)
        cluster = builder.build(
            test,
            is_bullish,
            no_exe=flawed,
            step_range=(2, 6),
            margin_range=(1, 5),
            exe_scale=self.config.swing_exe_scale,
        )

        if flawed:
            label = PatternType.OTHER
        else:
            label = PatternType.BULLISH_FS if is_bullish else PatternType.BEARISH_FS

        return Pattern(
            bars=[*run, swing, retrace, test, inside, *cluster],
            label=label,
            levels=[LevelAnnotation(level=swing_level, source_index=len(run))],
        )


class Reversal1Assembler(PatternAssembler):
    """
    Reversal 1 (UR1 / DR1).

    Two-bar run, Point X extreme (level 1), one-bar retracement to Point Y (level 2), a 1-3 bar
    flush back to the Point X level and a terminal EXE bar that closes back across it.

    The bullish branch runs up into Point X and reverses down, so it carries the
    `DOWNSIDE_REVERSAL_1` label; the bearish branch carries `UPSIDE_REVERSAL_1`.

    Flaw: exactly one of a slow five-bar flush, a non-EXE terminal, or a terminal that fails to
    close back across Point X.
    """

    mode = Mode.REVERSAL_1

    def assemble(self, is_bullish: bool) -> Pattern:
        trend = 1 if is_bullish else -1
        builder = self.cluster_builder

        flaw = None
        if self.source.chance(self.config.flaws.reversal):
            flaw = self.source.choice(REVERSAL_FLAWS)

        start = -trend * self.source.uniform(30, 50)
        run = builder.run(start, 2, trend, (8, 15))

        x_open = run[-1].close
        x_close = x_open + trend * self.source.uniform(3, 8)
        x_level = x_close + trend * self.source.uniform(3, 8)
        point_x = self.extreme_bar(x_open, x_close, x_level, trend)

        y_close = x_close - trend * self.source.uniform(10, 18)
        y_level = y_close - trend * self.source.uniform(2, 5)
        point_y = self.extreme_bar(x_close, y_close, y_level, -trend)

        flush_count = SLOW_BAR_COUNT if flaw == SLOW_FLUSH else self.source.integer(1, 4)
        flush_target = x_level + trend * self.source.uniform(-2, 3)
        flush = builder.approach(y_close, flush_target, flush_count)

        terminal = self._terminal(flush[-1].close, x_level, trend, flaw)

        label = PatternType.OTHER
        if flaw is None:
            label = PatternType.DOWNSIDE_REVERSAL_1 if is_bullish else PatternType.UPSIDE_REVERSAL_1

        return Pattern(
            bars=[*run, point_x, point_y, *flush, terminal],
            label=label,
            levels=[
                LevelAnnotation(level=x_level, source_index=len(run)),
                LevelAnnotation(level=y_level, source_index=len(run) + 1),
            ],
        )

    def _terminal(self, open_price: float, x_level: float, trend: int, flaw: str | None) -> Bar:
        builder = self.cluster_builder
        reversal = -trend

        if flaw == NON_EXE_TERMINAL:
            return builder.non_exe_terminal(open_price, x_level, reversal, (2, 8))

        exe = self.bar_generator.generate_exe(reversal > 0, self.config.reversal_exe_scale)
        if flaw == NO_CLEAR:
            return builder.continue_from(exe, open_price, x_level, trend, (1, 4))

        pierce = x_level + trend * self.source.uniform(1, 5)
        return builder.continue_from(exe, open_price, x_level, reversal, (2, 10), pierce=pierce)


class Continuation1Assembler(PatternAssembler):
    """
    Continuation 1 (UC1 / DC1).

    Invisible precursor bars warm up the moving averages. The visible bars run through Point A
    (breakout extreme), Point B (pullback extreme), Point C (lower high / higher low, the breakout
    level) and Point D (pre-breakout dip), then recover toward C and end on a terminal bar that
    must clear C in the trend direction.

    A flaw candidate draws four independent conditions: slow recovery, non-EXE terminal, failed
    breakout and a moving average contradiction. Only conditions that are realized make the
    label `OTHER`; the moving average condition is read off the computed averages.
    """

    mode = Mode.CONTINUATION_1

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        source: RandomSource | None = None,
        bar_generator: SingleBarGenerator | None = None,
        cluster_builder: ReversalClusterBuilder | None = None,
        indicators: TrendIndicatorCalculator | None = None,
    ):
        super().__init__(config, source, bar_generator, cluster_builder)
        self.indicators = indicators if indicators is not None else TrendIndicatorCalculator(self.config.trend)

    def assemble(self, is_bullish: bool) -> Pattern:
        trend = 1 if is_bullish else -1
        builder = self.cluster_builder
        flaws = self.config.flaws

        flawed = self.source.chance(flaws.continuation)
        is_slow = flawed and self.source.chance(flaws.continuation_condition)
        no_exe = flawed and self.source.chance(flaws.continuation_condition)
        fails_breakout = flawed and self.source.chance(flaws.continuation_condition)
        against_trend = flawed and self.source.chance(flaws.continuation_condition)

        start = -trend * self.source.uniform(40, 60)
        precursor = self._precursor(start, trend, against_trend)

        run = builder.run(start, 2, trend, (6, 12))

        a_open = run[-1].close
        a_close = a_open + trend * self.source.uniform(4, 10)
        a_level = a_close + trend * self.source.uniform(3, 8)
        point_a = self.extreme_bar(a_open, a_close, a_level, trend)

        b_close = a_close - trend * self.source.uniform(12, 20)
        pullback = builder.approach(a_close, b_close, self.source.integer(1, 3))

        c_close = b_close + trend * self.source.uniform(8, 11)
        rally = builder.approach(b_close, c_close, self.source.integer(1, 3))

        d_close = c_close - trend * self.source.uniform(2, 5)
        d_extreme = d_close - trend * self.source.uniform(*PAD_RANGE)
        dip = self.extreme_bar(c_close, d_close, d_extreme, -trend, pad_range=(0.1, 0.4))

        bars = [*run, point_a, *pullback, *rally]
        point_c = self.extreme_level(rally, len(bars) - len(rally), trend)
        point_d = LevelAnnotation(level=dip.high if trend < 0 else dip.low, source_index=len(bars))
        bars.append(dip)

        recovery_count = SLOW_BAR_COUNT if is_slow else self.source.integer(1, 4)
        recovery_target = point_c.level - trend * self.source.uniform(1, 2)
        bars.extend(builder.approach(d_close, recovery_target, recovery_count, pad_range=(0.1, 0.5)))

        bars.append(self._terminal(bars[-1].close, point_c.level, trend, no_exe, fails_breakout))

        averages = self.indicators.process([bar.close for bar in precursor], [bar.close for bar in bars])
        short_sma = averages[self.indicators.config.short_window]
        long_sma = averages[self.indicators.config.long_window]

        if is_slow or no_exe or fails_breakout or self._contradicts(short_sma, long_sma, trend):
            label = PatternType.OTHER
        else:
            label = PatternType.UPSIDE_CONTINUATION_1 if is_bullish else PatternType.DOWNSIDE_CONTINUATION_1

        return Pattern(bars=bars, label=label, levels=[point_c, point_d], sma20=short_sma, sma50=long_sma)

    def _precursor(self, start: float, trend: int, against_trend: bool) -> list[Bar]:
        """Invisible bars drifting into `start`, with the trend or against it."""
        count = self.config.trend.precursor_bars
        if count == 0:
            return []

        if against_trend:
            origin = start + trend * count * self.source.uniform(0.8, 1.5)
        else:
            origin = start - trend * count * self.source.uniform(0.6, 1.2)
        return self.cluster_builder.approach(origin, start, count)

    def _terminal(self, open_price: float, level: float, trend: int, no_exe: bool, fails_breakout: bool) -> Bar:
        builder = self.cluster_builder
        direction = -trend if fails_breakout else trend
        margin = (0.5, 3) if fails_breakout else (2, 8)

        if no_exe:
            return builder.non_exe_terminal(open_price, level, direction, margin)

        exe = self.bar_generator.generate_exe(trend > 0, self.config.continuation_exe_scale)
        pierce = None
        if fails_breakout:
            pierce = level + trend * self.source.uniform(0.5, 3)
        return builder.continue_from(exe, open_price, level, direction, margin, pierce=pierce)

    @staticmethod
    def _contradicts(short_sma: list[float | None], long_sma: list[float | None], trend: int) -> bool:
        """True when the averages at the last bar point against the trend."""
        short_value = short_sma[-1] if short_sma else None
        long_value = long_sma[-1] if long_sma else None
        if short_value is None or long_value is None:
            return False
        if trend > 0:
            return short_value <= long_value
        return short_value >= long_value


ASSEMBLERS: dict[Mode, type[PatternAssembler]] = {
    assembler.mode: assembler
    for assembler in (
        BaseForceStrikeAssembler,
        ContinuationForceStrikeAssembler,
        SwingPointForceStrikeAssembler,
        Reversal1Assembler,
        Continuation1Assembler,
    )
}
