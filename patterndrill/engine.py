"""
Request entry point for quiz controllers.

`PatternEngine` serves one bar or pattern per request, always through the bounds-checked
rejection sampler.
"""

from collections.abc import Callable

from .factory import Factory
from .patterns import EXE_BAR_TYPES, PATTERN_MODES, Bar, BarType, Mode, Pattern
from .sampling import SamplingResult
from .schemas import GeneratorConfig


class PatternEngine:
    """
    Generate bars and patterns for each quiz mode.

    Example:
        >>> engine = PatternEngine(GeneratorConfig(seed=3))
        >>> pattern = engine.generate("reversal_1")
        >>> result = engine.sample(Mode.BASE_FS)
        >>> result.accepted, result.attempts
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config if config is not None else GeneratorConfig()

        components = Factory.create_all(self.config)
        self.source = components["source"]
        self.bar_generator = components["bar_generator"]
        self.assemblers = components["assemblers"]
        self.sampler = components["sampler"]

    def sample(
        self,
        mode: Mode | str,
        bar_type: BarType | None = None,
        is_bullish: bool | None = None,
    ) -> SamplingResult[Bar | Pattern]:
        """
        Generate for a mode and report how sampling went.

        Args:
            mode: Requested mode
            bar_type: Bar type for `Mode.FORCED_BAR`
            is_bullish: Optional sentiment, random per attempt when None

        Returns:
            SamplingResult tagged with the attempt count and whether the value passed the bounds check
        """
        generate = self._generator_for(Factory.validate_mode(mode), bar_type, is_bullish)
        return self.sampler.run(generate)

    def generate(
        self,
        mode: Mode | str,
        bar_type: BarType | None = None,
        is_bullish: bool | None = None,
    ) -> Bar | Pattern:
        """Generate for a mode, returning only the bar or pattern."""
        return self.sample(mode, bar_type, is_bullish).value

    def random_bar(self) -> Bar:
        return self.generate(Mode.RANDOM_BAR)

    def forced_bar(self, bar_type: BarType, is_bullish: bool | None = None) -> Bar:
        return self.generate(Mode.FORCED_BAR, bar_type=bar_type, is_bullish=is_bullish)

    def pattern(self, mode: Mode | str, is_bullish: bool | None = None) -> Pattern:
        return self.generate(mode, is_bullish=is_bullish)

    def _generator_for(
        self, mode: Mode, bar_type: BarType | None, is_bullish: bool | None
    ) -> Callable[[], Bar | Pattern]:
        bars = self.bar_generator

        if mode == Mode.RANDOM_BAR:
            return bars.generate_random
        if mode == Mode.FORCED_BAR:
            if bar_type is None:
                raise ValueError("Mode 'forced_bar' requires a bar_type")
            return lambda: bars.generate(bar_type, is_bullish)
        if mode == Mode.EXE_BAR:
            return lambda: bars.generate(self.source.choice(EXE_BAR_TYPES), is_bullish)
        if mode == Mode.OTHER_BAR:
            return bars.generate_other
        if mode == Mode.COMPREHENSIVE_MIX:
            return lambda: self.assemblers[self.source.choice(PATTERN_MODES)].generate(is_bullish)

        assembler = self.assemblers[mode]
        return lambda: assembler.generate(is_bullish)
