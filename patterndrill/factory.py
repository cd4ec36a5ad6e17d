"""
Factory pattern for patterndrill component creation and configuration.

This module provides clean factory methods for creating and wiring generation components
from a validated `GeneratorConfig`. Components created together share one random source so a
single seed reproduces the whole engine.
"""

from typing import Any, TypedDict

from .assemblers import ASSEMBLERS, Continuation1Assembler, PatternAssembler
from .clusters import ReversalClusterBuilder
from .indicators import TrendIndicatorCalculator
from .patterns import PATTERNS, Mode, PatternType
from .random_source import RandomSource
from .sampling import BoundsValidator, RejectionSampler
from .schemas import GeneratorConfig
from .single_bar import SingleBarGenerator


class ComponentDict(TypedDict):
    """Type definition for component dictionary returned by Factory.create_all()."""

    source: RandomSource
    bar_generator: SingleBarGenerator
    cluster_builder: ReversalClusterBuilder
    indicators: TrendIndicatorCalculator
    assemblers: dict[Mode, PatternAssembler]
    sampler: RejectionSampler


class Factory:
    """
    Factory class for creating patterndrill components.

    Provides static methods for creating individual components and a class method for
    creating a complete, consistently wired set.
    """

    @staticmethod
    def create_random_source(config: GeneratorConfig) -> RandomSource:
        """Create a random source seeded from `config.seed`."""
        return RandomSource(seed=config.seed)

    @staticmethod
    def create_bar_generator(config: GeneratorConfig, source: RandomSource | None = None) -> SingleBarGenerator:
        """
        Create a single bar generator.

        Example:
            >>> from patterndrill.schemas import GeneratorConfig
            >>> bars = Factory.create_bar_generator(GeneratorConfig(seed=7))
            >>> bar = bars.generate_random()
        """
        return SingleBarGenerator(config, source)

    @staticmethod
    def create_sampler(config: GeneratorConfig) -> RejectionSampler:
        """
        Create a rejection sampler gated by the configured bounds.

        Args:
            config: Validated GeneratorConfig containing:
                - `bounds.floor` / `bounds.ceiling`: Visible price window
                - `bounds.max_attempts`: Regenerations before the last candidate is returned
        """
        validator = BoundsValidator(config.bounds)
        return RejectionSampler(validator.validate, max_attempts=config.bounds.max_attempts)

    @staticmethod
    def create_assembler(
        mode: Mode | str,
        config: GeneratorConfig,
        source: RandomSource | None = None,
        bar_generator: SingleBarGenerator | None = None,
        cluster_builder: ReversalClusterBuilder | None = None,
        indicators: TrendIndicatorCalculator | None = None,
    ) -> PatternAssembler:
        """
        Create the pattern assembler for a pattern mode.

        Args:
            mode: Pattern mode (enum member or its value, e.g. "base_fs")
            config: Validated GeneratorConfig
            source: Optional shared random source
            bar_generator: Optional shared single bar generator
            cluster_builder: Optional shared cluster builder
            indicators: Optional moving average calculator, used by Continuation 1 only

        Returns:
            Configured PatternAssembler subclass instance

        Raises:
            ValueError: If mode is not a pattern mode
        """
        mode = Factory.validate_mode(mode)
        if mode not in ASSEMBLERS:
            supported = sorted(m.value for m in ASSEMBLERS)
            raise ValueError(f"No pattern assembler for mode '{mode.value}'. Pattern modes are: {supported}")

        assembler_class = ASSEMBLERS[mode]
        if issubclass(assembler_class, Continuation1Assembler):
            return assembler_class(config, source, bar_generator, cluster_builder, indicators)
        return assembler_class(config, source, bar_generator, cluster_builder)

    @classmethod
    def create_all(cls, config: GeneratorConfig) -> ComponentDict:
        """
        Create every component, wired to one random source.

        Example:
            >>> from patterndrill.schemas import GeneratorConfig
            >>> components = Factory.create_all(GeneratorConfig(seed=42))
            >>> pattern = components["assemblers"][Mode.BASE_FS].generate()
        """
        source = cls.create_random_source(config)
        bar_generator = cls.create_bar_generator(config, source)
        cluster_builder = ReversalClusterBuilder(config, source, bar_generator)
        indicators = TrendIndicatorCalculator(config.trend)
        assemblers = {
            mode: cls.create_assembler(mode, config, source, bar_generator, cluster_builder, indicators)
            for mode in ASSEMBLERS
        }

        return {
            "source": source,
            "bar_generator": bar_generator,
            "cluster_builder": cluster_builder,
            "indicators": indicators,
            "assemblers": assemblers,
            "sampler": cls.create_sampler(config),
        }

    @staticmethod
    def get_supported_modes() -> list[str]:
        """Get the values of every generation mode."""
        return [mode.value for mode in Mode]

    @staticmethod
    def get_pattern_metadata(label: PatternType | str) -> dict[str, Any]:
        """
        Get metadata for a pattern label.

        Returns:
            Copy of the registry entry with `family`, `bias`, `levels` and `description`

        Raises:
            ValueError: If the label is unknown
        """
        try:
            label = PatternType(label)
        except ValueError as err:
            supported = [pattern.value for pattern in PatternType]
            raise ValueError(f"Unsupported pattern label: '{label}'. Supported labels are: {supported}") from err
        return PATTERNS[label].copy()

    @staticmethod
    def validate_mode(mode: Mode | str) -> Mode:
        """
        Normalize a mode given as enum member or string value.

        Raises:
            ValueError: If the mode is not supported
        """
        try:
            return Mode(mode)
        except ValueError as err:
            raise ValueError(f"Unsupported mode: '{mode}'. Supported modes are: {Factory.get_supported_modes()}") from err
