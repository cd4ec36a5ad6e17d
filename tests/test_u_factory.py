"""
Unit tests for patterndrill Factory class.

Tests component creation, shared wiring and utility methods.
"""

import pytest

from patterndrill.assemblers import Continuation1Assembler, Reversal1Assembler
from patterndrill.clusters import ReversalClusterBuilder
from patterndrill.factory import Factory
from patterndrill.indicators import TrendIndicatorCalculator
from patterndrill.patterns import PATTERN_MODES, BarType, Mode, PatternType
from patterndrill.random_source import RandomSource
from patterndrill.sampling import RejectionSampler
from patterndrill.single_bar import SingleBarGenerator

from .utils.config_helpers import create_generator_config


@pytest.mark.unit
class TestCreateComponents:
    """Test cases for individual component creation."""

    def test_create_random_source(self):
        source = Factory.create_random_source(create_generator_config(seed=4))

        assert isinstance(source, RandomSource)
        assert source.seed == 4

    def test_create_bar_generator(self):
        config = create_generator_config()
        source = RandomSource(seed=1)
        generator = Factory.create_bar_generator(config, source)

        assert isinstance(generator, SingleBarGenerator)
        assert generator.source is source
        assert generator.config is config

    def test_create_sampler(self):
        sampler = Factory.create_sampler(create_generator_config(bounds={"max_attempts": 7}))

        assert isinstance(sampler, RejectionSampler)
        assert sampler.max_attempts == 7

    def test_create_assembler_from_string(self):
        assembler = Factory.create_assembler("reversal_1", create_generator_config())

        assert isinstance(assembler, Reversal1Assembler)

    def test_create_assembler_from_enum(self):
        assembler = Factory.create_assembler(Mode.CONTINUATION_1, create_generator_config())

        assert isinstance(assembler, Continuation1Assembler)
        assert isinstance(assembler.indicators, TrendIndicatorCalculator)

    @pytest.mark.parametrize("mode", [Mode.RANDOM_BAR, Mode.OTHER_BAR, Mode.COMPREHENSIVE_MIX])
    def test_create_assembler_rejects_non_pattern_mode(self, mode):
        with pytest.raises(ValueError, match="No pattern assembler"):
            Factory.create_assembler(mode, create_generator_config())

    def test_create_assembler_rejects_unknown_mode(self):
        with pytest.raises(ValueError, match="Unsupported mode"):
            Factory.create_assembler("triangle", create_generator_config())


@pytest.mark.unit
class TestCreateAll:
    """Test cases for Factory.create_all."""

    @pytest.fixture
    def components(self):
        return Factory.create_all(create_generator_config(seed=9))

    def test_component_keys(self, components):
        assert set(components) == {"source", "bar_generator", "cluster_builder", "indicators", "assemblers", "sampler"}
        assert isinstance(components["cluster_builder"], ReversalClusterBuilder)
        assert set(components["assemblers"]) == set(PATTERN_MODES)

    def test_single_shared_source(self, components):
        source = components["source"]

        assert components["bar_generator"].source is source
        assert components["cluster_builder"].source is source
        for assembler in components["assemblers"].values():
            assert assembler.source is source
            assert assembler.bar_generator is components["bar_generator"]
            assert assembler.cluster_builder is components["cluster_builder"]
        assert components["assemblers"][Mode.CONTINUATION_1].indicators is components["indicators"]

    def test_same_seed_reproduces(self):
        first = Factory.create_all(create_generator_config(seed=55))
        second = Factory.create_all(create_generator_config(seed=55))

        for mode in PATTERN_MODES:
            assert first["assemblers"][mode].generate() == second["assemblers"][mode].generate()

    def test_different_seeds_differ(self):
        first = Factory.create_all(create_generator_config(seed=1))
        second = Factory.create_all(create_generator_config(seed=2))

        assert first["bar_generator"].generate_random() != second["bar_generator"].generate_random()


@pytest.mark.unit
class TestUtilityMethods:
    """Test cases for Factory utility methods."""

    def test_get_supported_modes(self):
        modes = Factory.get_supported_modes()

        assert "random_bar" in modes
        assert "comprehensive_mix" in modes
        assert len(modes) == len(Mode)

    def test_validate_mode(self):
        assert Factory.validate_mode("base_fs") == Mode.BASE_FS
        assert Factory.validate_mode(Mode.REVERSAL_1) == Mode.REVERSAL_1

    @pytest.mark.parametrize("mode", ["", "Base_FS", "pin_bar", BarType.PIN])
    def test_validate_mode_invalid(self, mode):
        with pytest.raises(ValueError, match="Unsupported mode"):
            Factory.validate_mode(mode)

    def test_get_pattern_metadata(self):
        metadata = Factory.get_pattern_metadata("Bullish Force Strike")

        assert metadata["family"] == "force_strike"
        assert metadata["bias"] == "long"

    def test_get_pattern_metadata_is_copy(self):
        metadata = Factory.get_pattern_metadata(PatternType.UPSIDE_CONTINUATION_1)
        metadata["levels"] = 99

        assert Factory.get_pattern_metadata(PatternType.UPSIDE_CONTINUATION_1)["levels"] == 2

    def test_get_pattern_metadata_invalid(self):
        with pytest.raises(ValueError, match="Unsupported pattern label"):
            Factory.get_pattern_metadata("Head and Shoulders")
