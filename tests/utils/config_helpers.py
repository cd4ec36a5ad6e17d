"""Test configuration helper functions.

Provides helper functions to create common configuration patterns used in tests,
reducing boilerplate and improving test readability.
"""

from patterndrill.schemas import BoundsConfig, FlawConfig, GeneratorConfig


def create_generator_config(**overrides):
    """Create GeneratorConfig with a fixed seed and otherwise default settings.

    Args:
        **overrides: Any GeneratorConfig field. Common overrides:
            - seed: Default is 7
            - flaws: FlawConfig instance or dict
            - bounds: BoundsConfig instance or dict
            - trend: TrendConfig instance or dict

    Returns:
        GeneratorConfig: Fully validated Pydantic configuration instance.

    Examples:
        # Reproducible defaults
        config = create_generator_config()

        # Different seed, tighter retry cap
        config = create_generator_config(seed=11, bounds={"max_attempts": 5})
    """
    defaults = {"seed": 7}
    return GeneratorConfig(**{**defaults, **overrides})


def create_flawless_config(**overrides):
    """Create GeneratorConfig that never draws a deliberate flaw.

    Every pattern family produces its positive label (Continuation 1 can still be
    negative when the computed averages contradict the trend).
    """
    flaws = FlawConfig(force_strike=0, swing_point=0, reversal=0, continuation=0, continuation_condition=0)
    return create_generator_config(flaws=flaws, **overrides)


def create_always_flawed_config(**overrides):
    """Create GeneratorConfig where every flaw draw succeeds."""
    flaws = FlawConfig(force_strike=1, swing_point=1, reversal=1, continuation=1, continuation_condition=1)
    return create_generator_config(flaws=flaws, **overrides)


def create_unreachable_bounds_config(max_attempts=3, **overrides):
    """Create GeneratorConfig whose visible window no generated bar can fit into.

    Used to exercise rejection sampling cap exhaustion end to end.
    """
    bounds = BoundsConfig(floor=-1.0, ceiling=1.0, max_attempts=max_attempts)
    return create_generator_config(bounds=bounds, **overrides)
