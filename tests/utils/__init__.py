"""Test utilities package."""

from .bar_validator import (
    EPS,
    ConstantRandom,
    assert_contained,
    assert_continuous,
    assert_in_bounds,
    assert_valid_bar,
)
from .config_helpers import (
    create_always_flawed_config,
    create_flawless_config,
    create_generator_config,
    create_unreachable_bounds_config,
)

__all__ = [
    # Config helpers
    "create_generator_config",
    "create_flawless_config",
    "create_always_flawed_config",
    "create_unreachable_bounds_config",
    # Bar validator
    "EPS",
    "ConstantRandom",
    "assert_valid_bar",
    "assert_continuous",
    "assert_in_bounds",
    "assert_contained",
]
