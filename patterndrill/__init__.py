"""
patterndrill Python Module

Procedural generator of labeled OHLC bars and price-action chart patterns for pattern
recognition drills. Produces positive and deliberately flawed examples with bounds-checked
rejection sampling.
"""

from .assemblers import (
    BaseForceStrikeAssembler,
    Continuation1Assembler,
    ContinuationForceStrikeAssembler,
    PatternAssembler,
    Reversal1Assembler,
    SwingPointForceStrikeAssembler,
)
from .base import Component
from .clusters import ReversalClusterBuilder
from .engine import PatternEngine
from .factory import Factory
from .indicators import TrendIndicatorCalculator
from .patterns import (
    PATTERNS,
    Bar,
    BarGeometryError,
    BarType,
    Difficulty,
    LevelAnnotation,
    Mode,
    Pattern,
    PatternType,
    SimpleAnswer,
    answer_options,
    simple_answer,
)
from .random_source import RandomSource
from .sampling import BoundsValidator, RejectionSampler, SamplingResult
from .schemas import BarSchema, BoundsConfig, FlawConfig, GeneratorConfig, TrendConfig
from .single_bar import SingleBarGenerator

try:
    from importlib.metadata import version

    __version__ = version("patterndrill")
except Exception:
    # Fallback if package not found (development mode)
    __version__ = "ERROR: VERSION NOT FOUND"
__all__ = [
    "Factory",
    "Component",
    "PatternEngine",
    "RandomSource",
    "SingleBarGenerator",
    "ReversalClusterBuilder",
    "PatternAssembler",
    "BaseForceStrikeAssembler",
    "ContinuationForceStrikeAssembler",
    "SwingPointForceStrikeAssembler",
    "Reversal1Assembler",
    "Continuation1Assembler",
    "TrendIndicatorCalculator",
    "BoundsValidator",
    "RejectionSampler",
    "SamplingResult",
    "Bar",
    "BarGeometryError",
    "BarType",
    "LevelAnnotation",
    "Pattern",
    "PatternType",
    "Mode",
    "Difficulty",
    "SimpleAnswer",
    "PATTERNS",
    "answer_options",
    "simple_answer",
    "GeneratorConfig",
    "BoundsConfig",
    "FlawConfig",
    "TrendConfig",
    "BarSchema",
]
