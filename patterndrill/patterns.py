"""
Bar and pattern data model for patterndrill.

This module defines the labels a quiz can ask about, the immutable `Bar` and `Pattern` values
produced by the generators, and the registry of pattern metadata used to build answer sets.
"""

from dataclasses import dataclass, field
from enum import Enum

from polars import DataFrame

from .schemas import BarSchema


class BarGeometryError(ValueError):
    """Raised when OHLC values cannot form a bar."""

    pass


class BarType(Enum):
    """Single bar classification."""

    PIN = "Pin Bar"
    MARK = "Mark Up/Down Bar"
    ICE_CREAM = "Ice Cream Bar"
    OTHER = "Other"


EXE_BAR_TYPES = (BarType.PIN, BarType.MARK, BarType.ICE_CREAM)


class PatternType(Enum):
    """Multi-bar pattern classification. `OTHER` is the universal negative tag."""

    BULLISH_FS = "Bullish Force Strike"
    BEARISH_FS = "Bearish Force Strike"
    UPSIDE_REVERSAL_1 = "Upside Reversal 1"
    DOWNSIDE_REVERSAL_1 = "Downside Reversal 1"
    UPSIDE_CONTINUATION_1 = "Upside Continuation 1"
    DOWNSIDE_CONTINUATION_1 = "Downside Continuation 1"
    OTHER = "Other Pattern"


class SimpleAnswer(Enum):
    """Two-way answer set for the simple single bar quiz."""

    EXE = "EXE Bar"
    NON_EXE = "Non-EXE Bar"


class Mode(Enum):
    """Generation requests a quiz controller can make."""

    RANDOM_BAR = "random_bar"
    FORCED_BAR = "forced_bar"
    EXE_BAR = "exe_bar"
    OTHER_BAR = "other_bar"
    BASE_FS = "base_fs"
    CONTINUATION_FS = "continuation_fs"
    FS_AT_SWING_POINT = "fs_at_swing_point"
    REVERSAL_1 = "reversal_1"
    CONTINUATION_1 = "continuation_1"
    COMPREHENSIVE_MIX = "comprehensive_mix"


class Difficulty(Enum):
    BASIC = "Basic"
    MEDIUM = "Medium"
    ADVANCED = "Advanced"


BAR_MODES = (Mode.RANDOM_BAR, Mode.FORCED_BAR, Mode.EXE_BAR, Mode.OTHER_BAR)

PATTERN_MODES = (
    Mode.BASE_FS,
    Mode.CONTINUATION_FS,
    Mode.FS_AT_SWING_POINT,
    Mode.REVERSAL_1,
    Mode.CONTINUATION_1,
)

DIFFICULTY_MODES = {
    Difficulty.BASIC: (Mode.BASE_FS, Mode.CONTINUATION_FS, Mode.FS_AT_SWING_POINT),
    Difficulty.MEDIUM: (Mode.REVERSAL_1, Mode.CONTINUATION_1),
    Difficulty.ADVANCED: (Mode.COMPREHENSIVE_MIX,),
}

# Pattern metadata keyed by label
PATTERNS = {
    PatternType.BULLISH_FS: {
        "family": "force_strike",
        "bias": "long",
        "levels": 0,
        "description": "Mother bar, inside bar, break below the mother low and close back inside",
    },
    PatternType.BEARISH_FS: {
        "family": "force_strike",
        "bias": "short",
        "levels": 0,
        "description": "Mother bar, inside bar, break above the mother high and close back inside",
    },
    PatternType.UPSIDE_REVERSAL_1: {
        "family": "reversal_1",
        "bias": "long",
        "levels": 2,
        "description": "Flush below Point X that closes back above it with an EXE bar",
    },
    PatternType.DOWNSIDE_REVERSAL_1: {
        "family": "reversal_1",
        "bias": "short",
        "levels": 2,
        "description": "Flush above Point X that closes back below it with an EXE bar",
    },
    PatternType.UPSIDE_CONTINUATION_1: {
        "family": "continuation_1",
        "bias": "long",
        "levels": 2,
        "description": "Higher low at D followed by an EXE breakout above the lower high at C",
    },
    PatternType.DOWNSIDE_CONTINUATION_1: {
        "family": "continuation_1",
        "bias": "short",
        "levels": 2,
        "description": "Lower high at D followed by an EXE breakdown below the higher low at C",
    },
    PatternType.OTHER: {
        "family": None,
        "bias": None,
        "levels": None,
        "description": "Does not match any target pattern",
    },
}

FS_PATTERN_TYPES = (PatternType.BULLISH_FS, PatternType.BEARISH_FS, PatternType.OTHER)
R1_PATTERN_TYPES = (PatternType.UPSIDE_REVERSAL_1, PatternType.DOWNSIDE_REVERSAL_1, PatternType.OTHER)
C1_PATTERN_TYPES = (PatternType.UPSIDE_CONTINUATION_1, PatternType.DOWNSIDE_CONTINUATION_1, PatternType.OTHER)


def answer_options(mode: Mode) -> tuple[Enum, ...]:
    """
    Get the closed answer set a quiz offers for a mode.

    Args:
        mode: Generation mode being quizzed

    Returns:
        Tuple of BarType, SimpleAnswer or PatternType members
    """
    if mode in (Mode.RANDOM_BAR, Mode.FORCED_BAR):
        return tuple(BarType)
    if mode in (Mode.EXE_BAR, Mode.OTHER_BAR):
        return tuple(SimpleAnswer)
    if mode == Mode.REVERSAL_1:
        return R1_PATTERN_TYPES
    if mode == Mode.CONTINUATION_1:
        return C1_PATTERN_TYPES
    if mode == Mode.COMPREHENSIVE_MIX:
        return tuple(PatternType)
    return FS_PATTERN_TYPES


@dataclass(frozen=True)
class Bar:
    """One OHLC bar with its classification."""

    open: float
    high: float
    low: float
    close: float
    label: BarType = BarType.OTHER

    def __post_init__(self):
        if self.low > min(self.open, self.close) or self.high < max(self.open, self.close):
            raise BarGeometryError(
                f"Invalid bar geometry: open={self.open}, high={self.high}, low={self.low}, close={self.close}"
            )

    @property
    def body_top(self) -> float:
        return max(self.open, self.close)

    @property
    def body_bottom(self) -> float:
        return min(self.open, self.close)

    @property
    def body(self) -> float:
        return self.body_top - self.body_bottom

    @property
    def span(self) -> float:
        return self.high - self.low

    @property
    def is_bullish_body(self) -> bool:
        return self.close > self.open

    @property
    def is_exe(self) -> bool:
        return self.label in EXE_BAR_TYPES

    def mirrored(self) -> "Bar":
        """Reflect the bar around price zero, swapping bullish and bearish geometry."""
        return Bar(open=-self.open, high=-self.low, low=-self.high, close=-self.close, label=self.label)

    def to_dict(self) -> dict:
        return {
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "label": self.label.value,
        }


def simple_answer(bar: Bar) -> SimpleAnswer:
    """Map a bar onto the EXE / non-EXE answer set."""
    return SimpleAnswer.EXE if bar.is_exe else SimpleAnswer.NON_EXE


@dataclass(frozen=True)
class LevelAnnotation:
    """Reference price level and the index of the bar that established it."""

    level: float
    source_index: int


@dataclass
class Pattern:
    """Ordered bars (index 0 earliest) with a single classification label."""

    bars: list[Bar]
    label: PatternType
    levels: list[LevelAnnotation] = field(default_factory=list)
    sma20: list[float | None] | None = None
    sma50: list[float | None] | None = None

    def __post_init__(self):
        """Validate level annotations and indicator alignment."""
        if not self.bars:
            raise ValueError("Pattern requires at least one bar")
        if len(self.levels) > 2:
            raise ValueError(f"Pattern supports at most two level annotations, got {len(self.levels)}")
        for annotation in self.levels:
            if not 0 <= annotation.source_index < len(self.bars):
                raise ValueError(
                    f"Level source_index {annotation.source_index} outside pattern of {len(self.bars)} bars"
                )
        for name in ("sma20", "sma50"):
            values = getattr(self, name)
            if values is not None and len(values) != len(self.bars):
                raise ValueError(f"{name} has {len(values)} values for {len(self.bars)} bars")

    @property
    def is_negative(self) -> bool:
        return self.label == PatternType.OTHER

    @property
    def primary_level(self) -> LevelAnnotation | None:
        return self.levels[0] if self.levels else None

    @property
    def secondary_level(self) -> LevelAnnotation | None:
        return self.levels[1] if len(self.levels) > 1 else None

    def __len__(self) -> int:
        return len(self.bars)

    def to_frame(self) -> DataFrame:
        """
        Convert the pattern bars to a Polars DataFrame.

        Returns:
            DataFrame with one row per bar using the `BarSchema` column order and dtypes.
            Indicator columns are null when the pattern carries no indicator arrays.
        """
        rows = len(self.bars)
        data = {
            "open": [bar.open for bar in self.bars],
            "high": [bar.high for bar in self.bars],
            "low": [bar.low for bar in self.bars],
            "close": [bar.close for bar in self.bars],
            "label": [bar.label.value for bar in self.bars],
            "sma20": self.sma20 if self.sma20 is not None else [None] * rows,
            "sma50": self.sma50 if self.sma50 is not None else [None] * rows,
        }
        return DataFrame(data, schema=BarSchema.get_polars_dtypes())
