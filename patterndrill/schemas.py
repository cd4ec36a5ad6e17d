"""
Pydantic schema models for patterndrill configuration validation.

Models use Pydantic v2 features for type safety and detailed error reporting. Every tunable
constant of the generators (visible bounds, retry cap, flaw probabilities, trend windows and
EXE bar sizing) lives here so a whole engine can be described by one `GeneratorConfig`.
"""

from typing import Any, Self

from polars import Float64, String
from pydantic import BaseModel, ConfigDict, Field, model_validator


class BoundsConfig(BaseModel):
    """Visible price window enforced by the bounds validator."""

    model_config = ConfigDict(validate_default=True, extra="forbid")

    floor: float = Field(
        default=-100.0,
        description="Lowest price a bar may reach and still be fully visible",
        json_schema_extra={"check": "low >= floor for every bar"},
    )
    ceiling: float = Field(
        default=100.0,
        description="Highest price a bar may reach and still be fully visible",
        json_schema_extra={"check": "high <= ceiling for every bar"},
    )
    max_attempts: int = Field(
        default=30,
        ge=1,
        description="Generation attempts before the last candidate is returned unchecked",
        examples=[1, 10, 30],
        json_schema_extra={"impact": "After the cap the sampler returns the last out-of-bounds candidate"},
    )

    @model_validator(mode="after")
    def validate_window(self) -> Self:
        if self.floor >= self.ceiling:
            raise ValueError(f"floor ({self.floor}) must be below ceiling ({self.ceiling})")
        return self


class FlawConfig(BaseModel):
    """Probabilities of producing deliberate negative examples."""

    model_config = ConfigDict(validate_default=True, extra="forbid")

    force_strike: float = Field(
        default=0.4,
        ge=0,
        le=1,
        description="Chance a Base/Continuation Force Strike ends in a failed breakout bar",
    )
    swing_point: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Chance an FS at a swing point ends without an EXE bar",
    )
    reversal: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Chance a Reversal 1 pattern carries exactly one flaw",
        json_schema_extra={"flaw_modes": ["slow_flush", "non_exe_terminal", "no_clear"]},
    )
    continuation: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Chance a Continuation 1 pattern is drawn as a flaw candidate",
    )
    continuation_condition: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Independent chance of each Continuation 1 flaw condition on a flaw candidate",
        json_schema_extra={"conditions": ["slow_recovery", "non_exe_terminal", "failed_breakout", "sma_contradiction"]},
    )


class TrendConfig(BaseModel):
    """Moving average windows and warm-up history for trend-aware patterns."""

    model_config = ConfigDict(validate_default=True, extra="forbid")

    short_window: int = Field(
        default=20,
        ge=1,
        description="Window of the short simple moving average (reported as sma20)",
    )
    long_window: int = Field(
        default=50,
        ge=1,
        description="Window of the long simple moving average (reported as sma50)",
    )
    precursor_bars: int = Field(
        default=50,
        ge=0,
        description="Invisible bars generated before a Continuation 1 pattern to warm up the averages",
        json_schema_extra={"recommendation": "At least long_window - 1 so every visible bar has both averages"},
    )

    @model_validator(mode="after")
    def validate_windows(self) -> Self:
        if self.short_window >= self.long_window:
            raise ValueError(
                f"short_window ({self.short_window}) must be smaller than long_window ({self.long_window})"
            )
        return self


class GeneratorConfig(BaseModel):
    """Complete configuration for a generation engine."""

    model_config = ConfigDict(validate_default=True, extra="forbid")

    seed: int | None = Field(
        default=None,
        description="Seed for the random source (None draws fresh entropy)",
        examples=[None, 7, 20240101],
    )
    bounds: BoundsConfig = Field(default_factory=BoundsConfig, description="Visible price window and retry cap")
    flaws: FlawConfig = Field(default_factory=FlawConfig, description="Negative example probabilities")
    trend: TrendConfig = Field(default_factory=TrendConfig, description="Moving average settings")
    force_strike_exe_scale: float = Field(
        default=0.25,
        gt=0,
        le=1,
        description="World-range scale of the EXE bar that ends a Force Strike cluster",
        json_schema_extra={"impact": "0.25 gives terminal bars of roughly 22-43 price units"},
    )
    swing_exe_scale: float = Field(
        default=0.12,
        gt=0,
        le=1,
        description="World-range scale of the EXE bar that ends an FS at a swing point",
    )
    reversal_exe_scale: float = Field(
        default=0.12,
        gt=0,
        le=1,
        description="World-range scale of the Reversal 1 terminal bar",
    )
    continuation_exe_scale: float = Field(
        default=0.1,
        gt=0,
        le=1,
        description="World-range scale of the Continuation 1 terminal bar",
    )


class BarSchema(BaseModel):
    """
    Column schema for pattern frames.

    Defines the columns `Pattern.to_frame()` produces, in order.
    """

    model_config = ConfigDict(validate_default=True, extra="forbid")

    open: float = Field(
        description="Opening price of the bar",
        json_schema_extra={"polars_dtype": Float64, "category": "base_ohlc", "nullable": False},
    )
    high: float = Field(
        description="Highest price of the bar",
        json_schema_extra={"polars_dtype": Float64, "category": "base_ohlc", "nullable": False},
    )
    low: float = Field(
        description="Lowest price of the bar",
        json_schema_extra={"polars_dtype": Float64, "category": "base_ohlc", "nullable": False},
    )
    close: float = Field(
        description="Closing price of the bar",
        json_schema_extra={"polars_dtype": Float64, "category": "base_ohlc", "nullable": False},
    )
    label: str = Field(
        description="Single bar classification (Pin Bar, Mark Up/Down Bar, Ice Cream Bar, Other)",
        json_schema_extra={"polars_dtype": String, "category": "classification", "nullable": False},
    )
    sma20: float | None = Field(
        default=None,
        description="Short trailing simple moving average of closes (null during warm-up)",
        json_schema_extra={"polars_dtype": Float64, "category": "trend", "nullable": True},
    )
    sma50: float | None = Field(
        default=None,
        description="Long trailing simple moving average of closes (null during warm-up)",
        json_schema_extra={"polars_dtype": Float64, "category": "trend", "nullable": True},
    )

    @classmethod
    def get_column_descriptions(cls) -> dict[str, str]:
        """
        Get descriptions for all frame columns.

        Returns:
            Dictionary mapping column names to their descriptions
        """
        descriptions = {}

        for field_name, field_info in cls.model_fields.items():
            if field_info.description:
                descriptions[field_name] = field_info.description

        return descriptions

    @classmethod
    def get_polars_dtypes(cls) -> dict[str, Any]:
        """
        Get Polars data types for all frame columns.

        Returns:
            Dictionary mapping column names to their Polars data types
        """
        types = {}

        for field_name, field_info in cls.model_fields.items():
            json_extra = getattr(field_info, "json_schema_extra", {})
            if isinstance(json_extra, dict) and "polars_dtype" in json_extra:
                types[field_name] = json_extra["polars_dtype"]

        return types

    @classmethod
    def get_column_categories(cls) -> dict[str, list[str]]:
        """Group column names by their schema category."""
        categories: dict[str, list[str]] = {}

        for field_name, field_info in cls.model_fields.items():
            json_extra = getattr(field_info, "json_schema_extra", {}) or {}
            category = json_extra.get("category", "uncategorized")
            categories.setdefault(category, []).append(field_name)

        return categories
