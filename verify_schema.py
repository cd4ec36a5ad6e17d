#!/usr/bin/env python3
"""
Schema Verification Script for patterndrill Pattern Frames

This script verifies that BarSchema matches the frames `Pattern.to_frame()` actually produces.
It generates one pattern per pattern mode with a fixed seed, converts each to a Polars
DataFrame, and compares column names, order and dtypes with the schema fields.
"""

import sys

import polars as pl

from patterndrill import GeneratorConfig, PatternEngine
from patterndrill.patterns import PATTERN_MODES
from patterndrill.schemas import BarSchema


def create_sample_frames(seed: int = 42) -> dict[str, pl.DataFrame]:
    """Generate one pattern frame per pattern mode."""
    engine = PatternEngine(GeneratorConfig(seed=seed))
    return {mode.value: engine.pattern(mode).to_frame() for mode in PATTERN_MODES}


def analyze_frame(frame: pl.DataFrame) -> dict[str, list[str]]:
    """Compare one frame's columns and dtypes with BarSchema."""
    expected = BarSchema.get_polars_dtypes()
    actual_columns = set(frame.columns)
    schema_columns = set(expected)

    dtype_mismatches = [
        f"{name}: schema {expected[name]}, frame {frame.schema[name]}"
        for name in sorted(actual_columns & schema_columns)
        if frame.schema[name] != expected[name]
    ]

    return {
        "missing_from_frame": sorted(schema_columns - actual_columns),
        "extra_in_frame": sorted(actual_columns - schema_columns),
        "order_mismatch": [] if frame.columns == list(expected) else frame.columns,
        "dtype_mismatches": dtype_mismatches,
    }


def main():
    """Main verification function."""
    print("=" * 80)
    print("patterndrill BarSchema Verification Report")
    print("=" * 80)

    print("\n1. Generating sample patterns...")
    frames = create_sample_frames()
    for mode, frame in frames.items():
        print(f"   {mode}: {frame.shape[0]} bars")

    print("\n2. BarSchema fields:")
    for category, columns in BarSchema.get_column_categories().items():
        print(f"   - {category}: {columns}")

    print("\n3. Comparing frames vs BarSchema...")
    total_issues = 0
    for mode, frame in frames.items():
        analysis = analyze_frame(frame)
        issues = sum(len(values) for values in analysis.values())
        total_issues += issues

        if issues == 0:
            print(f"   ✓ {mode}")
            continue

        print(f"   ❌ {mode}")
        for col in analysis["missing_from_frame"]:
            print(f"      - missing column: {col}")
        for col in analysis["extra_in_frame"]:
            print(f"      + unexpected column: {col}")
        if analysis["order_mismatch"]:
            print(f"      ! column order: {analysis['order_mismatch']}")
        for mismatch in analysis["dtype_mismatches"]:
            print(f"      ! dtype {mismatch}")

    print("\n4. SUMMARY:")
    if total_issues == 0:
        print("   ✅ SCHEMA IS CORRECTLY ALIGNED WITH OUTPUT")
    else:
        print(f"   ❌ FOUND {total_issues} SCHEMA ALIGNMENT ISSUES")

    print("\n" + "=" * 80)

    return total_issues == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
