"""
Bounds checking and bounded rejection sampling.

Generators place bars with random geometry, so a candidate can poke outside the visible price
window. The sampler regenerates the whole candidate until it fits, up to a fixed number of
attempts, and then hands back the last candidate as-is.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .patterns import Bar, Pattern
from .schemas import BoundsConfig

T = TypeVar("T")


class BoundsValidator:
    """Check that every bar of a candidate lies inside the visible price window."""

    def __init__(self, config: BoundsConfig | None = None):
        self.config = config if config is not None else BoundsConfig()

    @property
    def floor(self) -> float:
        return self.config.floor

    @property
    def ceiling(self) -> float:
        return self.config.ceiling

    def validate(self, candidate: Bar | Pattern) -> bool:
        """
        Check a bar or pattern against the window.

        Returns:
            True when every bar has `high <= ceiling` and `low >= floor`
        """
        bars = candidate.bars if isinstance(candidate, Pattern) else [candidate]
        return all(bar.high <= self.ceiling and bar.low >= self.floor for bar in bars)


@dataclass(frozen=True)
class SamplingResult(Generic[T]):
    """Outcome of a sampling run."""

    value: T
    attempts: int
    accepted: bool

    @property
    def accepted_after_cap_exhausted(self) -> bool:
        """True when no attempt passed validation and `value` is the last unchecked candidate."""
        return not self.accepted


class RejectionSampler:
    """Retry a generator until its output validates or the attempt cap is reached."""

    def __init__(self, validate: Callable[[Bar | Pattern], bool], max_attempts: int = 30):
        """
        Initialize the sampler.

        Args:
            validate: Predicate accepting or rejecting a candidate
            max_attempts: Number of full regenerations before giving up
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.validate = validate
        self.max_attempts = max_attempts

    def run(self, generate: Callable[[], T]) -> SamplingResult[T]:
        """
        Sample until a candidate validates.

        Args:
            generate: Zero-argument callable producing a fresh candidate on every call

        Returns:
            SamplingResult with the first accepted candidate, or the last candidate tagged
            `accepted=False` once `max_attempts` candidates were rejected. No error is raised.
        """
        candidate = None
        for attempt in range(1, self.max_attempts + 1):
            candidate = generate()
            if self.validate(candidate):
                return SamplingResult(value=candidate, attempts=attempt, accepted=True)
            logging.debug(f"Candidate rejected by bounds check (attempt {attempt}/{self.max_attempts})")

        logging.warning(
            f"No candidate passed validation after {self.max_attempts} attempts; returning the last candidate"
        )
        return SamplingResult(value=candidate, attempts=self.max_attempts, accepted=False)
