"""
Base component classes for patterndrill.

This module provides the abstract base class shared by the bar generators and pattern assemblers.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .random_source import RandomSource
from .schemas import GeneratorConfig


class Component(ABC):
    """Base class for all generation components."""

    def __init__(self, config: GeneratorConfig | None = None, source: RandomSource | None = None):
        """
        Initialize base component.

        Args:
            config: Validated GeneratorConfig (defaults are used when omitted)
            source: Random source shared with collaborating components. A new source seeded
                from `config.seed` is created when omitted.
        """
        self._created_at = datetime.now()
        self.config = config if config is not None else GeneratorConfig()
        self.source = source if source is not None else RandomSource(self.config.seed)

    @abstractmethod
    def generate(self, *args, **kwargs):
        """
        Produce one fresh bar or pattern.

        Every call draws new randomness, so calling it again is a full regeneration.
        """
        pass

    def _resolve_sentiment(self, is_bullish: bool | None) -> bool:
        """Use the requested sentiment or flip a coin for one."""
        if is_bullish is None:
            return self.source.random() > 0.5
        return is_bullish
