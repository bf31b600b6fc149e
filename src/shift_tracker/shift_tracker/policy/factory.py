from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CheckInTiming
from .strategies.base import CompletionStrategy
from .strategies.fixed_clock_strategy import FixedClockCompletionStrategy
from .strategies.offset_strategy import OffsetCompletionStrategy


@dataclass
class CompletionStrategyFactory:
    """Factory Pattern: choose the completion strategy for a check-in timing."""

    def for_timing(self, timing: CheckInTiming) -> CompletionStrategy:
        if timing is CheckInTiming.EARLY:
            return FixedClockCompletionStrategy()
        return OffsetCompletionStrategy()
