from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import LocalDateTime, TimeNormalizer
from ..model import WorkplacePolicy
from .base import CompletionStrategy


class FixedClockCompletionStrategy(CompletionStrategy):
    """Early check-in: completion is the standard end of day, however early the arrival."""

    def expected_completion(
        self,
        *,
        check_in: LocalDateTime,
        policy: WorkplacePolicy,
        normalizer: TimeNormalizer,
    ) -> datetime:
        return normalizer.at(check_in.date, policy.standard_end_of_day).to_instant()
