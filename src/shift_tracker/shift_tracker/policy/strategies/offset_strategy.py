from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import LocalDateTime, TimeNormalizer
from ..model import WorkplacePolicy
from .base import CompletionStrategy


class OffsetCompletionStrategy(CompletionStrategy):
    """On-time check-in: completion is check-in plus the full workday."""

    def expected_completion(
        self,
        *,
        check_in: LocalDateTime,
        policy: WorkplacePolicy,
        normalizer: TimeNormalizer,
    ) -> datetime:
        return check_in.to_instant() + policy.workday
