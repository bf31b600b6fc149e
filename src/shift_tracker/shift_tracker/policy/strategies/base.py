from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...common.datetime_utils import LocalDateTime, TimeNormalizer
from ..model import WorkplacePolicy


class CompletionStrategy(ABC):
    """Strategy Pattern: how the expected completion instant is derived from a check-in."""

    @abstractmethod
    def expected_completion(
        self,
        *,
        check_in: LocalDateTime,
        policy: WorkplacePolicy,
        normalizer: TimeNormalizer,
    ) -> datetime:
        raise NotImplementedError
