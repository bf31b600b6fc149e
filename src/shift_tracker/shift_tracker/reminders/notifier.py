from __future__ import annotations

import logging
from typing import Protocol

from .model import ReminderEvent

logger = logging.getLogger(__name__)


class ReminderNotifier(Protocol):
    """Delivery seam. Formatting and transport belong to the host system."""

    def notify(self, event: ReminderEvent) -> None:
        raise NotImplementedError


class LoggingReminderNotifier(ReminderNotifier):
    """Default notifier: records the event in the log and nothing else."""

    def notify(self, event: ReminderEvent) -> None:
        logger.info(
            "reminder kind=%s user=%s date=%s checkpoint=%s",
            event.kind.value,
            event.user_id,
            event.work_date,
            event.checkpoint.isoformat(),
        )
