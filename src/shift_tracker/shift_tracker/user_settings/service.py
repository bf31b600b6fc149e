from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import NotificationSettings
from .repository import UserSettingsRepository

logger = logging.getLogger(__name__)


def _require_bool(value, field_name: str) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    raise ValidationError(f"{field_name} must be true or false")


class UserSettingsService:
    def __init__(self, settings: UserSettingsRepository):
        self._settings = settings

    def get_notifications(self, user_id: str) -> NotificationSettings:
        user_id = require_non_empty(user_id, "user_id")
        return self._settings.get(user_id) or NotificationSettings(user_id=user_id)

    def update_notifications(
        self,
        user_id: str,
        *,
        enable_check_in_reminders: Optional[bool] = None,
        enable_check_out_reminders: Optional[bool] = None,
    ) -> NotificationSettings:
        """Change the given switches; ``None`` leaves a switch as it is."""
        check_in = _require_bool(enable_check_in_reminders, "enableCheckInReminders")
        check_out = _require_bool(enable_check_out_reminders, "enableCheckOutReminders")
        if check_in is None and check_out is None:
            raise ValidationError("nothing to update")

        current = self.get_notifications(user_id)
        updated = replace(
            current,
            enable_check_in_reminders=current.enable_check_in_reminders if check_in is None else check_in,
            enable_check_out_reminders=current.enable_check_out_reminders if check_out is None else check_out,
        )
        self._settings.save(updated)
        logger.info(
            "notification settings user=%s check_in=%s check_out=%s",
            updated.user_id,
            updated.enable_check_in_reminders,
            updated.enable_check_out_reminders,
        )
        return updated

    def checkout_reminders_enabled(self, user_id: str) -> bool:
        return self.get_notifications(user_id).enable_check_out_reminders
