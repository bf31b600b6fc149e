from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationSettings:
    """Per-user reminder switches. Users without a stored row get these defaults."""

    user_id: str
    enable_check_in_reminders: bool = True
    enable_check_out_reminders: bool = True

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "enableCheckInReminders": self.enable_check_in_reminders,
            "enableCheckOutReminders": self.enable_check_out_reminders,
        }
