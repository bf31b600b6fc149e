from __future__ import annotations

from typing import Optional, Protocol

from .model import NotificationSettings


class UserSettingsRepository(Protocol):
    def get(self, user_id: str) -> Optional[NotificationSettings]:
        raise NotImplementedError

    def save(self, settings: NotificationSettings) -> None:
        """Insert or overwrite the row for ``settings.user_id``."""

        raise NotImplementedError
