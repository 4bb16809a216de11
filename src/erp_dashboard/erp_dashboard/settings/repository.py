from __future__ import annotations

from typing import Any, Optional, Protocol

from .model import SystemSettings


class SettingsRepository(Protocol):
    def get_first(self) -> Optional[SystemSettings]:
        raise NotImplementedError

    def insert(self, values: dict[str, Any]) -> int:
        raise NotImplementedError

    def update(self, settings_id: int, values: dict[str, Any]) -> None:
        raise NotImplementedError
