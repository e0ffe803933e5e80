"""Settings store reconciled with the OS autostart service."""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Callable, Optional

from flash_prompter.autostart import AutostartBridge
from flash_prompter.config import (
    DEFAULT_SETTINGS,
    SETTING_RANGES,
    SETTINGS_KEY,
    Number,
    Settings,
    clamp_setting,
    settings_from_mapping,
    settings_to_mapping,
)
from flash_prompter.storage import LocalStore

logger = logging.getLogger(__name__)


class SettingsStore:
    """Single source of truth for tunable parameters.

    Persistence and autostart failures never propagate; the only compensating
    action is the rollback in ``toggle_auto_start``.
    """

    def __init__(
        self,
        store: LocalStore,
        autostart: AutostartBridge,
        *,
        on_change: Optional[Callable[[Settings], None]] = None,
    ) -> None:
        self._store = store
        self._autostart = autostart
        self._settings = DEFAULT_SETTINGS
        self._on_change = on_change

    @property
    def settings(self) -> Settings:
        return self._settings

    def set_listener(self, on_change: Optional[Callable[[Settings], None]]) -> None:
        self._on_change = on_change

    async def load(self) -> Settings:
        """Merge the persisted record with the live autostart state."""
        stored = self._read_record()
        try:
            auto_start = bool(await self._autostart.is_enabled())
        except Exception:
            logger.exception("Failed to query autostart state")
            auto_start = False
        merged = dict(stored)
        merged["autoStart"] = auto_start
        self._apply(settings_from_mapping(merged))
        logger.info("Settings loaded: %s", self._settings)
        return self._settings

    def update(self, **changes: Any) -> Settings:
        """Shallow-merge changes and persist. Values are stored as given."""
        self._apply(replace(self._settings, **changes))
        return self._settings

    def set_clamped(self, field: str, value: Number) -> Settings:
        """Input-boundary setter: clamp a numeric field, then update."""
        return self.update(**{field: clamp_setting(field, value)})

    def adjust(self, field: str, steps: int) -> Settings:
        """Move a numeric field by whole slider steps."""
        _min_value, _max_value, step = SETTING_RANGES[field]
        current = getattr(self._settings, field)
        return self.set_clamped(field, current + steps * step)

    async def toggle_auto_start(self) -> bool:
        """Flip autostart optimistically; revert if the OS call fails."""
        previous = self._settings.auto_start
        desired = not previous
        self.update(auto_start=desired)
        try:
            if desired:
                await self._autostart.enable()
            else:
                await self._autostart.disable()
        except Exception:
            logger.exception("Failed to set autostart=%s; reverting", desired)
            self.update(auto_start=previous)
        return self._settings.auto_start

    async def restore_defaults(self) -> Settings:
        self._apply(DEFAULT_SETTINGS)
        logger.info("Settings restored to defaults")
        try:
            await self._autostart.disable()
        except Exception:
            logger.exception("Failed to disable autostart while restoring defaults")
        return self._settings

    def _apply(self, settings: Settings) -> None:
        self._settings = settings
        self._persist()
        if self._on_change is not None:
            self._on_change(settings)

    def _persist(self) -> None:
        try:
            self._store.set_item(SETTINGS_KEY, settings_to_mapping(self._settings))
        except Exception:
            logger.exception("Failed to persist settings")

    def _read_record(self) -> dict[str, Any]:
        try:
            record = self._store.get_item(SETTINGS_KEY)
        except Exception:
            logger.exception("Failed to read persisted settings")
            return {}
        if not isinstance(record, dict):
            if record is not None:
                logger.warning("Ignoring malformed settings record")
            return {}
        return record
