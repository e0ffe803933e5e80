"""Prompter controller: owns the script, playback session and screen mode."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from flash_prompter.config import Settings
from flash_prompter.dispatcher import InputDispatcher
from flash_prompter.playback import PlaybackClock, Scheduler
from flash_prompter.session import Mode, ModeState, Script, total_seconds
from flash_prompter.settings_store import SettingsStore
from flash_prompter.window import WindowHost

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class PrompterController:
    """Coordinates mode transitions with the playback clock.

    All methods run on the event loop thread; listeners are called after every
    state change.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        scheduler: Scheduler,
        *,
        window: Optional[WindowHost] = None,
        script: Optional[Script] = None,
    ) -> None:
        self.settings_store = settings_store
        self.script = script or Script()
        self.modes = ModeState()
        self._window = window
        self._listeners: list[Listener] = []
        self.clock = PlaybackClock(
            scheduler, self._duration(settings_store.settings), on_change=self._notify
        )
        self.dispatcher = InputDispatcher(self)
        settings_store.set_listener(self._on_settings_changed)

    # --- State ---
    @property
    def mode(self) -> Mode:
        return self.modes.current

    @property
    def settings(self) -> Settings:
        return self.settings_store.settings

    @property
    def progress(self) -> float:
        return self.clock.progress

    @property
    def is_playing(self) -> bool:
        return self.clock.is_playing

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- Operations ---
    def start(self) -> None:
        mode = self.modes.current
        if mode is Mode.SETTINGS:
            logger.warning("Start ignored while settings are open")
            return
        if mode is Mode.INPUT:
            self.modes.enter_prompter()
            logger.info("Prompting started (%d words)", self.script.word_count)
            self._pin_window()
            self.clock.play(from_start=True)
        else:
            logger.info("Playback resumed at %.3f", self.clock.progress)
            self.clock.play()

    def pause(self) -> None:
        if not self.clock.is_playing:
            return
        self.clock.pause()
        logger.info("Playback paused at %.3f", self.clock.progress)

    def stop(self) -> None:
        self.modes.exit_prompter()
        self.clock.reset()
        logger.info("Playback stopped")

    def toggle(self) -> None:
        self.dispatcher.toggle()

    def open_settings(self) -> None:
        if self.modes.current is Mode.SETTINGS:
            return
        self.clock.pause()
        self.modes.open_settings()
        logger.info("Settings opened from %s", self.modes.settings_return_mode.value)
        self._notify()

    def close_settings(self) -> None:
        if self.modes.close_settings():
            logger.info("Settings closed; back to %s", self.modes.current.value)
            self._notify()

    def set_content(self, content: str) -> None:
        """Replace the script; the playback session starts over."""
        if content == self.script.content:
            return
        self.script = Script(content)
        self.clock.reset()
        self.clock.set_duration(self._duration(self.settings))

    def hide_from_capture(self) -> None:
        """Keep the prompter window out of screen recordings."""
        if self._window is None:
            return
        try:
            self._window.exclude_from_capture()
        except Exception:
            logger.exception("Failed to exclude window from capture")

    def close(self) -> None:
        self.clock.close()
        self._listeners.clear()

    # --- Internal helpers ---
    def _duration(self, settings: Settings) -> float:
        return total_seconds(self.script.word_count, settings.words_per_minute)

    def _on_settings_changed(self, settings: Settings) -> None:
        self.clock.set_duration(self._duration(settings))
        self._notify()

    def _pin_window(self) -> None:
        if self._window is None:
            return
        try:
            self._window.set_always_on_top(True)
        except Exception:
            logger.exception("Failed to pin window")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
