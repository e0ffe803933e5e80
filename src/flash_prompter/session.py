"""Script, playback session and screen-mode state for Flash Prompter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

DEFAULT_SCRIPT = """Welcome to Flash Prompter

This is the default prompter text.
Start recording right away and press Space to play or pause.

Good luck with your recording."""


class Mode(str, Enum):
    """Application screens."""

    INPUT = "input"
    PROMPTER = "prompter"
    SETTINGS = "settings"


@dataclass(frozen=True)
class Script:
    """Text to scroll, replaced wholesale on every edit."""

    content: str = DEFAULT_SCRIPT

    @property
    def word_count(self) -> int:
        """Whitespace-delimited tokens, never less than one."""
        return len(self.content.split()) or 1


def total_seconds(word_count: int, words_per_minute: float) -> float:
    """Return how long a script takes to scroll at the given speed."""
    if word_count < 1 or words_per_minute <= 0:
        raise ValueError(
            f"Invalid duration inputs: words={word_count} wpm={words_per_minute}"
        )
    return word_count / (words_per_minute / 60.0)


@dataclass
class PlaybackSession:
    """Progress and anchors of the current play interval."""

    progress: float = 0.0
    is_playing: bool = False
    start_progress: float = 0.0
    start_time: Optional[float] = None

    def reset(self) -> None:
        self.progress = 0.0
        self.is_playing = False
        self.start_progress = 0.0
        self.start_time = None


@dataclass
class ModeState:
    """Current screen plus the screen to restore when settings close."""

    current: Mode = Mode.INPUT
    settings_return_mode: Mode = field(default=Mode.INPUT)

    def enter_prompter(self) -> bool:
        """Move from Input to Prompter; return True on a real transition."""
        if self.current is not Mode.INPUT:
            return False
        self.current = Mode.PROMPTER
        return True

    def exit_prompter(self) -> None:
        self.current = Mode.INPUT

    def open_settings(self) -> bool:
        """Enter Settings, remembering where we came from.

        Returns False without changing anything when Settings is already open.
        """
        if self.current is Mode.SETTINGS:
            return False
        self.settings_return_mode = self.current
        self.current = Mode.SETTINGS
        return True

    def close_settings(self) -> bool:
        if self.current is not Mode.SETTINGS:
            return False
        self.current = self.settings_return_mode
        return True
