"""Textual-based TUI for Flash Prompter."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, cast

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.screen import Screen
    from textual.widgets import Button, Header, Static, TextArea
    from rich.text import Text
except Exception as exc:  # pragma: no cover - depends on environment
    raise RuntimeError(
        "Textual is required for the TUI. Install the 'textual' dependency."
    ) from exc

from flash_prompter.autostart import AutostartBridge, SystemAutostart
from flash_prompter.config import SETTING_RANGES
from flash_prompter.controller import PrompterController
from flash_prompter.logging_setup import set_console_level
from flash_prompter.session import Mode, Script
from flash_prompter.settings_store import SettingsStore
from flash_prompter.storage import LocalStore
from flash_prompter.ui.formatters import (
    format_px,
    format_wpm,
    playback_state_label,
    render_status_line,
    scroll_target,
    spaced_text,
)
from flash_prompter.ui.frame_scheduler import FrameScheduler
from flash_prompter.window import ConsoleWindowHost, WindowHost

logger = logging.getLogger(__name__)

_STATE_STYLES: dict[str, str] = {
    "PLAYING": "#5fc9d6",
    "PAUSED": "#ffcc66",
    "DONE": "#8ae68a",
}

_SETTING_LABELS: dict[str, tuple[str, Callable[[float], str]]] = {
    "words_per_minute": ("Scroll speed", format_wpm),
    "font_size": ("Font size", format_px),
    "line_height": ("Line height", format_px),
}


class _PrompterScreen(Screen):
    """Screen bound to the app's controller."""

    @property
    def controller(self) -> PrompterController:
        return cast("FlashPrompterApp", self.app).controller

    def refresh_view(self) -> None:
        return None

    def on_screen_resume(self) -> None:
        self.refresh_view()


# Screens
class InputScreen(_PrompterScreen):
    """Script entry."""

    AUTO_FOCUS = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Vertical(id="input_root"):
            yield TextArea(self.controller.script.content, id="script_input")
            with Horizontal(id="input_controls", classes="controls"):
                yield Button("Start", id="input_start", classes="control_button")
                yield Button("Settings", id="input_settings", classes="control_button")

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        self.controller.set_content(event.text_area.text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "input_start":
            self.controller.start()
        elif event.button.id == "input_settings":
            self.controller.open_settings()


class PrompterView(_PrompterScreen):
    """Scrolling script with transport controls."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._rendered_text: Optional[str] = None

    def compose(self) -> ComposeResult:
        with Vertical(id="prompter_root"):
            with VerticalScroll(id="prompter_scroll"):
                yield Static("", id="prompter_text", markup=False)
            yield Static("", id="prompter_status", markup=False)
            with Horizontal(id="prompter_controls", classes="controls"):
                yield Button("Play", id="prompter_playpause", classes="control_button")
                yield Button("Stop", id="prompter_stop", classes="control_button")
                yield Button(
                    "Settings", id="prompter_settings", classes="control_button"
                )

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        if not self.is_mounted:
            return
        controller = self.controller
        settings = controller.settings
        text = spaced_text(
            controller.script.content, settings.font_size, settings.line_height
        )
        if text != self._rendered_text:
            self._rendered_text = text
            self.query_one("#prompter_text", Static).update(text)
        status = self.query_one("#prompter_status", Static)
        line = render_status_line(
            is_playing=controller.is_playing,
            progress=controller.progress,
            elapsed_seconds=controller.clock.elapsed_seconds,
            total_seconds=controller.clock.total_seconds,
            words_per_minute=settings.words_per_minute,
            width=status.size.width,
        )
        label = playback_state_label(
            is_playing=controller.is_playing, progress=controller.progress
        )
        style = _STATE_STYLES.get(label)
        status.update(Text(line, style=style) if style else Text(line))
        button = self.query_one("#prompter_playpause", Button)
        button.label = "Pause" if controller.is_playing else "Play"
        scroll = self.query_one("#prompter_scroll", VerticalScroll)
        scroll.scroll_to(
            y=scroll_target(controller.progress, scroll.max_scroll_y), animate=False
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        control_id = event.button.id
        controller = self.controller
        if control_id == "prompter_playpause":
            if controller.is_playing:
                controller.pause()
            else:
                controller.start()
        elif control_id == "prompter_stop":
            controller.stop()
        elif control_id == "prompter_settings":
            controller.open_settings()


class SettingsView(_PrompterScreen):
    """Speed, typography and autostart settings."""

    BINDINGS = [Binding("escape", "close_settings", "Back")]

    def compose(self) -> ComposeResult:
        with Vertical(id="settings_root"):
            with Horizontal(id="settings_header"):
                yield Button("Back", id="settings_back", classes="control_button")
                yield Static("Settings", id="settings_title")
                yield Button("Restore defaults", id="settings_restore")
            with Horizontal(classes="settings_row"):
                yield Static("Launch at login", classes="settings_label")
                yield Button("Off", id="settings_autostart", classes="settings_toggle")
            for field, (label, _fmt) in _SETTING_LABELS.items():
                with Horizontal(classes="settings_row"):
                    yield Static(label, classes="settings_label")
                    yield Button("-", id=f"dec_{field}", classes="settings_step")
                    yield Static("", id=f"value_{field}", classes="settings_value")
                    yield Button("+", id=f"inc_{field}", classes="settings_step")

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        if not self.is_mounted:
            return
        settings = self.controller.settings
        self.query_one("#settings_autostart", Button).label = (
            "On" if settings.auto_start else "Off"
        )
        for field, (_label, fmt) in _SETTING_LABELS.items():
            self.query_one(f"#value_{field}", Static).update(
                fmt(getattr(settings, field))
            )

    def action_close_settings(self) -> None:
        self.controller.close_settings()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        control_id = event.button.id or ""
        store = self.controller.settings_store
        if control_id == "settings_back":
            self.controller.close_settings()
        elif control_id == "settings_restore":
            await store.restore_defaults()
        elif control_id == "settings_autostart":
            await store.toggle_auto_start()
        elif control_id.startswith(("dec_", "inc_")):
            field = control_id[4:]
            if field in SETTING_RANGES:
                store.adjust(field, -1 if control_id.startswith("dec_") else 1)
        self.refresh_view()


# Main application
class FlashPrompterApp(App):
    """Flash Prompter Textual application."""

    CSS_PATH = "app.tcss"
    TITLE = "Flash Prompter"
    MODES = {
        Mode.INPUT.value: InputScreen,
        Mode.PROMPTER.value: PrompterView,
        Mode.SETTINGS.value: SettingsView,
    }

    BINDINGS = [
        Binding("space", "toggle_playback", "Play/Pause"),
        Binding("f2", "open_settings", "Settings"),
        Binding("ctrl+q", "quit_app", "Quit"),
    ]

    def __init__(
        self,
        *,
        content: Optional[str] = None,
        wpm: Optional[int] = None,
        store: Optional[LocalStore] = None,
        autostart: Optional[AutostartBridge] = None,
        window: Optional[WindowHost] = None,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__()
        self._wpm_override = wpm
        settings_store = SettingsStore(
            store or LocalStore(), autostart or SystemAutostart()
        )
        self.controller = PrompterController(
            settings_store,
            FrameScheduler(self, now=now),
            window=window or ConsoleWindowHost(),
            script=Script(content) if content is not None else None,
        )
        self._shown_mode: Optional[Mode] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    async def on_mount(self) -> None:
        store = self.controller.settings_store
        await store.load()
        if self._wpm_override is not None:
            store.set_clamped("words_per_minute", self._wpm_override)
        self._unsubscribe = self.controller.subscribe(self._on_state_changed)
        self.controller.hide_from_capture()
        self._sync_mode()
        logger.info("TUI mounted")

    def on_unmount(self) -> None:
        self._shutdown_controller()

    # --- Actions ---
    def action_toggle_playback(self) -> None:
        self.controller.toggle()

    def action_open_settings(self) -> None:
        self.controller.open_settings()

    def action_quit_app(self) -> None:
        logger.info("TUI exit requested")
        self._shutdown_controller()
        self.exit()

    # --- Internal helpers ---
    def _on_state_changed(self) -> None:
        self._sync_mode()
        screen = self.screen
        if isinstance(screen, _PrompterScreen):
            screen.refresh_view()

    def _sync_mode(self) -> None:
        mode = self.controller.mode
        if mode is self._shown_mode:
            return
        self._shown_mode = mode
        logger.debug("Switching to %s screen", mode.value)
        self.switch_mode(mode.value)

    def _shutdown_controller(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.close()


# Public entrypoints
def run_tui(content: Optional[str] = None, *, wpm: Optional[int] = None) -> int:
    """Run the TUI and return an exit code."""
    logger.info("TUI start wpm=%s", wpm)
    try:
        set_console_level(logging.WARNING)
    except Exception:
        logger.exception("Failed to set console log level for TUI")
    app = FlashPrompterApp(content=content, wpm=wpm)
    app.run()
    logger.info("TUI exit")
    return 0
