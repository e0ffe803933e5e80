"""Launch-on-login integration."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
import plistlib
import subprocess
import sys
from typing import Optional, Protocol

logger = logging.getLogger(__name__)

APP_LABEL = "FlashPrompter"
RUN_REGISTRY_PATH = r"Software\Microsoft\Windows\CurrentVersion\Run"


class AutostartBridge(Protocol):
    """OS launch-on-login service. Every call may suspend or fail."""

    async def is_enabled(self) -> bool: ...

    async def enable(self) -> None: ...

    async def disable(self) -> None: ...


def launch_command() -> list[str]:
    """Return the argv used to start the app at login."""
    return [sys.executable, "-m", "flash_prompter"]


class _Backend(Protocol):
    def is_enabled(self) -> bool: ...

    def enable(self, argv: list[str]) -> None: ...

    def disable(self) -> None: ...


class WindowsRunKey:
    """HKCU Run registry value."""

    def __init__(self, name: str = APP_LABEL) -> None:
        self._name = name

    def is_enabled(self) -> bool:
        import winreg  # type: ignore[import-not-found]

        try:
            with winreg.OpenKey(
                winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH, 0, winreg.KEY_READ
            ) as key:
                winreg.QueryValueEx(key, self._name)
        except FileNotFoundError:
            return False
        return True

    def enable(self, argv: list[str]) -> None:
        import winreg  # type: ignore[import-not-found]

        command = subprocess.list2cmdline(argv)
        with winreg.CreateKey(winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH) as key:
            winreg.SetValueEx(key, self._name, 0, winreg.REG_SZ, command)

    def disable(self) -> None:
        import winreg  # type: ignore[import-not-found]

        with winreg.CreateKey(winreg.HKEY_CURRENT_USER, RUN_REGISTRY_PATH) as key:
            try:
                winreg.DeleteValue(key, self._name)
            except FileNotFoundError:
                pass


class LaunchAgent:
    """Per-user LaunchAgent plist on macOS."""

    def __init__(
        self,
        label: str = "com.flashprompter.app",
        agents_dir: Optional[Path] = None,
    ) -> None:
        self._label = label
        self._agents_dir = agents_dir or Path.home() / "Library" / "LaunchAgents"

    @property
    def path(self) -> Path:
        return self._agents_dir / f"{self._label}.plist"

    def is_enabled(self) -> bool:
        return self.path.is_file()

    def enable(self, argv: list[str]) -> None:
        self._agents_dir.mkdir(parents=True, exist_ok=True)
        payload = {
            "Label": self._label,
            "ProgramArguments": argv,
            "RunAtLoad": True,
        }
        with open(self.path, "wb") as handle:
            plistlib.dump(payload, handle)

    def disable(self) -> None:
        self.path.unlink(missing_ok=True)


class XdgAutostart:
    """Desktop entry in the XDG autostart directory."""

    def __init__(
        self, name: str = "flash-prompter", autostart_dir: Optional[Path] = None
    ) -> None:
        self._name = name
        if autostart_dir is None:
            base = os.environ.get("XDG_CONFIG_HOME")
            root = Path(base) if base else Path.home() / ".config"
            autostart_dir = root / "autostart"
        self._autostart_dir = autostart_dir

    @property
    def path(self) -> Path:
        return self._autostart_dir / f"{self._name}.desktop"

    def is_enabled(self) -> bool:
        path = self.path
        if not path.is_file():
            return False
        text = path.read_text(encoding="utf-8")
        return "X-GNOME-Autostart-enabled=false" not in text

    def enable(self, argv: list[str]) -> None:
        self._autostart_dir.mkdir(parents=True, exist_ok=True)
        exec_line = " ".join(_quote_desktop_arg(arg) for arg in argv)
        lines = [
            "[Desktop Entry]",
            "Type=Application",
            f"Name={APP_LABEL}",
            f"Exec={exec_line}",
            "Terminal=true",
            "X-GNOME-Autostart-enabled=true",
        ]
        self.path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def disable(self) -> None:
        self.path.unlink(missing_ok=True)


def _quote_desktop_arg(arg: str) -> str:
    if not any(ch in arg for ch in ' \t"\'\\$`'):
        return arg
    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("$", "\\$").replace("`", "\\`")
    return f'"{escaped}"'


def _platform() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "macos"
    return "posix"


def default_backend() -> _Backend:
    platform = _platform()
    if platform == "windows":
        return WindowsRunKey()
    if platform == "macos":
        return LaunchAgent()
    return XdgAutostart()


class SystemAutostart:
    """AutostartBridge backed by the current platform's login items.

    Blocking filesystem and registry calls run in a worker thread.
    """

    def __init__(
        self,
        backend: Optional[_Backend] = None,
        argv: Optional[list[str]] = None,
    ) -> None:
        self._backend = backend or default_backend()
        self._argv = argv or launch_command()

    async def is_enabled(self) -> bool:
        try:
            return await asyncio.to_thread(self._backend.is_enabled)
        except Exception:
            logger.exception("Autostart query failed")
            return False

    async def enable(self) -> None:
        await asyncio.to_thread(self._backend.enable, self._argv)
        logger.info("Autostart enabled")

    async def disable(self) -> None:
        await asyncio.to_thread(self._backend.disable)
        logger.info("Autostart disabled")
