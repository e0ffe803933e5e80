"""Host window pinning and capture exclusion."""

from __future__ import annotations

import logging
import os
from typing import Any, Protocol

logger = logging.getLogger(__name__)

HWND_TOPMOST = -1
HWND_NOTOPMOST = -2
SWP_NOSIZE = 0x0001
SWP_NOMOVE = 0x0002
WDA_EXCLUDEFROMCAPTURE = 0x00000011


class WindowHost(Protocol):
    def set_always_on_top(self, enabled: bool) -> None: ...

    def exclude_from_capture(self) -> None: ...


def _is_windows() -> bool:
    return os.name == "nt"


def _windll() -> Any:
    import ctypes

    return ctypes.windll  # type: ignore[attr-defined]


class ConsoleWindowHost:
    """Adjusts the hosting console window where the platform allows it.

    Every call is best-effort: failures are logged, never raised.
    """

    def set_always_on_top(self, enabled: bool) -> None:
        if not _is_windows():
            logger.debug("Always-on-top unsupported here (enabled=%s)", enabled)
            return
        try:
            windll = _windll()
            hwnd = windll.kernel32.GetConsoleWindow()
            if not hwnd:
                logger.debug("No console window to pin")
                return
            insert_after = HWND_TOPMOST if enabled else HWND_NOTOPMOST
            windll.user32.SetWindowPos(
                hwnd, insert_after, 0, 0, 0, 0, SWP_NOMOVE | SWP_NOSIZE
            )
        except Exception:
            logger.exception("Failed to set always-on-top=%s", enabled)

    def exclude_from_capture(self) -> None:
        """Hide the window from screen recordings and screenshots."""
        if not _is_windows():
            logger.debug("Capture exclusion unsupported here")
            return
        try:
            windll = _windll()
            hwnd = windll.kernel32.GetConsoleWindow()
            if not hwnd:
                logger.debug("No console window to exclude from capture")
                return
            if not windll.user32.SetWindowDisplayAffinity(
                hwnd, WDA_EXCLUDEFROMCAPTURE
            ):
                logger.warning("SetWindowDisplayAffinity was refused")
        except Exception:
            logger.exception("Failed to exclude window from capture")
