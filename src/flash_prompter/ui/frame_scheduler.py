"""Textual timer-backed frame scheduler for the playback clock."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Protocol

from flash_prompter.playback import Cancellable, TickCallback

logger = logging.getLogger(__name__)


class _TimerHost(Protocol):
    def set_timer(self, delay: float, callback: Callable[[], Any]) -> Cancellable: ...


class _Unscheduled:
    def stop(self) -> None:
        return None


class FrameScheduler:
    """One-shot frame callbacks stamped with a monotonic time in ms."""

    FRAME_SECONDS = 1 / 60

    def __init__(
        self,
        host: _TimerHost,
        *,
        now: Callable[[], float] = time.monotonic,
        frame_seconds: float = FRAME_SECONDS,
    ) -> None:
        self._host = host
        self._now = now
        self._frame_seconds = max(0.001, frame_seconds)

    def schedule(self, callback: TickCallback) -> Cancellable:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop; frame not scheduled")
            return _Unscheduled()

        def fire() -> None:
            callback(self._now() * 1000.0)

        return self._host.set_timer(self._frame_seconds, fire)
