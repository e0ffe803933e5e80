"""Frame-driven playback clock for the prompter."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from flash_prompter.session import PlaybackSession

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]


class Cancellable(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    """Schedules a one-shot callback that receives a timestamp in ms.

    Stopping the returned handle before it fires guarantees the callback never
    runs.
    """

    def schedule(self, callback: TickCallback) -> Cancellable: ...


class PlaybackClock:
    """Advances a PlaybackSession from frame timestamps.

    Each play interval runs a single tick chain. Starting a new interval bumps
    the chain generation so a late callback from an older chain is ignored.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        total_seconds: float,
        *,
        session: Optional[PlaybackSession] = None,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._scheduler = scheduler
        self._total_seconds = self._checked_duration(total_seconds)
        self.session = session or PlaybackSession()
        self._on_change = on_change
        self._pending: Optional[Cancellable] = None
        self._generation = 0

    @property
    def total_seconds(self) -> float:
        return self._total_seconds

    @property
    def progress(self) -> float:
        return self.session.progress

    @property
    def is_playing(self) -> bool:
        return self.session.is_playing

    @property
    def elapsed_seconds(self) -> float:
        """Script time represented by the current progress."""
        return self.session.progress * self._total_seconds

    def play(self, *, from_start: bool = False) -> None:
        """Begin or resume a play interval anchored at the current progress."""
        session = self.session
        if from_start:
            session.progress = 0.0
        session.start_progress = session.progress
        session.start_time = None
        session.is_playing = True
        self._restart_chain()
        logger.debug("Play interval from %.4f", session.start_progress)
        self._notify()

    def pause(self) -> None:
        session = self.session
        if not session.is_playing:
            return
        self._cancel_chain()
        session.is_playing = False
        session.start_progress = session.progress
        session.start_time = None
        logger.debug("Paused at %.4f", session.progress)
        self._notify()

    def reset(self) -> None:
        """Stop any play interval and rewind to the beginning."""
        self._cancel_chain()
        self.session.reset()
        self._notify()

    def close(self) -> None:
        """Cancel the pending tick without touching the session."""
        self._cancel_chain()

    def set_duration(self, total_seconds: float) -> None:
        """Change the scroll duration.

        While playing, the current position becomes the new anchor so only the
        rate of future progress changes.
        """
        total_seconds = self._checked_duration(total_seconds)
        if total_seconds == self._total_seconds:
            return
        self._total_seconds = total_seconds
        session = self.session
        if session.is_playing:
            session.start_progress = session.progress
            session.start_time = None
            self._restart_chain()
            logger.debug("Duration changed mid-play to %.2fs", total_seconds)

    def _tick(self, timestamp_ms: float) -> None:
        """Apply one frame. Only meaningful while playing."""
        session = self.session
        if not session.is_playing:
            return
        if session.start_time is None:
            session.start_time = timestamp_ms
            self._schedule_next()
            return
        elapsed = (timestamp_ms - session.start_time) / 1000.0
        candidate = session.start_progress + elapsed / self._total_seconds
        if candidate >= 1.0:
            session.progress = 1.0
            session.start_progress = 1.0
            session.is_playing = False
            session.start_time = None
            self._pending = None
            logger.info("Playback reached the end")
            self._notify()
            return
        # Clock skew must never move a running interval backwards.
        session.progress = max(session.progress, candidate)
        self._schedule_next()
        self._notify()

    def _restart_chain(self) -> None:
        self._cancel_chain()
        self._schedule_next()

    def _cancel_chain(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.stop()
            self._pending = None

    def _schedule_next(self) -> None:
        generation = self._generation

        def fire(timestamp_ms: float) -> None:
            if generation != self._generation:
                return
            self._pending = None
            self._tick(timestamp_ms)

        self._pending = self._scheduler.schedule(fire)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()

    @staticmethod
    def _checked_duration(total_seconds: float) -> float:
        if total_seconds <= 0:
            raise ValueError(f"Playback duration must be positive: {total_seconds}")
        return float(total_seconds)
