"""Pytest configuration and shared fakes for Flash Prompter."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from flash_prompter.controller import PrompterController
from flash_prompter.session import Script
from flash_prompter.settings_store import SettingsStore
from flash_prompter.storage import LocalStore


class ManualHandle:
    def __init__(self, callback: Callable[[float], None]) -> None:
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class ManualScheduler:
    """Explicit tick queue: nothing runs until ``fire`` is called."""

    def __init__(self, start_ms: float = 1000.0) -> None:
        self.now_ms = start_ms
        self.pending: list[ManualHandle] = []

    def schedule(self, callback: Callable[[float], None]) -> ManualHandle:
        handle = ManualHandle(callback)
        self.pending.append(handle)
        return handle

    def active(self) -> list[ManualHandle]:
        return [handle for handle in self.pending if not handle.stopped]

    def fire(self, advance_ms: float = 0.0) -> None:
        self.now_ms += advance_ms
        ready = self.active()
        self.pending = []
        for handle in ready:
            handle.callback(self.now_ms)

    def elapse(self, advance_ms: float) -> None:
        """Let wall-clock time pass without delivering a frame."""
        self.now_ms += advance_ms


class FakeAutostart:
    def __init__(
        self,
        enabled: bool = False,
        *,
        fail_query: bool = False,
        fail_enable: bool = False,
        fail_disable: bool = False,
    ) -> None:
        self.enabled = enabled
        self.fail_query = fail_query
        self.fail_enable = fail_enable
        self.fail_disable = fail_disable
        self.calls: list[str] = []

    async def is_enabled(self) -> bool:
        self.calls.append("is_enabled")
        if self.fail_query:
            raise OSError("query failed")
        return self.enabled

    async def enable(self) -> None:
        self.calls.append("enable")
        if self.fail_enable:
            raise OSError("enable failed")
        self.enabled = True

    async def disable(self) -> None:
        self.calls.append("disable")
        if self.fail_disable:
            raise OSError("disable failed")
        self.enabled = False


class FakeWindow:
    def __init__(self) -> None:
        self.calls: list[bool] = []
        self.excluded = 0

    def set_always_on_top(self, enabled: bool) -> None:
        self.calls.append(enabled)

    def exclude_from_capture(self) -> None:
        self.excluded += 1


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def autostart() -> FakeAutostart:
    return FakeAutostart()


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow()


@pytest.fixture
def local_store(tmp_path: Path) -> LocalStore:
    return LocalStore(lambda: tmp_path / "storage.json")


@pytest.fixture
def settings_store(local_store: LocalStore, autostart: FakeAutostart) -> SettingsStore:
    return SettingsStore(local_store, autostart)


@pytest.fixture
def controller(
    settings_store: SettingsStore, scheduler: ManualScheduler, window: FakeWindow
) -> PrompterController:
    """Ten words at the default 60 WPM: a ten second script."""
    return PrompterController(
        settings_store,
        scheduler,
        window=window,
        script=Script("one two three four five six seven eight nine ten"),
    )
