"""Maps the toggle key to playback actions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flash_prompter.session import Mode

if TYPE_CHECKING:
    from flash_prompter.controller import PrompterController

logger = logging.getLogger(__name__)


class InputDispatcher:
    def __init__(self, controller: "PrompterController") -> None:
        self._controller = controller

    def toggle(self) -> None:
        controller = self._controller
        mode = controller.mode
        if mode is Mode.SETTINGS:
            logger.debug("Toggle ignored in settings")
            return
        if mode is Mode.PROMPTER and controller.is_playing:
            controller.pause()
        else:
            controller.start()
