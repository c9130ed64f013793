from __future__ import annotations
import logging
from typing import List

logger = logging.getLogger(__name__)


class DebugLog:
    """
    Text sink owned by the game state.

    Two channels:
    - ``debug()`` lines live for one frame; the HUD drains them every frame.
    - ``log()`` messages persist (capped at ``max_size``) and the HUD shows
      the most recent few. They are mirrored to the ``logging`` module.
    """

    def __init__(self, max_size: int = 60) -> None:
        self.lines: List[str] = []
        self.messages: List[str] = []
        self.max_size = max_size

    def debug(self, text: str) -> None:
        self.lines.append(text)

    def drain(self) -> List[str]:
        lines, self.lines = self.lines, []
        return lines

    def log(self, text: str) -> None:
        self.messages.append(text)
        if len(self.messages) > self.max_size:
            del self.messages[: len(self.messages) - self.max_size]
        logger.info(text)

    def recent(self, n: int = 4) -> List[str]:
        return self.messages[-n:] if n > 0 else []
