from __future__ import annotations

import logging
import textwrap
from typing import Iterator, List, Optional, Tuple

from ..colors import Color, WHITE

logger = logging.getLogger(__name__)

Message = Tuple[str, Color]


class MessageLog:
    """Append-only record of game messages with their display colour.

    - Insertion ordered; the newest message is last.
    - Unbounded by default; with a capacity, the oldest entries are dropped.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._messages: List[Message] = []

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def add(self, text: str, color: Color = WHITE) -> None:
        self._messages.append((str(text), color))
        if self._capacity is not None and len(self._messages) > self._capacity:
            del self._messages[0 : len(self._messages) - self._capacity]
        logger.debug("Message: %s", text)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def texts(self) -> List[str]:
        return [text for text, _ in self._messages]

    def last(self) -> Optional[Message]:
        return self._messages[-1] if self._messages else None

    def visible_lines(self, width: int, height: int) -> List[Tuple[int, str, Color]]:
        """Lay out messages bottom-up for a ``width`` x ``height`` area.

        Returns ``(row, line, colour)`` triples. The newest message occupies
        the bottom rows; older ones stack above it until a whole message no
        longer fits.
        """
        placed: List[Tuple[int, str, Color]] = []
        y = height
        for text, color in reversed(self._messages):
            lines = textwrap.wrap(text, width) or [""]
            y -= len(lines)
            if y < 0:
                break
            for offset, line in enumerate(lines):
                placed.append((y + offset, line, color))
        placed.sort(key=lambda item: item[0])
        return placed
