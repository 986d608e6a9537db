from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Deque, Iterable, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyCode(Enum):
    """Symbolic key codes the turn loop understands.

    Printable characters arrive as ``TEXT`` with the character in
    :attr:`KeyEvent.text`, so backends only need to translate the few
    special keys.
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TEXT = auto()


@dataclass(frozen=True)
class KeyEvent:
    code: KeyCode
    text: str = ""
    alt: bool = False


@dataclass(frozen=True)
class PointerEvent:
    """Pointer moved over console cell (cx, cy)."""

    cx: int
    cy: int


InputEvent = Union[KeyEvent, PointerEvent]


class InputSource(Protocol):
    """Anything the loop can poll for the next event."""

    @property
    def closed(self) -> bool:  # pragma: no cover - interface
        ...

    def poll(self) -> Optional[InputEvent]:  # pragma: no cover - interface
        ...


_NAMED_KEYS = {
    "UP": KeyCode.UP,
    "DOWN": KeyCode.DOWN,
    "LEFT": KeyCode.LEFT,
    "RIGHT": KeyCode.RIGHT,
    "ENTER": KeyCode.ENTER,
    "RETURN": KeyCode.ENTER,
    "ESC": KeyCode.ESCAPE,
    "ESCAPE": KeyCode.ESCAPE,
}


def parse_key(name: str) -> KeyEvent:
    """Parse a key name such as ``"up"``, ``"alt+enter"`` or ``"g"``.

    Named keys are case-insensitive; a single character becomes a TEXT key.
    """
    raw = name.strip()
    alt = False
    if raw.lower().startswith("alt+"):
        alt = True
        raw = raw[4:]
    code = _NAMED_KEYS.get(raw.upper())
    if code is not None:
        return KeyEvent(code, alt=alt)
    if len(raw) == 1:
        return KeyEvent(KeyCode.TEXT, text=raw, alt=alt)
    raise ValueError(f"Unknown key name: {name!r}")


class ScriptedInput:
    """Replays a fixed sequence of events, then reports itself closed."""

    def __init__(self, events: Iterable[InputEvent]) -> None:
        self._events: Deque[InputEvent] = deque(events)

    @classmethod
    def from_keys(cls, keys: Iterable[str]) -> "ScriptedInput":
        return cls(parse_key(k) for k in keys if k.strip())

    @property
    def closed(self) -> bool:
        return not self._events

    def poll(self) -> Optional[InputEvent]:
        if not self._events:
            return None
        event = self._events.popleft()
        logger.debug("Scripted input: %s", event)
        return event
