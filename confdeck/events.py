"""Events delivered by the terminal to the application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from confdeck.keys import KeyEvent

_MAX_DIMENSION = 0xFFFF


class EventKind(Enum):
    INIT = "Init"
    QUIT = "Quit"
    ERROR = "Error"
    CLOSED = "Closed"
    TICK = "Tick"
    RENDER = "Render"
    FOCUS_GAINED = "FocusGained"
    FOCUS_LOST = "FocusLost"
    PASTE = "Paste"
    KEY = "Key"
    MOUSE = "Mouse"
    RESIZE = "Resize"


def _check_size(payload: Any) -> tuple[int, int]:
    if not isinstance(payload, (tuple, list)) or len(payload) != 2:
        raise ValueError("Resize needs a (width, height) pair")
    for value in payload:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Resize dimensions must be integers")
        if not 0 <= value <= _MAX_DIMENSION:
            raise ValueError(f"Resize dimension out of range: {value}")
    return (payload[0], payload[1])


@dataclass(frozen=True)
class Event:
    """An event with its payload: a key, mouse event, pasted text or new size."""

    kind: EventKind
    payload: Any = None

    def __post_init__(self) -> None:
        if self.kind is EventKind.KEY:
            if not isinstance(self.payload, KeyEvent):
                raise ValueError("Key needs a KeyEvent")
        elif self.kind is EventKind.PASTE:
            if not isinstance(self.payload, str):
                raise ValueError("Paste needs the pasted text")
        elif self.kind is EventKind.RESIZE:
            object.__setattr__(self, "payload", _check_size(self.payload))
        elif self.kind is EventKind.MOUSE:
            if self.payload is None:
                raise ValueError("Mouse needs a mouse event")
        elif self.payload is not None:
            raise ValueError(f"{self.kind.value} takes no payload")