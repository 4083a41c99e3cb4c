"""Application modes and the actions passed between the event loop and components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Mode(Enum):
    """The mode the application is in; selects the active keymap."""

    SCHEDULE = "Schedule"
    SETTINGS = "Settings"
    EDIT = "Edit"

    def __str__(self) -> str:
        return self.value


class ActionKind(Enum):
    """Every kind of action the application understands."""

    TICK = "Tick"
    RENDER = "Render"
    RESIZE = "Resize"
    SUSPEND = "Suspend"
    RESUME = "Resume"
    QUIT = "Quit"
    CLEAR_SCREEN = "ClearScreen"
    ERROR = "Error"
    HELP = "Help"
    CHANGE_MODE = "ChangeMode"


_MAX_DIMENSION = 0xFFFF


def _check_resize(payload: Any) -> tuple[int, int]:
    if not isinstance(payload, (tuple, list)) or len(payload) != 2:
        raise ValueError("Resize needs a (width, height) pair")
    width, height = payload
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError("Resize dimensions must be integers")
        if not 0 <= value <= _MAX_DIMENSION:
            raise ValueError(f"Resize dimension out of range: {value}")
    return (width, height)


@dataclass(frozen=True)
class Action:
    """An action with its payload: a size for RESIZE, a message for ERROR, a mode for CHANGE_MODE."""

    kind: ActionKind
    payload: tuple[int, int] | str | Mode | None = None

    def __post_init__(self) -> None:
        if self.kind is ActionKind.RESIZE:
            object.__setattr__(self, "payload", _check_resize(self.payload))
        elif self.kind is ActionKind.ERROR:
            if not isinstance(self.payload, str):
                raise ValueError("Error needs a message")
        elif self.kind is ActionKind.CHANGE_MODE:
            if not isinstance(self.payload, Mode):
                raise ValueError("ChangeMode needs a Mode")
        elif self.payload is not None:
            raise ValueError(f"{self.kind.value} takes no payload")

    def __str__(self) -> str:
        return self.kind.value

    @classmethod
    def from_value(cls, value: Any) -> Action:
        """Build an action from its configuration form: "Quit" or {"ChangeMode": "Edit"}."""
        if isinstance(value, str):
            try:
                kind = ActionKind(value)
            except ValueError:
                raise ValueError(f"Unknown action: {value!r}") from None
            return cls(kind)
        if isinstance(value, dict) and len(value) == 1:
            ((name, payload),) = value.items()
            try:
                kind = ActionKind(name)
            except ValueError:
                raise ValueError(f"Unknown action: {name!r}") from None
            if kind is ActionKind.CHANGE_MODE:
                try:
                    payload = Mode(payload)
                except ValueError:
                    raise ValueError(f"Unknown mode: {payload!r}") from None
            return cls(kind, payload)
        raise ValueError(f"Cannot read an action from {value!r}")