"""The interface every visual, interactive element of the interface implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from confdeck.action import Action
from confdeck.events import Event, EventKind
from confdeck.keys import KeyEvent
from confdeck.screen import Frame, Rect


class Component(ABC):
    """Receives events and actions, updates its state and draws itself."""

    key_bindings: ClassVar[Mapping[Any, Action]] = MappingProxyType({})
    mouse_bindings: ClassVar[Mapping[Any, Action]] = MappingProxyType({})

    action_tx: Any = None
    config: Any = None
    area_size: tuple[int, int] | None = None

    def register_action_handler(self, tx: Any) -> None:
        """Keep the channel on which actions can be sent."""
        self.action_tx = tx

    def register_config_handler(self, config: Any) -> None:
        """Keep the application configuration."""
        self.config = config

    def init(self, size: tuple[int, int]) -> None:
        """Remember the size of the area the component will be drawn in."""
        self.area_size = size

    def handle_events(self, event: Event | None) -> Action | None:
        """Dispatch key and mouse events to their handlers."""
        if event is None:
            return None
        if event.kind is EventKind.KEY:
            return self.handle_key_event(event.payload)
        if event.kind is EventKind.MOUSE:
            return self.handle_mouse_event(event.payload)
        return None

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        """The action bound to the key, if any."""
        return self.key_bindings.get(key)

    def handle_mouse_event(self, mouse: Any) -> Action | None:
        """The action bound to the mouse event, if any."""
        try:
            return self.mouse_bindings.get(mouse)
        except TypeError:
            return None

    def update(self, action: Action) -> Action | None:
        return None

    @abstractmethod
    def draw(self, frame: Frame, area: Rect) -> None:
        """Render the component into the area of the frame."""