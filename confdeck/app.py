"""The application: the main loop tying terminal events, key bindings and components together."""

from __future__ import annotations

import logging
import queue
from pathlib import Path
from typing import Callable

from confdeck.action import Action, ActionKind, Mode
from confdeck.component import Component
from confdeck.config import Config
from confdeck.events import EventKind
from confdeck.keys import KeyEvent
from confdeck.models import load_schedule, load_settings
from confdeck.pages import Home
from confdeck.screen import Frame, Rect
from confdeck.tui import Tui

logger = logging.getLogger(__name__)

SCHEDULE_FILE = Path("files/schedule.json")
SETTINGS_FILE = Path("files/settings.json")

TuiFactory = Callable[[float, float], Tui]


def _default_tui(tick_rate: float, frame_rate: float) -> Tui:
    return Tui(tick_rate=tick_rate, frame_rate=frame_rate)


class App:
    """Runs the event loop until a Quit action arrives."""

    def __init__(
        self,
        tick_rate: float = 4.0,
        frame_rate: float = 60.0,
        *,
        schedule_path: str | Path = SCHEDULE_FILE,
        settings_path: str | Path = SETTINGS_FILE,
        config: Config | None = None,
        tui_factory: TuiFactory | None = None,
    ) -> None:
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self.schedule = load_schedule(schedule_path)
        self.settings = load_settings(settings_path)
        self.components: list[Component] = [Home(self.schedule, self.settings)]
        self.should_quit = False
        self.should_suspend = False
        self.config = config if config is not None else Config.load()
        self.mode = Mode.SCHEDULE
        self.last_tick_key_events: list[KeyEvent] = []
        self.action_tx: queue.Queue[Action] = queue.Queue()
        self._tui_factory = tui_factory or _default_tui

    def run(self) -> None:
        """Take over the terminal and process events and actions until told to quit."""
        tui = self._tui_factory(self.tick_rate, self.frame_rate)
        tui.enter()
        try:
            for component in self.components:
                component.register_action_handler(self.action_tx)
            for component in self.components:
                component.register_config_handler(self.config)
            size = tui.size()
            for component in self.components:
                component.init(size)

            while True:
                self._handle_events(tui)
                self.handle_actions(tui)
                if self.should_suspend:
                    tui.suspend()
                    self.action_tx.put(Action(ActionKind.RESUME))
                    self.action_tx.put(Action(ActionKind.CLEAR_SCREEN))
                    tui.enter()
                elif self.should_quit:
                    tui.stop()
                    break
        finally:
            tui.exit()

    def _handle_events(self, tui: Tui) -> None:
        event = tui.next_event()
        if event is None:
            return
        if event.kind is EventKind.QUIT:
            self.action_tx.put(Action(ActionKind.QUIT))
        elif event.kind is EventKind.TICK:
            self.action_tx.put(Action(ActionKind.TICK))
        elif event.kind is EventKind.RENDER:
            self.action_tx.put(Action(ActionKind.RENDER))
        elif event.kind is EventKind.RESIZE:
            self.action_tx.put(Action(ActionKind.RESIZE, event.payload))
        elif event.kind is EventKind.KEY:
            self.handle_key_event(event.payload)
        for component in self.components:
            action = component.handle_events(event)
            if action is not None:
                self.action_tx.put(action)

    def handle_key_event(self, key: KeyEvent) -> None:
        """Send the action bound to this key, or to the keys pressed since the last tick."""
        keymap = self.config.keybindings.get(self.mode)
        if keymap is None:
            return
        action = keymap.get((key,))
        if action is None:
            self.last_tick_key_events.append(key)
            action = keymap.get(tuple(self.last_tick_key_events))
        if action is not None:
            logger.info("Got action: %r", action)
            self.action_tx.put(action)

    def handle_actions(self, tui: Tui) -> None:
        """Process every queued action, passing each to the components."""
        while True:
            try:
                action = self.action_tx.get_nowait()
            except queue.Empty:
                return
            kind = action.kind
            if kind not in (ActionKind.TICK, ActionKind.RENDER):
                logger.debug("%r", action)
            if kind is ActionKind.TICK:
                self.last_tick_key_events.clear()
            elif kind is ActionKind.QUIT:
                self.should_quit = True
            elif kind is ActionKind.SUSPEND:
                self.should_suspend = True
            elif kind is ActionKind.RESUME:
                self.should_suspend = False
            elif kind is ActionKind.CLEAR_SCREEN:
                tui.clear()
            elif kind is ActionKind.RESIZE:
                width, height = action.payload
                tui.resize(Rect(0, 0, width, height))
                self._render(tui)
            elif kind is ActionKind.RENDER:
                self._render(tui)
            elif kind is ActionKind.CHANGE_MODE:
                self.mode = action.payload
            for component in self.components:
                follow_up = component.update(action)
                if follow_up is not None:
                    self.action_tx.put(follow_up)

    def _render(self, tui: Tui) -> None:
        def paint(frame: Frame) -> None:
            for component in self.components:
                try:
                    component.draw(frame, frame.area)
                except Exception as err:  # a failing component must not stop the others
                    self.action_tx.put(Action(ActionKind.ERROR, f"Failed to draw: {err!r}"))

        tui.draw(paint)