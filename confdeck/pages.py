"""The pages of the application: the weekly schedule, the settings, and the home page holding them."""

from __future__ import annotations

from enum import Enum
from typing import Any

from confdeck.action import Action, ActionKind, Mode
from confdeck.component import Component
from confdeck.config import Config
from confdeck.forms import ConferenceEditForm
from confdeck.fps import FpsCounter
from confdeck.keys import KeyCode, KeyEvent
from confdeck.models import Schedule, Settings
from confdeck.screen import Constraint, Frame, Rect, vertical
from confdeck.selectors import Selector, Selector2D
from confdeck.styles import THEME, Color, Style

_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _draw_list(frame: Frame, area: Rect, items: list[str], selected: int) -> None:
    """Draw items one per row, scrolled so that the selected one is visible and highlighted."""
    if area.width <= 0 or area.height <= 0:
        return
    offset = max(selected - area.height + 1, 0)
    for row, text in enumerate(items[offset : offset + area.height]):
        if offset + row == selected:
            frame.set_string(
                area.x, area.y + row, text.ljust(area.width)[: area.width], THEME.selected_text
            )
        else:
            frame.set_string(area.x, area.y + row, text[: area.width])


class _ScheduleMode(Enum):
    VIEW = "view"
    EDIT = "edit"
    ADD = "add"


class SchedulePage(Component):
    """Browse conferences day by day; 'e' edits the selected one, '+' adds one."""

    def __init__(self, schedule: Schedule) -> None:
        self._schedule = schedule
        self._selector = self._new_selector()
        self._mode = _ScheduleMode.VIEW
        self._form: ConferenceEditForm | None = None

    def _new_selector(self) -> Selector2D:
        return Selector2D([len(day) for day in self._schedule])

    def _handle_view_key_event(self, key: KeyEvent) -> Action | None:
        if key.code == "e":
            day, conf = self._selector.selected()
            self._form = ConferenceEditForm(self._schedule[day][conf])
            self._mode = _ScheduleMode.EDIT
            return Action(ActionKind.CHANGE_MODE, Mode.EDIT)
        if key.code == "+":
            self._form = ConferenceEditForm(None)
            self._mode = _ScheduleMode.ADD
            return Action(ActionKind.CHANGE_MODE, Mode.EDIT)
        moves = {
            KeyCode.UP: self._selector.move_left,
            KeyCode.DOWN: self._selector.move_right,
            KeyCode.LEFT: self._selector.move_up,
            KeyCode.RIGHT: self._selector.move_down,
        }
        move = moves.get(key.code) if isinstance(key.code, KeyCode) else None
        if move is not None:
            move()
        return None

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        if self._mode is _ScheduleMode.VIEW or self._form is None:
            return self._handle_view_key_event(key)
        if key.code is not KeyCode.ESC:
            return self._form.handle_key_event(key)
        day, conf = self._selector.selected()
        conference = self._form.get_conference()
        if self._mode is _ScheduleMode.EDIT:
            self._schedule[day][conf] = conference
        else:
            self._schedule[day].append(conference)
            self._selector = self._new_selector()
        self._mode = _ScheduleMode.VIEW
        self._form = None
        return Action(ActionKind.CHANGE_MODE, Mode.SCHEDULE)

    def _render_days(self, frame: Frame, area: Rect) -> None:
        base = Style(fg=Color.WHITE)
        frame.draw_block(area, "Schedule", base)
        inner = area.inner()
        if inner.width <= 0 or inner.height <= 0:
            return
        selected_day, _ = self._selector.selected()
        x = inner.x
        for index, name in enumerate(_DAY_NAMES):
            room = inner.right - x
            if room <= 0:
                break
            title = f"  {name}  "
            style = THEME.selected_text if index == selected_day else base
            frame.set_string(x, inner.y, title[:room], style)
            x += len(title)

    def _render_conferences(self, frame: Frame, area: Rect) -> None:
        day, conf = self._selector.selected()
        titles = [conference.title for conference in self._schedule[day]]
        _draw_list(frame, area, titles, conf)

    def draw(self, frame: Frame, area: Rect) -> None:
        if self._mode is _ScheduleMode.VIEW or self._form is None:
            days_area, list_area = vertical(area, [Constraint.length(3), Constraint.min(0)])
            self._render_days(frame, days_area)
            self._render_conferences(frame, list_area)
        else:
            self._form.draw(frame, area)


class SettingsPage(Component):
    """A list of settings entries navigated with up and down."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._selector = Selector(3, 0)

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        if key.code is KeyCode.UP:
            self._selector.prev()
        elif key.code is KeyCode.DOWN:
            self._selector.next()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        _draw_list(frame, area, ["1", "2", "3"], self._selector.index)


class _ActivePage(Enum):
    SCHEDULE = "schedule"
    SETTINGS = "settings"


class Home(Component):
    """Holds the pages, shows the active one and the rate counter, and switches on mode changes."""

    def __init__(self, schedule: Schedule, settings: Settings) -> None:
        self._schedule_page = SchedulePage(schedule)
        self._settings_page = SettingsPage(settings)
        self._fps = FpsCounter()
        self._active = _ActivePage.SCHEDULE
        self.command_tx: Any = None
        self.config = Config()

    def _page(self) -> Component:
        if self._active is _ActivePage.SETTINGS:
            return self._settings_page
        return self._schedule_page

    def register_action_handler(self, tx: Any) -> None:
        self.command_tx = tx

    def register_config_handler(self, config: Config) -> None:
        self.config = config

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        return self._page().handle_key_event(key)

    def update(self, action: Action) -> Action | None:
        self._fps.update(action)
        self._schedule_page.update(action)
        self._settings_page.update(action)
        if action.kind is ActionKind.CHANGE_MODE:
            if action.payload is Mode.SETTINGS:
                self._active = _ActivePage.SETTINGS
            elif action.payload is Mode.SCHEDULE:
                self._active = _ActivePage.SCHEDULE
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        self._page().draw(frame, area)
        self._fps.draw(frame, area)