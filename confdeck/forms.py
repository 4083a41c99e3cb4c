"""Forms made of input fields, and the form for editing a conference."""

from __future__ import annotations

from collections.abc import Iterable

from confdeck.action import Action
from confdeck.component import Component
from confdeck.fields import (
    CarouselInputField,
    InputField,
    StrInputField,
    TimeInputField,
)
from confdeck.keys import KeyCode, KeyEvent
from confdeck.models import Conference, Time, Week
from confdeck.screen import Borders, Constraint, Frame, Rect, horizontal, vertical
from confdeck.selectors import Selector2D
from confdeck.styles import THEME, Style

_ROW_HEIGHT = 3


class Form(Component):
    """Rows of input fields of given widths; arrows select a field, Enter toggles editing it."""

    def __init__(
        self,
        layout: Iterable[Iterable[tuple[InputField, int]]],
        *,
        field_style: Style | None = None,
        selected_field_style: Style | None = None,
        active_field_style: Style | None = None,
    ) -> None:
        self._layout = [list(row) for row in layout]
        self._selector = Selector2D([len(row) for row in self._layout])
        self._active = False
        self.field_style = field_style or Style()
        self.selected_field_style = selected_field_style or Style()
        self.active_field_style = active_field_style or Style()

    @property
    def is_selected_field_active(self) -> bool:
        return self._active

    def get_input(self) -> list[list[str]]:
        """The value of every field, row by row."""
        return [[field.get_value() for field, _ in row] for row in self._layout]

    def _selected_field(self) -> InputField:
        row, col = self._selector.selected()
        return self._layout[row][col][0]

    def _handle_field_selection(self, key: KeyEvent) -> None:
        self._selected_field().borders((Borders.ALL, self.field_style))
        moves = {
            KeyCode.UP: self._selector.move_up,
            KeyCode.DOWN: self._selector.move_down,
            KeyCode.LEFT: self._selector.move_left,
            KeyCode.RIGHT: self._selector.move_right,
        }
        move = moves.get(key.code) if isinstance(key.code, KeyCode) else None
        if move is not None:
            move()
        self._selected_field().borders((Borders.ALL, self.selected_field_style))

    def _toggle_selected_field_activeness(self) -> None:
        self._active = not self._active
        style = self.active_field_style if self._active else self.selected_field_style
        field = self._selected_field()
        field.borders((Borders.ALL, style))
        field.set_cursor_visibility(self._active)

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        if key.code is KeyCode.ENTER:
            self._toggle_selected_field_activeness()
        elif self._active:
            self._selected_field().handle_key_event(key)
        else:
            self._handle_field_selection(key)
        return None

    def update(self, action: Action) -> Action | None:
        if self._active:
            self._selected_field().update(action)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        row_areas = vertical(area, [Constraint.length(_ROW_HEIGHT)] * len(self._layout))
        for row, row_area in zip(self._layout, row_areas):
            cells = horizontal(row_area, [Constraint.length(width) for _, width in row])
            for (field, _), cell in zip(row, cells):
                field.draw(frame, cell)


AUTOSTART_PERMISSION_OPTIONS = ("Deny", "Allow")


class ConferenceEditForm(Component):
    """A form holding every editable property of a conference."""

    def __init__(self, conference: Conference | None = None) -> None:
        if conference is None:
            conference = Conference()
        weeks = list(Week.variants())
        layout: list[list[tuple[InputField, int]]] = [
            [(StrInputField("Title", 50, conference.title), 50)],
            [
                (TimeInputField("Start Time", conference.start_time), 25),
                (TimeInputField("End Time", conference.end_time), 25),
            ],
            [(StrInputField("Link", 50, conference.link), 50)],
            [(StrInputField("Password", 50, conference.password or ""), 50)],
            [
                (
                    CarouselInputField(
                        "Autostart",
                        list(AUTOSTART_PERMISSION_OPTIONS),
                        int(conference.autostart_permission),
                    ),
                    50,
                )
            ],
            [(CarouselInputField("Week", weeks, weeks.index(conference.week.value)), 50)],
        ]
        self._form = Form(
            layout,
            field_style=THEME.input_field,
            selected_field_style=THEME.selected_field,
            active_field_style=THEME.active_field,
        )

    def get_conference(self) -> Conference:
        """Build a conference from what the fields currently hold."""
        values = self._form.get_input()
        password = values[3][0]
        return Conference(
            title=values[0][0],
            start_time=Time.parse(values[1][0]),
            end_time=Time.parse(values[1][1]),
            link=values[2][0],
            password=password or None,
            autostart_permission=values[4][0] == AUTOSTART_PERMISSION_OPTIONS[1],
            week=Week.parse(values[5][0]),
        )

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        return self._form.handle_key_event(key)

    def update(self, action: Action) -> Action | None:
        return self._form.update(action)

    def draw(self, frame: Frame, area: Rect) -> None:
        self._form.draw(frame, area)