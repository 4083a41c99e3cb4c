"""Input fields for forms: free text, bounded integers, times and option carousels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable

from confdeck.action import Action
from confdeck.component import Component
from confdeck.keys import KeyCode, KeyEvent
from confdeck.models import Time
from confdeck.screen import Borders, Constraint, Frame, Rect, horizontal, vertical
from confdeck.selectors import Selector
from confdeck.styles import THEME, Style
from confdeck.utils import center_text

BorderStyle = tuple[Borders, Style]
Validator = Callable[[str], bool]

_U32_MAX = 0xFFFFFFFF
_FIELD_HEIGHT = 3


def _default_border_style() -> BorderStyle:
    return (Borders.ALL, Style())


def _parse_unsigned(text: str, limit: int) -> int | None:
    """Read an unsigned integer with an optional leading '+'; None if invalid or above limit."""
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= limit:
            return value
    return None


def _write_clipped(frame: Frame, area: Rect, text: str, style: Style | None = None) -> None:
    """Write text on the first row of an area, cut to the area's width."""
    if area.width <= 0 or area.height <= 0:
        return
    frame.set_string(area.x, area.y, text[: area.width], style)


def _field_area(area: Rect) -> Rect:
    return vertical(area, [Constraint.length(_FIELD_HEIGHT)])[0]


class InputField(Component, ABC):
    """A form field that yields its content as a string and can be highlighted."""

    @abstractmethod
    def get_value(self) -> str:
        """The field's current content."""

    @abstractmethod
    def borders(self, border_style: BorderStyle) -> None:
        """Set which borders to draw and their style."""

    @abstractmethod
    def set_cursor_visibility(self, visible: bool) -> None:
        """Show or hide the editing cursor."""


class InputHandler(ABC):
    """Editing state behind a text-like field."""

    @abstractmethod
    def handle_key_event(self, key: KeyEvent) -> Action | None:
        """Apply a key press to the text."""

    @abstractmethod
    def value(self) -> str:
        """The text as it should be reported."""

    @abstractmethod
    def cursor_position(self) -> int:
        """The cursor's offset in characters."""

    @abstractmethod
    def __len__(self) -> int:
        """The number of characters in the text."""


class BaseInputHandler(InputHandler):
    """Line editing with a length limit and a validator applied to every insertion."""

    def __init__(
        self,
        initial: str | None = None,
        max_length: int = 0,
        validate: Validator | None = None,
    ) -> None:
        self._text = list((initial or "")[:max_length])
        self._cursor = len(self._text)
        self._max_length = max_length
        self._validate: Validator = validate or (lambda _text: True)

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        code = key.code
        if code is KeyCode.RIGHT:
            self._move_right()
        elif code is KeyCode.LEFT:
            self._move_left()
        elif isinstance(code, str):
            self._insert(code)
        elif code is KeyCode.BACKSPACE:
            self._backspace()
        return None

    def value(self) -> str:
        return "".join(self._text)

    def cursor_position(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._text)

    def _move_left(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def _move_right(self) -> None:
        if self._cursor < len(self._text):
            self._cursor += 1

    def _insert(self, char: str) -> None:
        if len(self._text) >= self._max_length:
            return
        candidate = self._text[: self._cursor] + [char] + self._text[self._cursor:]
        if self._validate("".join(candidate)):
            self._text = candidate
            self._cursor += 1

    def _backspace(self) -> None:
        if self._cursor > 0:
            del self._text[self._cursor - 1]
            self._cursor -= 1


class IntInputHandler(BaseInputHandler):
    """Accepts only unsigned integers up to a maximum; empty text reads as "0"."""

    def __init__(self, initial_number: int | None = None, max: int = _U32_MAX) -> None:
        def validate(text: str) -> bool:
            number = _parse_unsigned(text, _U32_MAX)
            return number is not None and number <= max

        super().__init__(
            None if initial_number is None else str(initial_number),
            len(str(max)),
            validate,
        )

    def value(self) -> str:
        return super().value() or "0"


class BaseInputField(InputField):
    """A bordered one-line field that scrolls horizontally to keep the cursor visible."""

    def __init__(self, title: str | None, input_handler: InputHandler) -> None:
        self.title = title or ""
        self._input_handler = input_handler
        self.border_style: BorderStyle = _default_border_style()
        self.is_cursor_visible = False
        self.left_padding = 0

    def get_value(self) -> str:
        return self._input_handler.value()

    def borders(self, border_style: BorderStyle) -> None:
        self.border_style = border_style

    def set_cursor_visibility(self, visible: bool) -> None:
        self.is_cursor_visible = visible

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        return self._input_handler.handle_key_event(key)

    def _recalculate_padding(self, width: int) -> None:
        text_len = len(self._input_handler)
        cursor = self._input_handler.cursor_position()
        if not self.left_padding <= cursor < self.left_padding + width:
            self.left_padding = min(max(self.left_padding, max(cursor - width, 0)), cursor)
        self.left_padding = min(self.left_padding, max(text_len - width, 0))

    def draw(self, frame: Frame, area: Rect) -> None:
        area = _field_area(area)
        self._recalculate_padding(max(area.width - 3, 0))

        if self.is_cursor_visible:
            frame.set_cursor_position(
                area.x + 1 + self._input_handler.cursor_position() - self.left_padding,
                area.y + 1,
            )

        shown = self._input_handler.value()[self.left_padding:][: area.width]
        borders, style = self.border_style
        frame.draw_block(area, self.title, style, borders)
        _write_clipped(frame, area.inner(), shown)


class IntInputField(BaseInputField):
    """A field holding an unsigned integer no larger than max."""

    def __init__(self, title: str | None, max: int, initial_number: int | None = None) -> None:
        super().__init__(title, IntInputHandler(initial_number, max))


class StrInputField(BaseInputField):
    """A free-text field with a length limit."""

    def __init__(
        self, title: str | None, max_length: int, initial_text: str | None = None
    ) -> None:
        super().__init__(title, BaseInputHandler(initial_text, max_length))


class CarouselInputField(InputField):
    """A field that cycles through a fixed list of options with the arrow keys."""

    def __init__(self, title: str | None, options: list[str], initial_option: int = 0) -> None:
        self.title = title or ""
        self.options = list(options)
        self._selector = Selector(len(self.options), initial_option)
        self.border_style: BorderStyle = _default_border_style()

    def get_value(self) -> str:
        return self.options[self._selector.index]

    def borders(self, border_style: BorderStyle) -> None:
        self.border_style = border_style

    def set_cursor_visibility(self, visible: bool) -> None:
        """A carousel has no cursor."""

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        if key.code in (KeyCode.UP, KeyCode.RIGHT):
            self._selector.next()
        elif key.code in (KeyCode.DOWN, KeyCode.LEFT):
            self._selector.prev()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        area = _field_area(area)
        borders, style = self.border_style
        frame.draw_block(area, self.title, style, borders)
        text = f"<{center_text(self.get_value(), area.width - 4, ' ')}>"
        _write_clipped(frame, area.inner(), text)


class _TimePart(Enum):
    HOURS = "hours"
    MINUTES = "minutes"


class TimeInputField(InputField):
    """A field editing hours and minutes separately; left and right switch between them."""

    def __init__(self, title: str | None = None, initial_time: Time | None = None) -> None:
        self.title = title or ""
        self._hours = IntInputHandler(
            None if initial_time is None else initial_time.hours, 23
        )
        self._minutes = IntInputHandler(
            None if initial_time is None else initial_time.minutes, 59
        )
        self._selected = _TimePart.HOURS
        self.border_style: BorderStyle = _default_border_style()
        self.is_cursor_visible = False

    def _parsed_input(self) -> tuple[int, int]:
        hours = _parse_unsigned(self._hours.value(), 0xFF)
        minutes = _parse_unsigned(self._minutes.value(), 0xFF)
        if hours is None or minutes is None:
            raise ValueError("time field holds an invalid number")
        return hours, minutes

    def get_value(self) -> str:
        hours, minutes = self._parsed_input()
        return f"{hours:02}:{minutes:02}"

    def borders(self, border_style: BorderStyle) -> None:
        self.border_style = border_style

    def set_cursor_visibility(self, visible: bool) -> None:
        self.is_cursor_visible = visible

    def handle_key_event(self, key: KeyEvent) -> Action | None:
        if key.code in (KeyCode.LEFT, KeyCode.RIGHT):
            self._selected = (
                _TimePart.MINUTES if self._selected is _TimePart.HOURS else _TimePart.HOURS
            )
        elif self._selected is _TimePart.HOURS:
            self._hours.handle_key_event(key)
        else:
            self._minutes.handle_key_event(key)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        width = area.width
        width = max(width - (width + 1) % 2, 0)
        area = horizontal(area, [Constraint.length(width)])[0]
        area = _field_area(area)

        borders, style = self.border_style
        frame.draw_block(area, self.title, style, borders)

        _, hours_area, colon_area, minutes_area, _ = horizontal(
            area.inner(),
            [
                Constraint.fill(1),
                Constraint.length(2),
                Constraint.length(1),
                Constraint.length(2),
                Constraint.fill(1),
            ],
        )

        hours, minutes = self._parsed_input()
        hours_style = minutes_style = None
        if self.is_cursor_visible:
            if self._selected is _TimePart.HOURS:
                hours_style = THEME.selected_text
            else:
                minutes_style = THEME.selected_text

        _write_clipped(frame, hours_area, f"{hours:02}", hours_style)
        _write_clipped(frame, minutes_area, f"{minutes:02}", minutes_style)
        _write_clipped(frame, colon_area, ":")