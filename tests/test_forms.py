import pytest

from confdeck.action import Action, ActionKind
from confdeck.fields import StrInputField
from confdeck.forms import ConferenceEditForm, Form
from confdeck.keys import KeyCode, KeyEvent
from confdeck.models import Conference, Time, Week
from confdeck.screen import Borders, Frame
from confdeck.styles import THEME, Style

ENTER = KeyEvent(KeyCode.ENTER)
UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
LEFT = KeyEvent(KeyCode.LEFT)
RIGHT = KeyEvent(KeyCode.RIGHT)
BACKSPACE = KeyEvent(KeyCode.BACKSPACE)


def press(component, *keys):
    for key in keys:
        component.handle_key_event(key)


def type_text(component, text):
    press(component, *(KeyEvent(char) for char in text))


@pytest.fixture
def sample():
    password = "password"
    return Conference(
        title="Standup",
        link="https://example.com/meet",
        start_time=Time(9, 30),
        end_time=Time(10, 0),
        password=password,
        autostart_permission=True,
        week=Week.ODD,
    )


def test_default_form_gives_default_conference():
    assert ConferenceEditForm().get_conference() == Conference()


def test_round_trip(sample):
    assert ConferenceEditForm(sample).get_conference() == sample


def test_typing_ignored_when_no_field_active(sample):
    form = ConferenceEditForm(sample)
    type_text(form, "xyz")
    assert form.get_conference() == sample


def test_typing_into_title(sample):
    form = ConferenceEditForm(sample)
    press(form, ENTER)
    type_text(form, "!")
    press(form, ENTER)
    assert form.get_conference().title == sample.title + "!"


def test_change_autostart():
    form = ConferenceEditForm()
    press(form, DOWN, DOWN, DOWN, DOWN, ENTER, RIGHT)
    assert form.get_conference().autostart_permission is True


def test_change_week():
    form = ConferenceEditForm()
    press(form, DOWN, DOWN, DOWN, DOWN, DOWN, ENTER, RIGHT)
    assert form.get_conference().week == Week.parse(Week.variants()[1])


def test_clearing_password_gives_none(sample):
    form = ConferenceEditForm(sample)
    press(form, DOWN, DOWN, DOWN, ENTER)
    press(form, *([BACKSPACE] * len(sample.password)))
    assert form.get_conference().password is None


def test_edit_end_time(sample):
    form = ConferenceEditForm(sample)
    press(form, DOWN, RIGHT, ENTER, BACKSPACE, BACKSPACE)
    type_text(form, "7")
    result = form.get_conference()
    assert result.end_time == Time(7, 0)
    assert result.start_time == sample.start_time


def test_update_returns_nothing(sample):
    form = ConferenceEditForm(sample)
    press(form, ENTER)
    assert form.update(Action(ActionKind.TICK)) is None
    assert form.get_conference() == sample


def test_generic_form_input_and_navigation():
    first = StrInputField("A", 10, "a")
    second = StrInputField("B", 10, "b")
    form = Form([[(first, 10), (second, 10)]])
    assert form.get_input() == [["a", "b"]]
    press(form, RIGHT, ENTER)
    type_text(form, "z")
    assert form.get_input() == [["a", "bz"]]


def test_border_styles_follow_selection():
    first = StrInputField("A", 10, "a")
    second = StrInputField("B", 10, "b")
    form = Form(
        [[(first, 10), (second, 10)]],
        field_style=THEME.input_field,
        selected_field_style=THEME.selected_field,
        active_field_style=THEME.active_field,
    )
    assert first.border_style == (Borders.ALL, Style())
    press(form, RIGHT)
    assert first.border_style == (Borders.ALL, THEME.input_field)
    assert second.border_style == (Borders.ALL, THEME.selected_field)


def test_enter_toggles_activeness():
    field = StrInputField("A", 10, "a")
    form = Form(
        [[(field, 10)]],
        selected_field_style=THEME.selected_field,
        active_field_style=THEME.active_field,
    )
    press(form, ENTER)
    assert form.is_selected_field_active
    assert field.is_cursor_visible
    assert field.border_style == (Borders.ALL, THEME.active_field)
    press(form, ENTER)
    assert not form.is_selected_field_active
    assert not field.is_cursor_visible
    assert field.border_style == (Borders.ALL, THEME.selected_field)


def test_draw_lays_out_rows(sample):
    frame = Frame(60, 20)
    ConferenceEditForm(sample).draw(frame, frame.area)
    lines = frame.lines()
    assert "Title" in lines[0]
    assert sample.title in lines[1]
    assert "Start Time" in lines[3]
    assert "End Time" in lines[3]
    assert "Allow" in lines[13]
    assert sample.week.value in lines[16]