import queue

import pytest

from confdeck.action import Action, ActionKind, Mode
from confdeck.config import Config
from confdeck.keys import KeyCode, KeyEvent
from confdeck.models import Conference, Settings, new_schedule
from confdeck.pages import Home, SchedulePage, SettingsPage
from confdeck.screen import Frame
from confdeck.styles import THEME, Color, Style

ENTER = KeyEvent(KeyCode.ENTER)
ESC = KeyEvent(KeyCode.ESC)
UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
RIGHT = KeyEvent(KeyCode.RIGHT)
EDIT = KeyEvent("e")
ADD = KeyEvent("+")

TO_EDIT = Action(ActionKind.CHANGE_MODE, Mode.EDIT)
TO_SCHEDULE = Action(ActionKind.CHANGE_MODE, Mode.SCHEDULE)


@pytest.fixture
def schedule():
    days = new_schedule()
    days[0].extend([Conference(title="Standup"), Conference(title="Review")])
    return days


def render(component, width=40, height=10):
    frame = Frame(width, height)
    component.draw(frame, frame.area)
    return frame


def test_schedule_view_draws_days_and_titles(schedule):
    frame = render(SchedulePage(schedule))
    lines = frame.lines()
    assert "Schedule" in lines[0]
    assert "Mon" in lines[1]
    assert "Fri" in lines[1]
    assert lines[3].startswith("Standup")
    assert lines[4].startswith("Review")
    assert frame.cell(0, 3).style == THEME.selected_text
    assert frame.cell(0, 4).style == Style()


def test_down_moves_conference_highlight(schedule):
    page = SchedulePage(schedule)
    assert page.handle_key_event(DOWN) is None
    frame = render(page)
    assert frame.cell(0, 4).style == THEME.selected_text
    assert frame.cell(0, 3).style == Style()


def test_right_moves_day_highlight(schedule):
    page = SchedulePage(schedule)
    assert render(page).cell(3, 1).style == THEME.selected_text
    page.handle_key_event(RIGHT)
    frame = render(page)
    assert frame.cell(10, 1).style == THEME.selected_text
    assert frame.cell(3, 1).style == Style(fg=Color.WHITE)


def test_edit_and_escape_keeps_conference(schedule):
    original = list(schedule[0])
    page = SchedulePage(schedule)
    assert page.handle_key_event(EDIT) == TO_EDIT
    assert "Title" in render(page, 60, 20).lines()[0]
    assert page.handle_key_event(ESC) == TO_SCHEDULE
    assert schedule[0] == original


def test_edit_changes_title(schedule):
    page = SchedulePage(schedule)
    page.handle_key_event(EDIT)
    assert page.handle_key_event(ENTER) is None
    page.handle_key_event(KeyEvent("!"))
    page.handle_key_event(ENTER)
    page.handle_key_event(ESC)
    assert schedule[0][0].title == "Standup" + "!"
    assert schedule[0][1].title == "Review"


def test_add_appends_default_conference(schedule):
    page = SchedulePage(schedule)
    assert page.handle_key_event(ADD) == TO_EDIT
    assert page.handle_key_event(ESC) == TO_SCHEDULE
    assert len(schedule[0]) == 3
    assert schedule[0][-1] == Conference()


def test_add_on_other_day_and_reset_selection(schedule):
    page = SchedulePage(schedule)
    page.handle_key_event(RIGHT)
    page.handle_key_event(ADD)
    page.handle_key_event(ESC)
    assert schedule[1] == [Conference()]
    assert render(page).cell(3, 1).style == THEME.selected_text


def test_edit_on_empty_day_raises(schedule):
    page = SchedulePage(schedule)
    page.handle_key_event(RIGHT)
    with pytest.raises(IndexError):
        page.handle_key_event(EDIT)


def test_settings_page_draws_entries():
    frame = render(SettingsPage(Settings()))
    lines = frame.lines()
    assert [line[0] for line in lines[:3]] == ["1", "2", "3"]
    assert frame.cell(0, 0).style == THEME.selected_text


def test_settings_page_wraps():
    page = SettingsPage(Settings())
    assert page.handle_key_event(UP) is None
    assert render(page).cell(0, 2).style == THEME.selected_text
    page.handle_key_event(DOWN)
    assert render(page).cell(0, 0).style == THEME.selected_text


def test_home_registers_handlers(schedule):
    home = Home(schedule, Settings())
    tx = queue.SimpleQueue()
    config = Config()
    home.register_action_handler(tx)
    home.register_config_handler(config)
    assert home.command_tx is tx
    assert home.config is config


def test_home_switches_pages(schedule):
    home = Home(schedule, Settings())
    assert "Schedule" in render(home).lines()[0]
    assert home.update(Action(ActionKind.CHANGE_MODE, Mode.SETTINGS)) is None
    lines = render(home).lines()
    assert lines[0][0] == "1"
    assert "Schedule" not in lines[0]
    home.update(TO_SCHEDULE)
    assert "Schedule" in render(home).lines()[0]


def test_home_edit_mode_keeps_page(schedule):
    home = Home(schedule, Settings())
    home.update(TO_EDIT)
    assert "Schedule" in render(home).lines()[0]


def test_home_dispatches_keys_to_active_page(schedule):
    home = Home(schedule, Settings())
    assert home.handle_key_event(ADD) == TO_EDIT
    home.handle_key_event(ESC)
    home.update(Action(ActionKind.CHANGE_MODE, Mode.SETTINGS))
    assert home.handle_key_event(ADD) is None
    assert len(schedule[0]) == 3


def test_home_draws_rate_counter(schedule):
    lines = render(Home(schedule, Settings())).lines()
    assert lines[0].rstrip().endswith("FPS")