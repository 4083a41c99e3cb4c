from confdeck.action import Action, ActionKind
from confdeck.fps import FpsCounter
from confdeck.screen import Frame, Rect
from confdeck.styles import Modifier


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_rates_start_at_zero():
    counter = FpsCounter(_Clock())
    assert counter.ticks_per_second == 0.0
    assert counter.frames_per_second == 0.0


def test_rate_unchanged_within_a_second():
    clock = _Clock()
    counter = FpsCounter(clock)
    clock.now = 0.5
    for _ in range(3):
        counter.update(Action(ActionKind.TICK))
    assert counter.ticks_per_second == 0.0


def test_tick_rate_after_a_second():
    clock = _Clock()
    counter = FpsCounter(clock)
    for _ in range(3):
        counter.update(Action(ActionKind.TICK))
    clock.now = 1.0
    counter.update(Action(ActionKind.TICK))
    assert counter.ticks_per_second == 4.0
    assert counter.frames_per_second == 0.0


def test_render_counts_frames_only():
    clock = _Clock()
    counter = FpsCounter(clock)
    clock.now = 2.0
    counter.update(Action(ActionKind.RENDER))
    assert counter.frames_per_second > 0.0
    assert counter.ticks_per_second == 0.0


def test_update_returns_no_action():
    assert FpsCounter(_Clock()).update(Action(ActionKind.QUIT)) is None


def test_draw_right_aligns_on_top_row():
    frame = Frame(40, 3)
    FpsCounter(_Clock()).draw(frame, Rect(0, 0, 40, 3))
    lines = frame.lines()
    assert lines[0].endswith("0.00 ticks/sec, 0.00 FPS")
    assert lines[1].strip() == ""
    assert Modifier.DIM in frame.cell(39, 0).style.add_modifier


def test_draw_in_narrow_area_stays_inside():
    frame = Frame(10, 1)
    FpsCounter(_Clock()).draw(frame, Rect(0, 0, 5, 1))
    assert frame.lines()[0][5:] == " " * 5
    assert frame.lines()[0][:5].strip() != ""