"""The terminal: screen modes, a background event loop and drawing of frames."""

from __future__ import annotations

import contextlib
import itertools
import logging
import math
import queue
import re
import signal
import threading
import time
from typing import Any, Callable

import blessed

from confdeck.events import Event, EventKind
from confdeck.keys import KeyEvent, KeyParseError, parse_key_event
from confdeck.screen import Frame, Rect
from confdeck.styles import Modifier, Style

logger = logging.getLogger(__name__)

_STOP_WAIT_SECONDS = 0.1

_MOUSE_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1015h\x1b[?1006h"
_MOUSE_OFF = "\x1b[?1006l\x1b[?1015l\x1b[?1002l\x1b[?1000l"
_PASTE_ON = "\x1b[?2004h"
_PASTE_OFF = "\x1b[?2004l"

_NAMED_KEYS = {
    "KEY_ESCAPE": "esc",
    "KEY_ENTER": "enter",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_HOME": "home",
    "KEY_END": "end",
    "KEY_PGUP": "pageup",
    "KEY_PPAGE": "pageup",
    "KEY_PGDOWN": "pagedown",
    "KEY_NPAGE": "pagedown",
    "KEY_BTAB": "backtab",
    "KEY_TAB": "tab",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_DC": "delete",
    "KEY_INSERT": "insert",
    "KEY_IC": "insert",
}

_RAW_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x1b": "esc",
    " ": "space",
    "-": "minus",
}

_FUNCTION_KEY = re.compile(r"KEY_F(\d+)")


def _char_name(char: str) -> str | None:
    if char in _RAW_KEYS:
        return _RAW_KEYS[char]
    code = ord(char)
    if 1 <= code <= 26:
        return f"ctrl-{chr(code + 96)}"
    if code < 32 or code == 127:
        return None
    if char.isascii() and char.isupper():
        return f"shift-{char.lower()}"
    return char


def _key_name(keystroke: Any) -> str | None:
    name = getattr(keystroke, "name", None)
    if name:
        if name in _NAMED_KEYS:
            return _NAMED_KEYS[name]
        match = _FUNCTION_KEY.fullmatch(name)
        if match and 1 <= int(match.group(1)) <= 12:
            return f"f{int(match.group(1))}"
    text = str(keystroke)
    if len(text) == 2 and text[0] == "\x1b":
        inner = _char_name(text[1])
        return None if inner is None else f"alt-{inner}"
    if len(text) != 1:
        return None
    return _char_name(text)


def translate_keystroke(keystroke: Any) -> KeyEvent | None:
    """Turn a keystroke read from the terminal into a key event; None if it has no meaning."""
    name = _key_name(keystroke)
    if name is None:
        return None
    try:
        return parse_key_event(name)
    except KeyParseError:
        return None


def _check_rate(name: str, rate: float) -> float:
    if not rate > 0 or math.isinf(rate):
        raise ValueError(f"{name} must be a positive, finite number")
    return float(rate)


def _advance(previous: float, period: float, now: float) -> float:
    following = previous + period
    return following if following > now else now + period


class Tui:
    """Owns the terminal: enters and leaves full-screen raw mode, delivers events, draws frames."""

    def __init__(
        self,
        *,
        tick_rate: float = 4.0,
        frame_rate: float = 60.0,
        mouse: bool = False,
        paste: bool = False,
        terminal: blessed.Terminal | None = None,
        event_timeout: float = 1.0,
    ) -> None:
        self.tick_rate = _check_rate("tick_rate", tick_rate)
        self.frame_rate = _check_rate("frame_rate", frame_rate)
        self.mouse = mouse
        self.paste = paste
        self.terminal = terminal if terminal is not None else blessed.Terminal()
        self.event_timeout = event_timeout
        self.viewport: Rect | None = None
        self._events: queue.Queue[Event] = queue.Queue()
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self._restore: contextlib.ExitStack | None = None

    def __enter__(self) -> Tui:
        self.enter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.exit()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start a fresh event loop, cancelling any that is running."""
        self.cancel()
        self._cancel = threading.Event()
        self._thread = threading.Thread(
            target=self._event_loop,
            args=(self._events, self._cancel, self.tick_rate, self.frame_rate),
            name="confdeck-events",
            daemon=True,
        )
        self._thread.start()

    def _read_key(self, cancel: threading.Event, timeout: float) -> Any:
        if self.terminal.is_a_tty:
            keystroke = self.terminal.inkey(timeout=timeout)
            return keystroke or None
        cancel.wait(timeout)
        return None

    def _event_loop(
        self,
        events: queue.Queue[Event],
        cancel: threading.Event,
        tick_rate: float,
        frame_rate: float,
    ) -> None:
        tick_period, render_period = 1.0 / tick_rate, 1.0 / frame_rate
        events.put(Event(EventKind.INIT))
        next_tick = next_render = time.monotonic()
        last_size = self.size()
        while not cancel.is_set():
            now = time.monotonic()
            if now >= next_tick:
                events.put(Event(EventKind.TICK))
                next_tick = _advance(next_tick, tick_period, now)
            if now >= next_render:
                events.put(Event(EventKind.RENDER))
                next_render = _advance(next_render, render_period, now)
            size = self.size()
            if size != last_size:
                events.put(Event(EventKind.RESIZE, size))
                last_size = size
            timeout = max(min(next_tick, next_render) - time.monotonic(), 0.0)
            try:
                keystroke = self._read_key(cancel, timeout)
            except OSError:
                events.put(Event(EventKind.ERROR))
                continue
            if keystroke is not None:
                key = translate_keystroke(keystroke)
                if key is not None:
                    events.put(Event(EventKind.KEY, key))
        cancel.set()

    def cancel(self) -> None:
        self._cancel.set()

    def stop(self) -> None:
        """Cancel the event loop and wait briefly for it to finish."""
        self.cancel()
        if self._thread is not None:
            self._thread.join(timeout=_STOP_WAIT_SECONDS)
            if self._thread.is_alive():
                logger.error("Failed to stop the event loop in 100 milliseconds")

    def _write(self, text: str) -> None:
        stream = self.terminal.stream
        stream.write(text)
        stream.flush()

    def enter(self) -> None:
        """Switch to raw full-screen mode with a hidden cursor and start the event loop."""
        if self.terminal.is_a_tty and self._restore is None:
            stack = contextlib.ExitStack()
            stack.enter_context(self.terminal.raw())
            stack.enter_context(self.terminal.fullscreen())
            stack.enter_context(self.terminal.hidden_cursor())
            if self.mouse:
                self._write(_MOUSE_ON)
                stack.callback(self._write, _MOUSE_OFF)
            if self.paste:
                self._write(_PASTE_ON)
                stack.callback(self._write, _PASTE_OFF)
            self._restore = stack
        self.start()

    def exit(self) -> None:
        """Stop the event loop and give the terminal back in the state it was found."""
        self.stop()
        if self._restore is not None:
            stack, self._restore = self._restore, None
            self.terminal.stream.flush()
            stack.close()

    def suspend(self) -> None:
        """Leave the terminal and stop the process as a shell job."""
        self.exit()
        if hasattr(signal, "SIGTSTP"):
            signal.raise_signal(signal.SIGTSTP)

    def resume(self) -> None:
        self.enter()

    def next_event(self) -> Event | None:
        """The next event, or None if none arrives within event_timeout seconds."""
        try:
            return self._events.get(timeout=self.event_timeout)
        except queue.Empty:
            return None

    def size(self) -> tuple[int, int]:
        """The terminal's (width, height)."""
        return (self.terminal.width, self.terminal.height)

    def clear(self) -> None:
        self._write(self.terminal.home + self.terminal.clear)

    def resize(self, area: Rect) -> None:
        """Draw into this area from now on."""
        self.viewport = area

    def _styled(self, style: Style, text: str) -> str:
        if style == Style():
            return text
        term = self.terminal
        mods = style.add_modifier or Modifier(0)
        prefix = ""
        if Modifier.BOLD in mods:
            prefix += term.bold
        if Modifier.DIM in mods:
            prefix += term.dim
        if Modifier.UNDERLINED in mods:
            prefix += term.underline
        if Modifier.REVERSED in mods or style.bg is not None:
            prefix += term.reverse
        return f"{prefix}{text}{term.normal}" if prefix else text

    def draw(self, render: Callable[[Frame], None]) -> Frame:
        """Let render fill a fresh frame, then write it to the terminal."""
        width, height = self.size()
        area = self.viewport or Rect(0, 0, width, height)
        frame = Frame(area.width, area.height)
        render(frame)
        term = self.terminal
        out: list[str] = []
        for y in range(area.height):
            out.append(term.move_xy(area.x, area.y + y))
            cells = (frame.cell(x, y) for x in range(area.width))
            for style, group in itertools.groupby(cells, key=lambda cell: cell.style):
                out.append(self._styled(style, "".join(cell.symbol for cell in group)))
        if frame.cursor_position is not None:
            x, y = frame.cursor_position
            out.append(term.move_xy(area.x + x, area.y + y) + term.normal_cursor)
        else:
            out.append(term.hide_cursor)
        self._write("".join(out))
        return frame