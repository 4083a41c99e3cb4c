"""Key events and the textual key notation used in keybinding configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag


class KeyCode(Enum):
    """Keys that are not plain characters; characters are held as one-letter strings."""

    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    TAB = "tab"
    BACK_TAB = "backtab"
    DELETE = "delete"
    INSERT = "insert"
    ESC = "esc"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"
    NULL = "null"
    CAPS_LOCK = "capslock"
    SCROLL_LOCK = "scrolllock"
    NUM_LOCK = "numlock"
    PRINT_SCREEN = "printscreen"
    PAUSE = "pause"
    MENU = "menu"
    KEYPAD_BEGIN = "keypadbegin"
    MEDIA = "media"
    MODIFIER = "modifier"


class KeyModifiers(Flag):
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4
    SUPER = 8
    HYPER = 16
    META = 32


class KeyParseError(ValueError):
    """Raised when key notation cannot be understood."""


@dataclass(frozen=True)
class KeyEvent:
    """A key press: a KeyCode or a one-character string, with modifiers."""

    code: KeyCode | str
    modifiers: KeyModifiers = KeyModifiers.NONE


_FUNCTION_KEYS = {getattr(KeyCode, f"F{n}"): n for n in range(1, 13)}

_UNNAMED = frozenset(
    {
        KeyCode.NULL,
        KeyCode.CAPS_LOCK,
        KeyCode.SCROLL_LOCK,
        KeyCode.NUM_LOCK,
        KeyCode.PRINT_SCREEN,
        KeyCode.PAUSE,
        KeyCode.MENU,
        KeyCode.KEYPAD_BEGIN,
        KeyCode.MEDIA,
        KeyCode.MODIFIER,
    }
)

_PARSEABLE = {code.value: code for code in KeyCode if code not in _UNNAMED}
_CHAR_NAMES = {"space": " ", "hyphen": "-", "minus": "-"}

_PREFIXES = (
    ("ctrl-", KeyModifiers.CONTROL),
    ("alt-", KeyModifiers.ALT),
    ("shift-", KeyModifiers.SHIFT),
)


def extract_modifiers(raw: str) -> tuple[str, KeyModifiers]:
    """Strip leading ctrl-/alt-/shift- prefixes, returning the rest and the modifiers."""
    modifiers = KeyModifiers.NONE
    current = raw
    while True:
        for prefix, flag in _PREFIXES:
            if current.startswith(prefix):
                modifiers |= flag
                current = current[len(prefix):]
                break
        else:
            return current, modifiers


def parse_key_code_with_modifiers(raw: str, modifiers: KeyModifiers) -> KeyEvent:
    """Turn a lower-case key name into a key event carrying the given modifiers."""
    if raw in _PARSEABLE:
        code = _PARSEABLE[raw]
        if code is KeyCode.BACK_TAB:
            modifiers |= KeyModifiers.SHIFT
        return KeyEvent(code, modifiers)
    if raw in _CHAR_NAMES:
        return KeyEvent(_CHAR_NAMES[raw], modifiers)
    if len(raw.encode("utf-8")) == 1:
        char = raw.upper() if KeyModifiers.SHIFT in modifiers else raw
        return KeyEvent(char, modifiers)
    raise KeyParseError(f"Unable to parse {raw}")


def parse_key_event(raw: str) -> KeyEvent:
    """Parse one key such as "ctrl-a" or "Enter", ignoring case."""
    remaining, modifiers = extract_modifiers(raw.lower())
    return parse_key_code_with_modifiers(remaining, modifiers)


def key_event_to_string(key_event: KeyEvent) -> str:
    """Write a key event in the notation parse_key_event reads."""
    code = key_event.code
    if isinstance(code, str):
        name = "space" if code == " " else code
    elif code in _FUNCTION_KEYS:
        name = f"f({_FUNCTION_KEYS[code]})"
    elif code in _UNNAMED:
        name = ""
    else:
        name = code.value

    parts = [
        label
        for flag, label in (
            (KeyModifiers.CONTROL, "ctrl"),
            (KeyModifiers.SHIFT, "shift"),
            (KeyModifiers.ALT, "alt"),
        )
        if flag & key_event.modifiers
    ]
    parts.append(name)
    return "-".join(parts)


def parse_key_sequence(raw: str) -> tuple[KeyEvent, ...]:
    """Parse a sequence such as "<ctrl-q>" or "<g><g>" into key events."""
    if raw.count(">") != raw.count("<"):
        raise KeyParseError(f"Unable to parse `{raw}`")
    if "><" not in raw:
        raw = raw.removeprefix("<").removeprefix(">")

    def unwrap(part: str) -> str:
        if part.startswith("<"):
            return part[1:]
        if part.endswith(">"):
            return part[:-1]
        return part

    return tuple(parse_key_event(unwrap(part)) for part in raw.split("><"))