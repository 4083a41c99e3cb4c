"""Colours, text styles, the style notation of the configuration, and the theme."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag
from typing import ClassVar


@dataclass(frozen=True)
class Color:
    """A named terminal colour or an index into the 256-colour palette."""

    name: str | None = None
    index: int | None = None

    WHITE: ClassVar[Color]
    DARK_GRAY: ClassVar[Color]
    YELLOW: ClassVar[Color]

    @classmethod
    def indexed(cls, index: int) -> Color:
        if not 0 <= index <= 0xFF:
            raise ValueError(f"palette index out of range: {index}")
        return cls(index=index)


Color.WHITE = Color(name="white")
Color.DARK_GRAY = Color(name="dark_gray")
Color.YELLOW = Color(name="yellow")


class Modifier(Flag):
    NONE = 0
    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINED = 8
    SLOW_BLINK = 16
    RAPID_BLINK = 32
    REVERSED = 64
    HIDDEN = 128
    CROSSED_OUT = 256


@dataclass(frozen=True)
class Style:
    """Foreground, background and the modifiers to add or remove."""

    fg: Color | None = None
    bg: Color | None = None
    add_modifier: Modifier = Modifier.NONE
    sub_modifier: Modifier = Modifier.NONE


@dataclass(frozen=True)
class Theme:
    selected_text: Style = field(default_factory=Style)
    selected_field: Style = field(default_factory=Style)
    active_field: Style = field(default_factory=Style)
    input_field: Style = field(default_factory=Style)


THEME = Theme(
    selected_text=Style(fg=Color.WHITE, bg=Color.DARK_GRAY, add_modifier=Modifier.BOLD),
    input_field=Style(fg=Color.WHITE),
    selected_field=Style(fg=Color.WHITE, add_modifier=Modifier.BOLD),
    active_field=Style(fg=Color.YELLOW, add_modifier=Modifier.BOLD),
)

_NAMED = {
    "bold black": 8,
    "bold red": 9,
    "bold green": 10,
    "bold yellow": 11,
    "bold blue": 12,
    "bold magenta": 13,
    "bold cyan": 14,
    "bold white": 15,
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}


def _trim_start_matches(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _u8_or_zero(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= 0xFF:
            return value
    return 0


def _digit_or_zero(byte: int) -> int:
    char = chr(byte)
    return int(char) if char in "0123456789" else 0


def parse_color(s: str) -> Color | None:
    """Read a colour such as "red", "color42", "gray5" or "rgb123"; None if unknown."""
    s = s.strip()
    if "bright color" in s:
        s = _trim_start_matches(s, "bright ")
        return Color.indexed(_u8_or_zero(_trim_start_matches(s, "color")))
    if "color" in s:
        return Color.indexed(_u8_or_zero(_trim_start_matches(s, "color")))
    if "gray" in s:
        return Color.indexed((232 + _u8_or_zero(_trim_start_matches(s, "gray"))) & 0xFF)
    if "rgb" in s:
        raw = s.encode("utf-8")
        if len(raw) < 6:
            raise ValueError(f"rgb colour needs three digits: {s!r}")
        red, green, blue = (_digit_or_zero(raw[i]) for i in (3, 4, 5))
        return Color.indexed((16 + red * 36 + green * 6 + blue) & 0xFF)
    index = _NAMED.get(s)
    return None if index is None else Color.indexed(index)


def process_color_string(color_str: str) -> tuple[str, Modifier]:
    """Separate style words (bold, underline, inverse) from a colour description."""
    color = (
        color_str.replace("grey", "gray")
        .replace("bright ", "")
        .replace("bold ", "")
        .replace("underline ", "")
        .replace("inverse ", "")
    )
    modifiers = Modifier.NONE
    if "underline" in color_str:
        modifiers |= Modifier.UNDERLINED
    if "bold" in color_str:
        modifiers |= Modifier.BOLD
    if "inverse" in color_str:
        modifiers |= Modifier.REVERSED
    return color, modifiers


def parse_style(line: str) -> Style:
    """Read a style such as "bold red on blue"."""
    split = line.lower().find("on ")
    if split < 0:
        split = len(line)
    fg_text, fg_mods = process_color_string(line[:split])
    bg_text, bg_mods = process_color_string(line[split:].replace("on ", ""))
    return Style(
        fg=parse_color(fg_text),
        bg=parse_color(bg_text),
        add_modifier=fg_mods | bg_mods,
    )