"""Schedule data: times, weeks, conferences and settings, with their JSON forms."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

_MAX_HOURS = 23
_MAX_MINUTES = 59
_DAYS = 7


def _parse_u8(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= 0xFF:
            return value
    return None


@dataclass(frozen=True, order=True)
class Time:
    """A time of day in hours and minutes."""

    hours: int = 0
    minutes: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hours <= _MAX_HOURS:
            raise ValueError("Invalid hour: must be between 0 and 23")
        if not 0 <= self.minutes <= _MAX_MINUTES:
            raise ValueError("Invalid minute: must be between 0 and 59")

    @classmethod
    def parse(cls, text: str) -> Time:
        """Read a time written as HH:MM."""
        parts = text.split(":")
        if len(parts) < 2:
            raise ValueError("Invalid time format: must be HH:MM")
        hours, minutes = _parse_u8(parts[0]), _parse_u8(parts[1])
        if hours is None or minutes is None:
            raise ValueError("Invalid time format: must be HH:MM")
        return cls(hours, minutes)

    def __str__(self) -> str:
        return f"{self.hours:02}:{self.minutes:02}"


class Week(Enum):
    """Which weeks a conference recurs in."""

    EVERY = "Every"
    EVEN = "Even"
    ODD = "Odd"

    @classmethod
    def variants(cls) -> tuple[str, ...]:
        return tuple(week.value for week in cls)

    @classmethod
    def parse(cls, text: str) -> Week:
        try:
            return cls(text)
        except ValueError:
            raise ValueError("Invalid week: must be 'Every', 'Even', or 'Odd'") from None

    def __str__(self) -> str:
        return self.value


def _field(data: dict[str, Any], name: str, kind: type) -> Any:
    if name not in data:
        raise ValueError(f"missing field `{name}`")
    value = data[name]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"field `{name}` has the wrong type")
    return value


@dataclass
class Conference:
    """One recurring online meeting."""

    # Callable that opens a link and returns a false value on failure;
    # the application installs one before conferences are opened.
    browser: ClassVar[Callable[[str], Any] | None] = None

    title: str = ""
    link: str = ""
    start_time: Time = Time()
    end_time: Time = Time()
    password: str | None = None
    autostart_permission: bool = False
    week: Week = Week.EVERY

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Conference:
        if not isinstance(data, dict):
            raise ValueError("a conference must be a JSON object")
        password = data.get("password")
        if password is not None and not isinstance(password, str):
            raise ValueError("field `password` has the wrong type")
        return cls(
            title=_field(data, "title", str),
            link=_field(data, "link", str),
            start_time=Time.parse(_field(data, "start_time", str)),
            end_time=Time.parse(_field(data, "end_time", str)),
            password=password,
            autostart_permission=_field(data, "autostart_permission", bool),
            week=Week.parse(_field(data, "week", str)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "start_time": str(self.start_time),
            "end_time": str(self.end_time),
            "password": self.password,
            "autostart_permission": self.autostart_permission,
            "week": self.week.value,
        }

    def open(self) -> None:
        """Open the conference link with the installed browser."""
        opener = type(self).browser
        if opener is None or opener(self.link) is False:
            raise RuntimeError("Browser failed to open")


@dataclass
class Settings:
    """User preferences."""

    autostart: bool = False
    early_join_minutes: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.early_join_minutes <= 0xFFFF:
            raise ValueError("early_join_minutes out of range")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        if not isinstance(data, dict):
            raise ValueError("settings must be a JSON object")
        return cls(
            autostart=_field(data, "autostart", bool),
            early_join_minutes=_field(data, "early_join_minutes", int),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"autostart": self.autostart, "early_join_minutes": self.early_join_minutes}


Schedule = list[list[Conference]]


def new_schedule() -> Schedule:
    """An empty schedule: one list of conferences for each day, Monday first."""
    return [[] for _ in range(_DAYS)]


def load_schedule(path: str | Path) -> Schedule:
    """Read a schedule file; a file that cannot be opened gives an empty schedule."""
    try:
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError:
        return new_schedule()
    if not isinstance(data, list) or len(data) != _DAYS:
        raise ValueError(f"a schedule must be an array of {_DAYS} days")
    if not all(isinstance(day, list) for day in data):
        raise ValueError("each day must be an array of conferences")
    return [[Conference.from_dict(item) for item in day] for day in data]


def load_settings(path: str | Path) -> Settings:
    """Read a settings file; a file that cannot be opened gives the defaults."""
    try:
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError:
        return Settings()
    return Settings.from_dict(data)