"""Configuration: directories, configuration files, keybindings and styles."""

from __future__ import annotations

import configparser
import json
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import platformdirs
import yaml

from confdeck.action import Action, Mode
from confdeck.keys import KeyEvent, parse_key_sequence
from confdeck.styles import Style, parse_style

logger = logging.getLogger(__name__)

PROJECT_NAME = "CONFDECK"
_APP_NAME = "confdeck"
DATA_ENV = f"{PROJECT_NAME}_DATA"
CONFIG_ENV = f"{PROJECT_NAME}_CONFIG"

KeyBindings = dict[Mode, dict[tuple[KeyEvent, ...], Action]]
Styles = dict[Mode, dict[str, Style]]

_DEFAULT_CONFIG: dict[str, Any] = {
    "keybindings": {"Schedule": {"<Ctrl-q>": "Quit"}},
    "styles": {},
}


def get_data_dir() -> Path:
    """The data directory: from the environment if set, else the platform's."""
    folder = os.environ.get(DATA_ENV)
    if folder is not None:
        return Path(folder)
    return Path(platformdirs.user_data_dir(_APP_NAME, appauthor=False))


def get_config_dir() -> Path:
    """The configuration directory: from the environment if set, else the platform's."""
    folder = os.environ.get(CONFIG_ENV)
    if folder is not None:
        return Path(folder)
    return Path(platformdirs.user_config_dir(_APP_NAME, appauthor=False))


def _mode(name: Any) -> Mode:
    try:
        return Mode(name)
    except ValueError:
        raise ValueError(f"Unknown mode: {name!r}") from None


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


def parse_keybindings(raw: dict[str, Any]) -> KeyBindings:
    """Turn {mode: {key sequence: action}} from a configuration into key bindings."""
    return {
        _mode(mode_name): {
            parse_key_sequence(keys): Action.from_value(action)
            for keys, action in _mapping(inner, f"keybindings for {mode_name}").items()
        }
        for mode_name, inner in _mapping(raw, "keybindings").items()
    }


def parse_styles(raw: dict[str, Any]) -> Styles:
    """Turn {mode: {name: style text}} from a configuration into styles."""
    styles: Styles = {}
    for mode_name, inner in _mapping(raw, "styles").items():
        converted: dict[str, Style] = {}
        for name, text in _mapping(inner, f"styles for {mode_name}").items():
            if not isinstance(text, str):
                raise ValueError(f"style {name!r} must be a string")
            converted[name] = parse_style(text)
        styles[_mode(mode_name)] = converted
    return styles


def _strip_comments(text: str) -> str:
    out: list[str] = []
    quote: str | None = None
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if quote is not None:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
        elif ch in "\"'":
            quote = ch
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end < 0 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end < 0:
                raise ValueError("unterminated comment")
            out.append(" ")
            i = end + 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _read_json5(path: Path) -> Any:
    text = _strip_comments(path.read_text(encoding="utf-8"))
    try:
        return json.loads(text)
    except ValueError:
        pass
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: {exc}") from exc


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _read_yaml(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: {exc}") from exc


def _read_toml(path: Path) -> Any:
    with path.open("rb") as handle:
        return tomllib.load(handle)


_ROOT_SECTION = "__root__"


def _read_ini(path: Path) -> Any:
    parser = configparser.RawConfigParser(default_section="\0defaults")
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n" + path.read_text(encoding="utf-8"))
    except configparser.Error as exc:
        raise ValueError(f"{path}: {exc}") from exc
    result: dict[str, Any] = dict(parser[_ROOT_SECTION])
    for section in parser.sections():
        if section != _ROOT_SECTION:
            result[section] = dict(parser[section])
    return result


_CONFIG_FILES: tuple[tuple[str, Callable[[Path], Any]], ...] = (
    ("config.json5", _read_json5),
    ("config.json", _read_json),
    ("config.yaml", _read_yaml),
    ("config.toml", _read_toml),
    ("config.ini", _read_ini),
)


def _deep_merge(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _path_value(data: dict[str, Any], name: str) -> Path:
    value = data.get(name)
    if value is None:
        return Path()
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return Path(value)


@dataclass
class AppConfig:
    data_dir: Path = field(default_factory=Path)
    config_dir: Path = field(default_factory=Path)


@dataclass
class Config:
    """Directories, keybindings per mode and styles per mode."""

    config: AppConfig = field(default_factory=AppConfig)
    keybindings: KeyBindings = field(default_factory=dict)
    styles: Styles = field(default_factory=dict)

    @classmethod
    def _from_mapping(cls, data: dict[str, Any]) -> Config:
        return cls(
            config=AppConfig(
                data_dir=_path_value(data, "data_dir"),
                config_dir=_path_value(data, "config_dir"),
            ),
            keybindings=parse_keybindings(data.get("keybindings") or {}),
            styles=parse_styles(data.get("styles") or {}),
        )

    @classmethod
    def load(cls) -> Config:
        """Read the configuration files, later ones overriding earlier, over the defaults."""
        config_dir = get_config_dir()
        merged: dict[str, Any] = {
            "data_dir": str(get_data_dir()),
            "config_dir": str(config_dir),
        }
        found = False
        for name, reader in _CONFIG_FILES:
            path = config_dir / name
            if not path.exists():
                continue
            found = True
            content = reader(path)
            if content is None:
                continue
            merged = _deep_merge(merged, _mapping(content, f"{path}"))
        if not found:
            logger.error("No configuration file found. Application may not behave as expected")

        cfg = cls._from_mapping(merged)
        defaults = cls._from_mapping(_DEFAULT_CONFIG)
        for mode, bindings in defaults.keybindings.items():
            user_bindings = cfg.keybindings.setdefault(mode, {})
            for keys, action in bindings.items():
                user_bindings.setdefault(keys, action)
        for mode, styles in defaults.styles.items():
            user_styles = cfg.styles.setdefault(mode, {})
            for name, style in styles.items():
                user_styles.setdefault(name, style)
        return cfg