from pathlib import Path

import pytest

from confdeck.action import Action, ActionKind, Mode
from confdeck.config import (
    CONFIG_ENV,
    DATA_ENV,
    Config,
    get_config_dir,
    get_data_dir,
    parse_keybindings,
    parse_styles,
)
from confdeck.keys import KeyParseError, parse_key_sequence
from confdeck.styles import Color


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    directory = tmp_path / "config"
    directory.mkdir()
    monkeypatch.setenv(CONFIG_ENV, str(directory))
    monkeypatch.setenv(DATA_ENV, str(tmp_path / "data"))
    return directory


def _binding(cfg, mode, keys):
    return cfg.keybindings[mode][parse_key_sequence(keys)]


def test_config(config_dir):
    cfg = Config.load()
    assert _binding(cfg, Mode.SCHEDULE, "<Ctrl-q>") == Action(ActionKind.QUIT)


def test_user_binding_overrides_default(config_dir):
    (config_dir / "config.json").write_text(
        '{"keybindings": {"Schedule": {"<Ctrl-q>": "Suspend"}}}', encoding="utf-8"
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.SCHEDULE, "<Ctrl-q>") == Action(ActionKind.SUSPEND)


def test_defaults_fill_in_missing_bindings(config_dir):
    (config_dir / "config.json").write_text(
        '{"keybindings": {"Schedule": {"<q>": "Help"}}}', encoding="utf-8"
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.SCHEDULE, "<q>") == Action(ActionKind.HELP)
    assert _binding(cfg, Mode.SCHEDULE, "<Ctrl-q>") == Action(ActionKind.QUIT)


def test_yaml_change_mode(config_dir):
    (config_dir / "config.yaml").write_text(
        "keybindings:\n  Settings:\n    <Ctrl-s>: {ChangeMode: Schedule}\n", encoding="utf-8"
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.SETTINGS, "<Ctrl-s>") == Action(
        ActionKind.CHANGE_MODE, Mode.SCHEDULE
    )


def test_toml_file(config_dir):
    (config_dir / "config.toml").write_text(
        '[keybindings.Edit]\n"<esc>" = "Quit"\n', encoding="utf-8"
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.EDIT, "<esc>") == Action(ActionKind.QUIT)


def test_json5_with_comments_and_trailing_commas(config_dir):
    (config_dir / "config.json5").write_text(
        '{\n  // bindings\n  "keybindings": {\n    "Schedule": { "<h>": "Help", /* help */ },\n  },\n}\n',
        encoding="utf-8",
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.SCHEDULE, "<h>") == Action(ActionKind.HELP)


def test_later_file_overrides_earlier(config_dir):
    (config_dir / "config.json").write_text(
        '{"keybindings": {"Schedule": {"<q>": "Quit"}}}', encoding="utf-8"
    )
    (config_dir / "config.yaml").write_text(
        "keybindings:\n  Schedule:\n    <q>: Suspend\n", encoding="utf-8"
    )
    cfg = Config.load()
    assert _binding(cfg, Mode.SCHEDULE, "<q>") == Action(ActionKind.SUSPEND)


def test_ini_root_value(config_dir, tmp_path):
    target = tmp_path / "elsewhere"
    (config_dir / "config.ini").write_text(f"data_dir = {target}\n", encoding="utf-8")
    cfg = Config.load()
    assert cfg.config.data_dir == target


def test_directories_come_from_environment(config_dir, tmp_path):
    cfg = Config.load()
    assert get_data_dir() == tmp_path / "data"
    assert get_config_dir() == config_dir
    assert cfg.config.data_dir == tmp_path / "data"
    assert cfg.config.config_dir == config_dir


def test_platform_config_dir_is_named_after_app(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    assert get_config_dir().name == "confdeck"


def test_unknown_mode_in_file_is_an_error(config_dir):
    (config_dir / "config.json").write_text(
        '{"keybindings": {"Nowhere": {"<q>": "Quit"}}}', encoding="utf-8"
    )
    with pytest.raises(ValueError):
        Config.load()


def test_parse_keybindings_rejects_bad_key():
    with pytest.raises(KeyParseError):
        parse_keybindings({"Schedule": {"<ctrl-nokey>": "Quit"}})


def test_parse_keybindings_rejects_unknown_action():
    with pytest.raises(ValueError):
        parse_keybindings({"Schedule": {"<q>": "Explode"}})


def test_parse_styles():
    styles = parse_styles({"Schedule": {"title": "underline red on blue"}})
    style = styles[Mode.SCHEDULE]["title"]
    assert style.fg == Color.indexed(1)
    assert style.bg == Color.indexed(4)


def test_parse_styles_rejects_non_string():
    with pytest.raises(ValueError):
        parse_styles({"Schedule": {"title": 3}})


def test_default_config_is_empty():
    cfg = Config()
    assert cfg.keybindings == {}
    assert cfg.config.data_dir == Path()