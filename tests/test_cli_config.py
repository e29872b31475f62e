from pathlib import Path

import pytest

from wayfarer.presentation.cli.config import (
    CommandLineOptions,
    get_error_log_path,
    get_status_path,
    get_user_data_dir,
    load_config,
    parse_options,
    save_config,
)


def test_no_flags_runs_normal_menu_flow(monkeypatch) -> None:
    monkeypatch.delenv("WAYFARER_DEBUG", raising=False)
    options = parse_options([])
    assert options == CommandLineOptions()
    assert not options.has_entry_point


def test_all_flags_are_parsed(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("WAYFARER_DEBUG", raising=False)
    options = parse_options(
        ["--debug", "--skipSteam", "--chapter", "2", "--node", "5", "--validate", "--data-dir", str(tmp_path)]
    )
    assert options.debug
    assert options.skip_steam
    assert (options.chapter, options.node) == (2, 5)
    assert options.validate
    assert options.data_dir == tmp_path
    assert options.has_entry_point


def test_non_integer_chapter_is_rejected() -> None:
    with pytest.raises(SystemExit):
        parse_options(["--chapter", "two"])


def test_debug_env_var_enables_debug(monkeypatch) -> None:
    monkeypatch.setenv("WAYFARER_DEBUG", "1")
    assert parse_options([]).debug
    monkeypatch.setenv("WAYFARER_DEBUG", "yes")
    assert not parse_options([]).debug


def test_data_dir_override_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WAYFARER_DATA_DIR", str(tmp_path))
    assert get_user_data_dir() == tmp_path
    assert get_status_path() == tmp_path / "status.json"
    assert get_error_log_path(tmp_path / "other") == tmp_path / "other" / "error_log.txt"


def test_config_defaults_when_missing_or_corrupt(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    assert load_config(path) == {"text_display_mode": "typewriter"}
    path.write_text("[1, 2", encoding="utf-8")
    assert load_config(path) == {"text_display_mode": "typewriter"}


def test_config_round_trips_text_mode(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    save_config({"text_display_mode": "instant"}, path)
    assert load_config(path) == {"text_display_mode": "instant"}
    save_config({"text_display_mode": "sideways"}, path)
    assert load_config(path) == {"text_display_mode": "typewriter"}
