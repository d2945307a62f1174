from pathlib import Path

import pytest

from badwords.config import (
    get_config_path,
    get_env_overrides,
    load_config,
    read_config_file,
)


def test_read_config_file_rejects_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not-json}")
    with pytest.raises(ValueError, match="invalid config json"):
        read_config_file(config_path)


def test_read_config_file_rejects_non_object(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("[1, 2]")
    with pytest.raises(ValueError, match="config must be an object"):
        read_config_file(config_path)


def test_read_config_file_missing_or_blank_is_empty(tmp_path: Path) -> None:
    assert read_config_file(tmp_path / "absent.json") == {}
    blank = tmp_path / "blank.json"
    blank.write_text("  \n")
    assert read_config_file(blank) == {}


def test_get_config_path_honors_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "elsewhere.json"
    monkeypatch.setenv("BADWORDS_CONFIG", str(target))
    assert get_config_path() == target


def test_load_config_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.api_base == "https://api.badwords.milliytech.uz"
    assert cfg.confirm_status_ms == 2500
    assert cfg.feedback_status_ms == 3500
    assert cfg.default_severity == 50


def test_load_config_reads_file_and_normalizes_base(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text('{"api_base": "localhost:8000/", "timeout_s": 4}\n')

    cfg = load_config(config_path)

    assert cfg.api_base == "http://localhost:8000"
    assert cfg.timeout_s == 4


def test_load_config_env_overrides_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text('{"api_base": "https://file.example", "default_severity": 20}\n')
    monkeypatch.setenv("BADWORDS_API", "https://env.example")
    monkeypatch.setenv("BADWORDS_DEFAULT_SEVERITY", "75")

    cfg = load_config(config_path)

    assert cfg.api_base == "https://env.example"
    assert cfg.default_severity == 75


def test_load_config_warns_and_uses_defaults_on_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{broken-json")

    with pytest.warns(RuntimeWarning, match="Invalid config file"):
        cfg = load_config(config_path)

    assert cfg.timeout_s == 10


def test_load_config_invalid_int_env_does_not_crash_and_warns(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("BADWORDS_FEEDBACK_STATUS_MS", "soon")
    with pytest.warns(RuntimeWarning, match="feedback_status_ms"):
        cfg = load_config(tmp_path / "config.json")
    assert cfg.feedback_status_ms == 3500


def test_load_config_invalid_config_value_does_not_crash_and_warns(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text('{"timeout_s": "abc"}\n')
    with pytest.warns(RuntimeWarning, match="timeout_s"):
        cfg = load_config(config_path)
    assert cfg.timeout_s == 10


def test_get_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BADWORDS_API", "http://127.0.0.1:9")
    monkeypatch.setenv("BADWORDS_TIMEOUT_S", "2")
    overrides = get_env_overrides()
    assert overrides["api_base"] == "http://127.0.0.1:9"
    assert overrides["timeout_s"] == "2"
    assert "prefs_path" in overrides
