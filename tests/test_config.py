"""Tests for configuration loading.

``load_dotenv`` is stubbed out so a stray ``.env`` file on the
developer's machine cannot leak into the results.
"""

from __future__ import annotations

from pathlib import Path

import pytest  # type: ignore

import roadtrip.config as config_mod
from roadtrip.config import ExportConfig, load_config
from roadtrip.errors import RoadtripError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_mod, "load_dotenv", lambda *args, **kwargs: False)
    for env_var in config_mod.ENV_OVERRIDES.values():
        monkeypatch.delenv(env_var, raising=False)


def test_defaults_without_file() -> None:
    assert load_config() == ExportConfig()


def test_yaml_export_section(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("export:\n  log_level: debug\n  output_encoding: utf-16\n", encoding="utf-8")
    config = load_config(str(path))
    assert config.log_level == "DEBUG"
    assert config.output_encoding == "utf-16"
    assert config.input_encoding == "utf-8"


def test_unknown_yaml_keys_are_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("export:\n  delimiter: ';'\n", encoding="utf-8")
    with caplog.at_level("WARNING", logger="roadtrip.config"):
        config = load_config(str(path))
    assert config == ExportConfig()
    assert "delimiter" in caplog.text


def test_empty_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == ExportConfig()


def test_environment_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("export:\n  log_level: debug\n", encoding="utf-8")
    monkeypatch.setenv("ROADTRIP_LOG_LEVEL", "warning")
    monkeypatch.setenv("ROADTRIP_INPUT_ENCODING", "latin-1")
    config = load_config(str(path))
    assert config.log_level == "WARNING"
    assert config.input_encoding == "latin-1"


@pytest.mark.parametrize(
    "content",
    [
        "export: [unclosed",
        "- just\n- a list\n",
        "export: plain-string\n",
    ],
)
def test_invalid_yaml_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(RoadtripError):
        load_config(str(path))


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(RoadtripError):
        load_config(str(tmp_path / "missing.yaml"))
