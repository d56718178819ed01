from __future__ import annotations

from pathlib import Path

import pytest

from hostbot import logging_utils
from hostbot.settings import load_settings


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOSTBOT_CONFIG", "/etc/hostbot.toml")
    monkeypatch.setenv("HOSTBOT_LOG_PROFILE", "console")
    monkeypatch.setenv("HOSTBOT_TELEGRAM_TOKEN", "env-token")

    settings = load_settings()

    assert settings.config == Path("/etc/hostbot.toml")
    assert settings.log_profile == "console"
    assert settings.telegram_token == "env-token"
    assert settings.log_level == "INFO"


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOSTBOT_CONFIG", "/etc/hostbot.toml")

    assert load_settings(config=tmp_path / "local.toml").config == tmp_path / "local.toml"
    assert load_settings(config=None).config == Path("/etc/hostbot.toml")


def test_configure_logging_records_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED", None)

    logging_utils.configure_logging(level="debug")
    assert logging_utils._CONFIGURED == ("default", "DEBUG")

    logging_utils.configure_logging(profile="console", level="info")
    assert logging_utils._CONFIGURED == ("console", "INFO")
