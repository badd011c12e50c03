# SPDX-License-Identifier: CC0-1.0

from pathlib import Path

import pytest

from greenlens_bot.config import Settings
from greenlens_bot.faq import DEFAULT_FAQ_PATH

ENV_VARS = ("BRAND_NAME", "FAQ_PATH", "LOGS_DIR", "TYPING_DELAY_MIN", "TYPING_DELAY_MAX")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.load()
    assert settings.brand_name == "GreenLens"
    assert settings.faq_path == DEFAULT_FAQ_PATH
    assert settings.typing_delay_min == 1.0
    assert settings.typing_delay_max == 2.0


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("BRAND_NAME", "LeafLab")
    monkeypatch.setenv("LOGS_DIR", str(tmp_path))
    monkeypatch.setenv("TYPING_DELAY_MIN", "0")
    monkeypatch.setenv("TYPING_DELAY_MAX", "0.5")

    settings = Settings.load()
    assert settings.brand_name == "LeafLab"
    assert settings.logs_dir == Path(tmp_path)
    assert settings.typing_delay_min == 0.0
    assert settings.typing_delay_max == 0.5


@pytest.mark.parametrize(
    "low, high",
    [("abc", "1"), ("-1", "1"), ("3", "1")],
)
def test_invalid_delay(monkeypatch, low, high):
    monkeypatch.setenv("TYPING_DELAY_MIN", low)
    monkeypatch.setenv("TYPING_DELAY_MAX", high)

    with pytest.raises(RuntimeError):
        Settings.load()
