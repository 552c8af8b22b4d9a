import logging

import pytest

import config


@pytest.fixture
def user_config(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    monkeypatch.setattr(config, "USER_CONFIG_PATH", path)
    monkeypatch.delenv("TASK_ITEM_STORE", raising=False)
    monkeypatch.delenv("TASK_ITEM_TUI_TTIMEOUTLEN", raising=False)
    return path


def test_lang_roundtrip(user_config):
    assert config.get_user_lang() == ""
    config.set_user_lang("ru")
    assert config.get_user_lang() == "ru"
    config.set_user_lang("")
    assert not user_config.exists()


def test_store_path_env_wins(user_config, monkeypatch, tmp_path):
    user_config.write_text("store_path: ~/elsewhere.yaml\n", encoding="utf-8")
    assert config.get_store_path().name == "elsewhere.yaml"
    monkeypatch.setenv("TASK_ITEM_STORE", str(tmp_path / "env.yaml"))
    assert config.get_store_path() == tmp_path / "env.yaml"


def test_store_path_default(user_config):
    assert config.get_store_path() == config.DEFAULT_STORE_PATH


def test_log_settings(user_config):
    assert config.get_log_settings() == (config.DEFAULT_LOG_FILE, logging.INFO)
    user_config.write_text("log_level: debug\nlog_file: /tmp/x.log\n", encoding="utf-8")
    path, level = config.get_log_settings()
    assert level == logging.DEBUG
    assert path.name == "x.log"


def test_unreadable_config_is_ignored(user_config, caplog):
    user_config.write_text("lang: [unclosed\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="task_item.config"):
        assert config.get_user_lang() == ""
    assert "Ignoring unreadable config" in caplog.text


def test_ttimeoutlen_env(user_config, monkeypatch):
    assert config.get_tui_ttimeoutlen() == 0.05
    monkeypatch.setenv("TASK_ITEM_TUI_TTIMEOUTLEN", "0")
    assert config.get_tui_ttimeoutlen() == 0.0
    monkeypatch.setenv("TASK_ITEM_TUI_TTIMEOUTLEN", "fast")
    assert config.get_tui_ttimeoutlen() == 0.05
