import logging

import pytest

import config


@pytest.fixture()
def user_config(tmp_path, monkeypatch):
    path = tmp_path / ".fate_config.yaml"
    monkeypatch.setattr(config, "USER_CONFIG_PATH", path)
    return path


def test_missing_file_gives_defaults(user_config):
    assert config.get_user_theme() == ""
    assert config.get_user_data_dir() is None
    assert config.get_lock_timeout() == config.DEFAULT_LOCK_TIMEOUT
    assert config.get_log_level() == logging.INFO


def test_values_are_read(user_config, tmp_path):
    user_config.write_text(
        f"theme: contrast\ndata_dir: {tmp_path / 'data'}\nlock_timeout: 1.5\nlog_level: debug\n",
        encoding="utf-8",
    )
    assert config.get_user_theme() == "contrast"
    assert config.get_user_data_dir() == tmp_path / "data"
    assert config.get_lock_timeout() == 1.5
    assert config.get_log_level() == logging.DEBUG


def test_invalid_yaml_behaves_as_empty(user_config):
    user_config.write_text("theme: [unclosed\n", encoding="utf-8")
    assert config.get_user_theme() == ""


def test_non_mapping_behaves_as_empty(user_config):
    user_config.write_text("- just\n- a list\n", encoding="utf-8")
    assert config.get_user_data_dir() is None


@pytest.mark.parametrize("raw", ["0", "-1", "soon"])
def test_bad_lock_timeout_falls_back(user_config, raw):
    user_config.write_text(f"lock_timeout: {raw}\n", encoding="utf-8")
    assert config.get_lock_timeout() == config.DEFAULT_LOCK_TIMEOUT


def test_unknown_log_level_falls_back(user_config):
    user_config.write_text("log_level: chatty\n", encoding="utf-8")
    assert config.get_log_level() == logging.INFO
