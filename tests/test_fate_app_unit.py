#!/usr/bin/env python3
"""Unit tests for the bootstrap entry point."""

import pytest

from core.desktop.interface import fate_app
from infrastructure.sqlite_store import SqliteBucketStore


@pytest.fixture()
def app_env(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    monkeypatch.setenv("FATE_DATA_DIR", str(data_dir))
    monkeypatch.setattr(fate_app, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(fate_app, "get_user_theme", lambda: "")
    monkeypatch.setattr(fate_app, "get_user_data_dir", lambda: None)
    monkeypatch.setattr(fate_app, "get_lock_timeout", lambda: 0.05)
    return data_dir


def test_version_flag(capsys):
    assert fate_app.main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_runs_tui_and_closes_store(app_env, monkeypatch):
    seen = {}

    def fake_cmd_tui(session, theme):
        seen["session"] = session
        seen["theme"] = theme
        session.repository.create("from tui")
        return 0

    monkeypatch.setattr(fate_app, "cmd_tui", fake_cmd_tui)

    assert fate_app.main(["--theme", "contrast"]) == 0
    assert seen["theme"] == "contrast"
    assert seen["session"].repository.store.closed

    # Store was released, so a second run can open it and sees the task.
    monkeypatch.setattr(fate_app, "cmd_tui", lambda session, theme: seen.update(names=[t.name for t in session.state.pending]) or 0)
    assert fate_app.main([]) == 0
    assert seen["names"] == ["from tui"]


def test_unknown_config_theme_falls_back(app_env, monkeypatch):
    themes = []
    monkeypatch.setattr(fate_app, "get_user_theme", lambda: "neon")
    monkeypatch.setattr(fate_app, "cmd_tui", lambda session, theme: themes.append(theme) or 0)
    assert fate_app.main([]) == 0
    assert themes == ["slate"]


def test_locked_store_exits_with_message(app_env, monkeypatch, capsys):
    monkeypatch.setattr(fate_app, "cmd_tui", lambda session, theme: pytest.fail("TUI must not start"))
    holder = SqliteBucketStore.open(app_env / "fate.db")
    try:
        assert fate_app.main([]) == 1
    finally:
        holder.close()
    err = capsys.readouterr().err
    assert "fate is already running. Please close the other instance." in err


def test_bad_data_dir_exits_one(tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setenv("FATE_DATA_DIR", str(blocker / "sub"))
    assert fate_app.main([]) == 1
    assert "fate:" in capsys.readouterr().err
