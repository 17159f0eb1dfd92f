from __future__ import annotations

import logging

import pytest

from moniterm import app
from moniterm.models import CONFIG_HEADER
from moniterm.session import Key


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    # basicConfig is a no-op once the root logger has handlers
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)
    return tmp_path


def scripted(*keys):
    """Replace the curses editor with a scripted run of key tokens."""
    def edit(session):
        for key in keys:
            if not session.handle_key(key):
                break
        return session.monitors
    return edit


def test_mock_session_written(isolated, monkeypatch, capsys):
    monkeypatch.setattr(app, "edit", scripted(Key.TAB, Key.TAB, Key.TAB, Key.TAB, Key.ENTER, Key.SPACE, "q"))
    out = isolated / "hypr" / "monitors.conf"
    assert app.main(["--mock", "-o", str(out)]) == 0
    text = out.read_text()
    assert text.startswith(CONFIG_HEADER)
    assert text[len(CONFIG_HEADER):] == (
        "monitor = HDMI-A-1, disabled\n"
        "monitor = DP-1, 2560x1440@144, 1920x0, 1.0\n"
        "monitor = DP-2, 1920x1080@144, 1920x1080, 1.0\n"
    )
    assert str(out) in capsys.readouterr().out


def test_print_without_write(isolated, monkeypatch, capsys):
    monkeypatch.setattr(app, "edit", scripted("q"))
    assert app.main(["--mock", "--no-write", "--print"]) == 0
    out = capsys.readouterr().out
    assert "monitor = HDMI-A-1, 1920x1080@60, 0x0, 1.0" in out
    assert not (isolated / "config").joinpath("hypr").exists()


def test_default_output_from_settings(isolated, monkeypatch):
    settings = isolated / "config" / "moniterm" / "settings.json"
    settings.parent.mkdir(parents=True)
    target = isolated / "out" / "monitors.conf"
    settings.write_text('{"output_path": "%s", "position_step": 100}' % target)
    monkeypatch.setattr(app, "edit", scripted(Key.TAB, Key.TAB, Key.ENTER, Key.RIGHT, Key.ESCAPE, Key.ESCAPE))
    assert app.main(["--mock"]) == 0
    assert "monitor = HDMI-A-1, 1920x1080@60, 100x0, 1.0" in target.read_text()


def test_write_failure_reported(isolated, monkeypatch, capsys):
    monkeypatch.setattr(app, "edit", scripted("q"))
    blocker = isolated / "file"
    blocker.write_text("")
    assert app.main(["--mock", "-o", str(blocker / "monitors.conf")]) == 1
    assert "cannot write" in capsys.readouterr().err


def test_empty_source_writes_nothing(isolated, monkeypatch):
    monkeypatch.setattr(app.Hyprctl, "has_instance", lambda self: True)
    monkeypatch.setattr(app.Hyprctl, "get_monitors", lambda self: [])
    monkeypatch.setattr(app, "edit", scripted("q"))
    out = isolated / "monitors.conf"
    assert app.main(["-o", str(out)]) == 0
    assert not out.exists()


def test_write_config_backs_up(isolated):
    out = isolated / "monitors.conf"
    out.write_text("old\n")
    from moniterm.models import mock_monitors
    assert app.write_config(mock_monitors(), out)
    assert (isolated / "monitors.conf.bak").read_text() == "old\n"


def test_bad_settings_fall_back_to_defaults(isolated, monkeypatch, capsys):
    settings = isolated / "config" / "moniterm" / "settings.json"
    settings.parent.mkdir(parents=True)
    settings.write_text('{"position_step": "ten", "output_path": null}')
    monkeypatch.setenv("HOME", str(isolated / "home"))
    monkeypatch.setattr(app, "edit", scripted(Key.TAB, Key.TAB, Key.ENTER, Key.RIGHT, "q"))
    assert app.main(["--mock"]) == 0
    written = isolated / "home" / ".config" / "hypr" / "configs" / "autogen" / "monitors.conf"
    assert "monitor = HDMI-A-1, 1920x1080@60, 10x0, 1.0" in written.read_text()
    assert not (isolated / "None").exists()
    assert "None" not in capsys.readouterr().out


def test_no_instance_skips_query(isolated, monkeypatch, capsys):
    monkeypatch.setattr(app.Hyprctl, "has_instance", lambda self: False)

    def fail(self):
        raise AssertionError("queried without an instance")

    monkeypatch.setattr(app.Hyprctl, "get_monitors", fail)
    monkeypatch.setattr(app, "edit", scripted("q"))
    out = isolated / "monitors.conf"
    assert app.main(["-o", str(out)]) == 0
    assert "no running Hyprland instance" in capsys.readouterr().err
    assert not out.exists()
