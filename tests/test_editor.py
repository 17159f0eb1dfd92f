from __future__ import annotations

from moniterm.editor import Editor, property_value
from moniterm.models import Monitor, Property
from moniterm.session import Key, Session


def test_runs_until_quit(monitors, fake_screen):
    screen = fake_screen([Key.DOWN, Key.TAB, Key.TAB, Key.ENTER, Key.RIGHT, Key.ENTER, "q", Key.UP])
    result = Editor(screen, Session(monitors)).run()
    assert result is monitors
    assert monitors[1].x == 1930
    # the key after "q" is never read
    assert screen.keys == [Key.UP]


def test_stops_when_input_ends(monitors, fake_screen):
    screen = fake_screen([Key.TAB])
    Editor(screen, Session(monitors)).run()
    assert screen.frames == 2


def test_renders_panels(monitors, fake_screen):
    screen = fake_screen()
    Editor(screen, Session(monitors)).render()
    titles = [b[4] for b in screen.boxes]
    assert titles == ["Monitors", "Monitor: HDMI-A-1", "Layout"]
    out = screen.dump()
    assert "HDMI-A-1   [On ] 1920x1080" in out
    assert "Resolution    : 1920x1080" in out
    assert "Position      : X:0 Y:0" in out


def test_edit_markers_and_catalog_hint(monitors, fake_screen):
    screen = fake_screen()
    session = Session(monitors)
    for key in (Key.TAB, Key.ENTER):
        session.handle_key(key)
    Editor(screen, session).render()
    out = screen.dump()
    assert "> 1920x1080 <" in out
    assert "[1/4] 1920x1080 1600x900 1366x768 1280x720" in out


def test_selected_row_highlighted(monitors, fake_screen):
    screen = fake_screen()
    session = Session(monitors)
    session.handle_key(Key.DOWN)
    Editor(screen, session).render()
    styles = {t[2].split()[0]: t[3] for t in screen.texts if t[1] == 2 and t[0] in (2, 3, 4)}
    assert styles["DP-1"] == "highlight"
    assert styles["HDMI-A-1"] == "normal"
    assert any(t[3] == "selected" for t in screen.texts)


def test_empty_store_message(fake_screen):
    screen = fake_screen(["x", Key.ESCAPE])
    assert Editor(screen, Session([])).run() == []
    assert "No monitors detected" in screen.dump()


def test_property_value():
    m = Monitor(name="A", x=-10, y=20, refresh_rate=59.94, disabled=True)
    assert property_value(m, Property.POSITION) == "X:-10 Y:20"
    assert property_value(m, Property.REFRESH_RATE) == "59.94 Hz"
    assert property_value(m, Property.ENABLED) == "No"
