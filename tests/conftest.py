from __future__ import annotations

import pytest

from moniterm.models import Monitor, mock_monitors


class FakeScreen:
    """Records draw calls and replays a scripted list of key tokens."""

    def __init__(self, keys=(), rows: int = 45, cols: int = 100) -> None:
        self.keys = list(keys)
        self.rows = rows
        self.cols = cols
        self.texts: list[tuple[int, int, str, str]] = []
        self.boxes: list[tuple[int, int, int, int, str]] = []
        self.frames = 0

    def size(self):
        return self.rows, self.cols

    def clear(self):
        self.texts.clear()
        self.boxes.clear()

    def text(self, row, col, s, style="normal"):
        self.texts.append((row, col, s, style))

    def box(self, row, col, height, width, title="", style="normal"):
        self.boxes.append((row, col, height, width, title))

    def refresh(self):
        self.frames += 1

    def read_key(self):
        return self.keys.pop(0) if self.keys else None

    def dump(self) -> str:
        return "\n".join(t[2] for t in self.texts)


@pytest.fixture
def monitors() -> list[Monitor]:
    return mock_monitors()


@pytest.fixture
def fake_screen():
    return FakeScreen
