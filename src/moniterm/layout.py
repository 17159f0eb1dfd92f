"""Project the monitor arrangement onto a character-cell canvas."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Monitor


# Smallest box that still fits a border and a label line
MIN_BOX_WIDTH = 13
MIN_BOX_HEIGHT = 4

# Terminal cells are about twice as tall as they are wide
CELL_ASPECT = 0.5

# Bounding box used when every monitor is disabled
DEFAULT_BOUNDS = (0, 0, 1000, 1000)


@dataclass(frozen=True)
class Placement:
    index: int                  # position of the monitor in the store
    monitor: Monitor
    col: int
    row: int
    width: int
    height: int
    selected: bool = False


def bounding_box(monitors: list[Monitor]) -> tuple[int, int, int, int]:
    """Return (min_x, min_y, max_x, max_y) over enabled monitors."""
    enabled = [m for m in monitors if m.enabled]
    if not enabled:
        return DEFAULT_BOUNDS
    return (
        min(m.x for m in enabled),
        min(m.y for m in enabled),
        max(m.right for m in enabled),
        max(m.bottom for m in enabled),
    )


class LayoutProjector:
    """Maps absolute monitor coordinates onto a canvas of ``width`` x ``height`` cells.

    One uniform scale is used for both axes so relative positions and
    aspect ratio survive; rows are then halved to compensate for tall
    character cells, and the result is centred in the canvas.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def project(self, monitors: list[Monitor], selected: int = -1) -> list[Placement]:
        min_x, min_y, max_x, max_y = bounding_box(monitors)
        span_x = (max_x - min_x) or 1
        span_y = (max_y - min_y) or 1

        scale = min(self.width / span_x, self.height / span_y)

        offset_x = round((self.width - span_x * scale) / 2)
        offset_y = round((self.height - span_y * scale * CELL_ASPECT) / 2)

        ordered = sorted(
            (i for i, m in enumerate(monitors) if m.enabled),
            key=lambda i: (monitors[i].y, monitors[i].x),
        )
        placements: list[Placement] = []
        for i in ordered:
            m = monitors[i]
            placements.append(Placement(
                index=i,
                monitor=m,
                col=offset_x + round((m.x - min_x) * scale),
                row=offset_y + round(round((m.y - min_y) * scale) * CELL_ASPECT),
                width=max(MIN_BOX_WIDTH, round(m.width * scale)),
                height=max(MIN_BOX_HEIGHT, round(m.height * scale * CELL_ASPECT)),
                selected=(i == selected),
            ))
        return placements


def project_layout(
    monitors: list[Monitor], width: int, height: int, selected: int = -1,
) -> list[Placement]:
    return LayoutProjector(width, height).project(monitors, selected)


def _box_lines(p: Placement) -> list[str]:
    m = p.monitor
    inner = p.width - 2
    labels = [m.name, m.resolution, f"{m.refresh_rate:g}Hz"]
    lines = ["┌" + "─" * inner + "┐"]
    for i in range(p.height - 2):
        text = labels[i] if i < len(labels) else ""
        lines.append("│" + text[:inner].ljust(inner) + "│")
    lines.append("└" + "─" * inner + "┘")
    return lines


def draw_layout(placements: list[Placement], width: int, height: int) -> list[str]:
    """Render placements into ``height`` strings of ``width`` cells.

    Later placements overwrite earlier ones; anything outside the canvas
    is clipped.
    """
    grid = [[" "] * width for _ in range(height)]
    for p in placements:
        for dy, line in enumerate(_box_lines(p)):
            row = p.row + dy
            if not 0 <= row < height:
                continue
            for dx, ch in enumerate(line):
                col = p.col + dx
                if 0 <= col < width:
                    grid[row][col] = ch
    return ["".join(r) for r in grid]
