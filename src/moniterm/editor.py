"""Interactive editor: wires key tokens to the session and redraws panels."""

from __future__ import annotations

import logging

from .layout import draw_layout, project_layout
from .models import PROPERTY_ORDER, Monitor, Property
from .session import Session

log = logging.getLogger(__name__)

# Panel geometry (rows, cols are 0-based screen cells)
LIST_WIDTH = 32
DETAILS_COL = 32
DETAILS_WIDTH = 50
DETAILS_HEIGHT = 14
LAYOUT_WIDTH = 50
LAYOUT_HEIGHT = 15

HELP_LINES = (
    "Controls: ↑/↓ select monitor | Tab select property | Enter edit | q/Esc quit",
    "When editing: ↑/↓/←/→ adjust value | Space toggle | Enter/Esc done",
)


def property_value(monitor: Monitor, prop: Property) -> str:
    if prop is Property.RESOLUTION:
        return monitor.resolution
    if prop is Property.POSITION:
        return f"X:{monitor.x} Y:{monitor.y}"
    if prop is Property.REFRESH_RATE:
        return f"{monitor.refresh_rate:g} Hz"
    return "Yes" if monitor.enabled else "No"


class Editor:
    """Runs the read-key / transition / redraw loop against a screen."""

    def __init__(self, screen, session: Session) -> None:
        self.screen = screen
        self.session = session

    def run(self) -> list[Monitor]:
        """Edit until the operator quits; return the final arrangement."""
        self.render()
        while True:
            key = self.screen.read_key()
            if key is None:
                log.info("Input closed, leaving editor")
                break
            if not self.session.handle_key(key):
                break
            self.render()
        return self.session.monitors

    # ── Drawing ──────────────────────────────────────────────────────

    def render(self) -> None:
        self.screen.clear()
        if not self.session.has_monitors:
            self._render_empty()
        else:
            self._render_list()
            self._render_details()
            self._render_layout()
            self._render_help()
        self.screen.refresh()

    def _render_empty(self) -> None:
        self.screen.box(0, 0, 5, 60, "Monitors")
        self.screen.text(2, 2, "No monitors detected. Press q to quit.", "disabled")

    def _render_list(self) -> None:
        s = self.screen
        monitors = self.session.monitors
        selected = self.session.selection.monitor_index
        s.box(0, 0, len(monitors) + 4, LIST_WIDTH, "Monitors", "title")
        for i, m in enumerate(monitors):
            if i == selected:
                style = "highlight"
            elif m.disabled:
                style = "disabled"
            else:
                style = "normal"
            status = "On " if m.enabled else "Off"
            s.text(2 + i, 2, f"{m.name:<10} [{status}] {m.resolution}", style)

    def _render_details(self) -> None:
        s = self.screen
        sel = self.session.selection
        m = self.session.current
        s.box(0, DETAILS_COL, DETAILS_HEIGHT, DETAILS_WIDTH, f"Monitor: {m.name}", "title")

        col = DETAILS_COL + 2
        for i, prop in enumerate(PROPERTY_ORDER):
            active = sel.prop is prop
            value = property_value(m, prop)
            if active and sel.editing:
                value = f"> {value} <"
            s.text(2 + i * 2, col, f"{prop.label:<14}: {value}", "highlight" if active else "normal")

        row = 2 + len(PROPERTY_ORDER) * 2
        if m.description:
            s.text(row, col, m.description[:DETAILS_WIDTH - 4], "disabled")
        if sel.editing and sel.prop in (Property.RESOLUTION, Property.REFRESH_RATE):
            s.text(row + 1, col, self._catalog_hint(), "disabled")
        s.text(DETAILS_HEIGHT - 2, col, "Tab: property  Enter: edit  Esc: exit", "disabled")

    def _catalog_hint(self) -> str:
        sel = self.session.selection
        catalog = self.session.catalog
        if sel.prop is Property.RESOLUTION:
            options = catalog.resolutions
            cursor = sel.resolution_cursor
        else:
            options = tuple(f"{r}" for r in catalog.refresh_rates)
            cursor = sel.refresh_cursor
        return f"[{cursor + 1}/{len(options)}] " + " ".join(options)

    def _render_layout(self) -> None:
        s = self.screen
        top = DETAILS_HEIGHT + 1
        s.box(top, DETAILS_COL, LAYOUT_HEIGHT + 2, LAYOUT_WIDTH + 2, "Layout", "title")

        placements = project_layout(
            self.session.monitors, LAYOUT_WIDTH, LAYOUT_HEIGHT,
            selected=self.session.selection.monitor_index,
        )
        for dy, line in enumerate(draw_layout(placements, LAYOUT_WIDTH, LAYOUT_HEIGHT)):
            s.text(top + 1 + dy, DETAILS_COL + 1, line)

        # Recolour the selected box on top of the plain grid
        for p in placements:
            if not p.selected:
                continue
            grid = draw_layout([p], LAYOUT_WIDTH, LAYOUT_HEIGHT)
            for dy in range(p.height):
                row = p.row + dy
                if not 0 <= row < LAYOUT_HEIGHT:
                    continue
                line = grid[row]
                start = max(0, p.col)
                end = min(LAYOUT_WIDTH, p.col + p.width)
                if start < end:
                    s.text(top + 1 + row, DETAILS_COL + 1 + start, line[start:end], "selected")
        s.text(top + LAYOUT_HEIGHT + 2, DETAILS_COL, "Position: (0,0) is top-left", "disabled")

    def _render_help(self) -> None:
        rows, _ = self.screen.size()
        base = max(DETAILS_HEIGHT + LAYOUT_HEIGHT + 4, rows - len(HELP_LINES))
        for i, line in enumerate(HELP_LINES):
            self.screen.text(base + i, 0, line)
