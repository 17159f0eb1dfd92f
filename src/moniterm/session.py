"""Selection/edit state machine driven by logical key tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union

from .models import (
    PROPERTY_ORDER,
    ModeCatalog,
    Monitor,
    Property,
    parse_resolution,
)

log = logging.getLogger(__name__)

POSITION_STEP = 10


class Key(Enum):
    UP = "ArrowUp"
    DOWN = "ArrowDown"
    LEFT = "ArrowLeft"
    RIGHT = "ArrowRight"
    TAB = "Tab"
    ENTER = "Enter"
    ESCAPE = "Escape"
    SPACE = "Space"
    RESIZE = "Resize"      # terminal size changed; redraw only


# A key token is either a named key or a single printable character
Token = Union[Key, str]

QUIT_KEYS = ("q",)


@dataclass
class SelectionState:
    monitor_index: int = 0
    prop: Property | None = None
    editing: bool = False
    resolution_cursor: int = 0
    refresh_cursor: int = 0


@dataclass
class Session:
    """The arrangement being edited plus the cursor over it.

    Every transition mutates ``monitors`` and ``selection`` in place;
    nothing else holds state, so a session can be driven directly from
    a list of tokens.
    """

    monitors: list[Monitor]
    selection: SelectionState = field(default_factory=SelectionState)
    position_step: int = POSITION_STEP
    catalog: ModeCatalog = field(default_factory=ModeCatalog)

    def __post_init__(self) -> None:
        if self.monitors:
            self.sync_cursors()

    @property
    def has_monitors(self) -> bool:
        return bool(self.monitors)

    @property
    def current(self) -> Monitor | None:
        if not self.monitors:
            return None
        return self.monitors[self.selection.monitor_index]

    def sync_cursors(self) -> None:
        """Recompute the catalog and point both cursors at the current mode."""
        monitor = self.current
        if monitor is None:
            return
        self.catalog = monitor.catalog()
        sel = self.selection
        sel.resolution_cursor = self.catalog.resolution_index(monitor.width, monitor.height)
        sel.refresh_cursor = self.catalog.refresh_index(monitor.refresh_rate)

    # ── Dispatch ─────────────────────────────────────────────────────

    def handle_key(self, key: Token) -> bool:
        """Apply one key token. Returns False once the session should end."""
        if key in QUIT_KEYS:
            return False
        if not self.monitors:
            # Nothing to edit; only Escape is meaningful
            return key is not Key.ESCAPE
        if self.selection.editing:
            self._handle_edit(key)
            return True
        if key is Key.ESCAPE:
            return False
        self._handle_navigate(key)
        return True

    def _handle_navigate(self, key: Token) -> None:
        sel = self.selection
        if key is Key.UP or key is Key.DOWN:
            step = -1 if key is Key.UP else 1
            sel.monitor_index = max(0, min(len(self.monitors) - 1, sel.monitor_index + step))
            sel.prop = None
            self.sync_cursors()
        elif key is Key.TAB:
            if sel.prop is None:
                sel.prop = PROPERTY_ORDER[0]
            else:
                idx = PROPERTY_ORDER.index(sel.prop)
                sel.prop = PROPERTY_ORDER[(idx + 1) % len(PROPERTY_ORDER)]
        elif key is Key.ENTER and sel.prop is not None:
            sel.editing = True
            self.sync_cursors()
            log.debug("Editing %s of %s", sel.prop.value, self.current.name)

    def _handle_edit(self, key: Token) -> None:
        sel = self.selection
        if key is Key.ENTER or key is Key.ESCAPE:
            sel.editing = False
            return
        handler = _EDIT_HANDLERS[sel.prop]
        handler(self, self.current, key)

    # ── Edit handlers, one per Property ──────────────────────────────

    def _edit_resolution(self, monitor: Monitor, key: Token) -> None:
        step = _cycle_step(key)
        if not step:
            return
        sel = self.selection
        resolutions = self.catalog.resolutions
        sel.resolution_cursor = (sel.resolution_cursor + step) % len(resolutions)
        monitor.width, monitor.height = parse_resolution(resolutions[sel.resolution_cursor])

    def _edit_refresh_rate(self, monitor: Monitor, key: Token) -> None:
        step = _cycle_step(key)
        if not step:
            return
        sel = self.selection
        rates = self.catalog.refresh_rates
        sel.refresh_cursor = (sel.refresh_cursor + step) % len(rates)
        monitor.refresh_rate = rates[sel.refresh_cursor]

    def _edit_position(self, monitor: Monitor, key: Token) -> None:
        step = self.position_step
        if key is Key.UP:
            monitor.y -= step
        elif key is Key.DOWN:
            monitor.y += step
        elif key is Key.RIGHT:
            monitor.x += step
        elif key is Key.LEFT:
            monitor.x -= step

    def _edit_enabled(self, monitor: Monitor, key: Token) -> None:
        if key not in (Key.SPACE, Key.LEFT, Key.RIGHT, " "):
            return
        monitor.disabled = not monitor.disabled
        if monitor.enabled and monitor.x == 0 and monitor.y == 0:
            # Re-enabled at the origin: park it right of the current layout
            max_x = max(
                (m.right for m in self.monitors if m is not monitor and m.enabled),
                default=0,
            )
            if max_x > 0:
                monitor.x = max_x
                log.info("Placed re-enabled %s at x=%d", monitor.name, max_x)


def _cycle_step(key: Token) -> int:
    if key is Key.UP or key is Key.RIGHT:
        return 1
    if key is Key.DOWN or key is Key.LEFT:
        return -1
    return 0


_EDIT_HANDLERS: dict[Property, Callable[[Session, Monitor, Token], None]] = {
    Property.RESOLUTION: Session._edit_resolution,
    Property.POSITION: Session._edit_position,
    Property.REFRESH_RATE: Session._edit_refresh_rate,
    Property.ENABLED: Session._edit_enabled,
}
