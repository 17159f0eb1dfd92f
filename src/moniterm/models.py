"""Data models: Monitor, ModeCatalog, Property and config serialization."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


DEFAULT_RESOLUTION = "1920x1080"
DEFAULT_REFRESH_RATE = 60

CONFIG_HEADER = (
    "######################################################\n"
    "## DO NOT EDIT THIS FILE!                           ##\n"
    "## This file is automatically generated by moniterm ##\n"
    "######################################################\n"
)

# "2560x1440@143.97Hz" -> 2560, 1440, 143
_MODE_RE = re.compile(r"^\s*(\d+)x(\d+)@(\d+)(\.\d+)?\s*Hz\s*$")


# ── Enums ────────────────────────────────────────────────────────────────

class Property(Enum):
    RESOLUTION = "resolution"
    POSITION = "position"
    REFRESH_RATE = "refreshRate"
    ENABLED = "enabled"

    @property
    def label(self) -> str:
        labels = {
            "resolution": "Resolution",
            "position": "Position",
            "refreshRate": "Refresh Rate",
            "enabled": "Enabled",
        }
        return labels[self.value]


# Tab order in the details panel
PROPERTY_ORDER: tuple[Property, ...] = (
    Property.RESOLUTION,
    Property.POSITION,
    Property.REFRESH_RATE,
    Property.ENABLED,
)


# ── ModeCatalog ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ModeCatalog:
    resolutions: tuple[str, ...] = (DEFAULT_RESOLUTION,)
    refresh_rates: tuple[int, ...] = (DEFAULT_REFRESH_RATE,)

    def resolution_index(self, width: int, height: int) -> int:
        """Index of ``WxH`` in the catalog, or 0 if it is not advertised."""
        try:
            return self.resolutions.index(f"{width}x{height}")
        except ValueError:
            return 0

    def refresh_index(self, rate: float) -> int:
        """Index of the (rounded) rate in the catalog, or 0 if absent."""
        try:
            return self.refresh_rates.index(round(rate))
        except ValueError:
            return 0


def parse_resolution(value: str) -> tuple[int, int]:
    """Split a ``"WIDTHxHEIGHT"`` key into integers."""
    w, h = value.split("x")
    return int(w), int(h)


def parse_modes(modes) -> ModeCatalog:
    """Build the sorted, deduplicated catalog for a list of mode strings.

    Entries that don't look like ``WIDTHxHEIGHT@RATEHz`` are skipped.
    When nothing usable is left the single 1920x1080@60 fallback is
    returned, so callers always get at least one option.
    """
    sizes: set[tuple[int, int]] = set()
    rates: set[int] = set()
    for mode in modes:
        match = _MODE_RE.match(mode) if isinstance(mode, str) else None
        if match is None:
            continue
        w, h, rate, frac = match.groups()
        sizes.add((int(w), int(h)))
        rates.add(round(float(rate + (frac or ""))))

    if not sizes:
        return ModeCatalog()

    # Area descending, then width descending for equal areas
    ordered = sorted(sizes, key=lambda s: (s[0] * s[1], s[0]), reverse=True)
    return ModeCatalog(
        resolutions=tuple(f"{w}x{h}" for w, h in ordered),
        refresh_rates=tuple(sorted(rates)),
    )


# ── Monitor ──────────────────────────────────────────────────────────────

def format_scale(scale: float) -> str:
    """Format a scale factor to two significant digits (1 -> "1.0", 1.25 -> "1.3")."""
    value = Decimal(scale)
    if value == 0:
        return "0.0"
    quantum = Decimal(1).scaleb(value.adjusted() - 1)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    # 9.96 rounds up to 10.0; drop the extra digit
    if rounded.adjusted() != value.adjusted():
        rounded = rounded.quantize(quantum.scaleb(1), rounding=ROUND_HALF_UP)
    return format(rounded, "f")


@dataclass
class Monitor:
    # Identity (from hyprctl monitors all -j)
    id: int = 0
    name: str = ""              # e.g. "DP-1", "HDMI-A-1"
    description: str = ""       # e.g. "LG Electronics LG ULTRAWIDE 0x00038C43"

    # Mode
    width: int = 1920
    height: int = 1080
    refresh_rate: float = 60.0

    # Position (top-left, may be negative)
    x: int = 0
    y: int = 0

    scale: float = 1.0
    disabled: bool = False

    # Advertised modes ("WxH@RHz" strings); never edited
    available_modes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.available_modes = tuple(self.available_modes)

    @property
    def enabled(self) -> bool:
        return not self.disabled

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def catalog(self) -> ModeCatalog:
        return parse_modes(self.available_modes)

    def to_hyprland_line(self) -> str:
        """Generate the ``monitor = ...`` config line for hyprland.conf."""
        if self.disabled:
            return f"monitor = {self.name}, disabled"
        return (
            f"monitor = {self.name}, {self.width}x{self.height}@{self.refresh_rate:g}, "
            f"{self.x}x{self.y}, {format_scale(self.scale)}"
        )

    def to_dict(self) -> dict:
        """Serialize using hyprctl's JSON key names."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
            "refreshRate": self.refresh_rate,
            "disabled": self.disabled,
            "scale": self.scale,
            "availableModes": list(self.available_modes),
        }

    @classmethod
    def from_hyprctl(cls, data: dict) -> Monitor:
        """Create from one entry of ``hyprctl monitors all -j``."""
        width = data.get("width") or 0
        height = data.get("height") or 0
        if width <= 0 or height <= 0:
            width, height = parse_resolution(DEFAULT_RESOLUTION)

        refresh = data.get("refreshRate") or 0
        if refresh <= 0:
            refresh = float(DEFAULT_REFRESH_RATE)

        scale = data.get("scale") or 0
        if scale <= 0:
            scale = 1.0

        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("monitor entry has no name")

        disabled = bool(data.get("disabled", False))
        raw_x = int(data.get("x", 0))
        raw_y = int(data.get("y", 0))

        # Disabled monitors report x=-1, y=-1
        if disabled and raw_x < 0 and raw_y < 0:
            raw_x = 0
            raw_y = 0

        return cls(
            id=int(data.get("id", 0)),
            name=name,
            description=data.get("description") or "",
            width=int(width),
            height=int(height),
            refresh_rate=round(float(refresh), 3),
            x=raw_x,
            y=raw_y,
            scale=float(scale),
            disabled=disabled,
            available_modes=tuple(data.get("availableModes") or ()),
        )


# ── Config generation ────────────────────────────────────────────────────

def render_monitors(monitors: list[Monitor]) -> str:
    """One ``monitor = ...`` line per monitor, in store order."""
    return "".join(m.to_hyprland_line() + "\n" for m in monitors)


def generate_config(monitors: list[Monitor]) -> str:
    """Generate the full monitors.conf content, header included."""
    return CONFIG_HEADER + render_monitors(monitors)


# ── Fixture ──────────────────────────────────────────────────────────────

def mock_monitors() -> list[Monitor]:
    """Three-monitor desk used by ``--mock`` and the tests."""
    return [
        Monitor(
            id=1, name="HDMI-A-1",
            width=1920, height=1080, x=0, y=0, refresh_rate=60,
            available_modes=(
                "1920x1080@60Hz",
                "1600x900@60Hz",
                "1366x768@60Hz",
                "1280x720@60Hz",
            ),
        ),
        Monitor(
            id=2, name="DP-1",
            width=2560, height=1440, x=1920, y=0, refresh_rate=144,
            available_modes=(
                "2560x1440@144Hz",
                "2560x1440@120Hz",
                "2560x1440@60Hz",
                "1920x1080@144Hz",
                "1920x1080@120Hz",
                "1920x1080@60Hz",
            ),
        ),
        Monitor(
            id=3, name="DP-2",
            width=1920, height=1080, x=1920, y=1080, refresh_rate=144,
            available_modes=(
                "1920x1080@144Hz",
                "1920x1080@120Hz",
                "1920x1080@60Hz",
                "1600x900@144Hz",
                "1600x900@60Hz",
            ),
        ),
    ]
