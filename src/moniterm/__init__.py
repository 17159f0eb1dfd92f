"""Terminal editor for the Hyprland monitor layout."""

__version__ = "0.1.0"
