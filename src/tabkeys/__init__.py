"""tabkeys — directory-driven hotkey states for tablets with OLED buttons."""

__version__ = "0.1.0"
