"""Color palette for the course player supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#1F1F1F", dark="#F5F5F5")
    BACKGROUND_PRIMARY = ThemeColors(light="#FFFDF7", dark="#1E1E1E")
    CANVAS_BG = ThemeColors(light="#F4EFE3", dark="#262626")
    BORDER_PRIMARY = ThemeColors(light="#D1C7B0", dark="#555555")

    BUTTON_PRIMARY_BG = ThemeColors(light="#B5533C", dark="#E07A5F")
    BUTTON_PRIMARY_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    BUTTON_SECONDARY_BG = ThemeColors(light="#F1E9D8", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E6DAC0", dark="#505050")

    # Matching game endpoint / line states
    ENDPOINT_FREE = ThemeColors(light="#6B6B6B", dark="#BDBDBD")
    ENDPOINT_ACTIVE = ThemeColors(light="#0078D4", dark="#4A9EFF")
    ENDPOINT_CONNECTED = ThemeColors(light="#B5533C", dark="#E07A5F")
    LINE_DRAWING = ThemeColors(light="#0078D4", dark="#4A9EFF")
    SUCCESS = ThemeColors(light="#107C10", dark="#6FCF6F")
    ERROR = ThemeColors(light="#D13438", dark="#FF6B6B")

    TOAST_BG = ThemeColors(light="#323232", dark="#EDEDED")
    TOAST_TEXT = ThemeColors(light="#FFFFFF", dark="#111111")
