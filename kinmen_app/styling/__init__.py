"""Styling module for the course player."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
