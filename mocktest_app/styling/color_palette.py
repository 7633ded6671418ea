"""Color palette for MockTest Desk supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """A color pair, one value per theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the exam screens."""

    TEXT_PRIMARY = ThemeColors(light="#18181B", dark="#F4F4F5")
    TEXT_MUTED = ThemeColors(light="#71717A", dark="#A1A1AA")

    SURFACE = ThemeColors(light="#FFFFFF", dark="#18181B")
    SURFACE_RAISED = ThemeColors(light="#F4F4F5", dark="#27272A")
    BORDER = ThemeColors(light="#D4D4D8", dark="#3F3F46")

    ACCENT = ThemeColors(light="#2563EB", dark="#60A5FA")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#0B1120")
    HOVER = ThemeColors(light="#E4E4E7", dark="#3F3F46")

    # Navigator states
    ANSWERED = ThemeColors(light="#16A34A", dark="#4ADE80")
    REVIEW = ThemeColors(light="#D97706", dark="#FBBF24")
    CURRENT = ThemeColors(light="#2563EB", dark="#60A5FA")

    # Outcomes
    CORRECT = ThemeColors(light="#15803D", dark="#86EFAC")
    INCORRECT = ThemeColors(light="#B91C1C", dark="#FCA5A5")

    LOW_TIME = ThemeColors(light="#DC2626", dark="#F87171")
