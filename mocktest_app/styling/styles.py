"""Centralized stylesheets for the application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.SURFACE.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.SURFACE_RAISED.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.HOVER.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
                border: 1px solid {ColorPalette.ACCENT.get(theme)};
            }}
            QLineEdit, QComboBox, QListWidget, QTableWidget {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_muted_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_MUTED.get(theme)};"

    @staticmethod
    def get_timer_style(low_time: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.LOW_TIME.get(theme) if low_time else ColorPalette.TEXT_PRIMARY.get(theme)
        return f"font-size: 18pt; font-weight: bold; font-family: monospace; color: {color};"

    @staticmethod
    def get_navigator_button_style(
        answered: bool,
        marked_for_review: bool,
        current: bool,
        theme: Theme = Theme.LIGHT,
    ) -> str:
        background = ColorPalette.SURFACE_RAISED.get(theme)
        text = ColorPalette.TEXT_PRIMARY.get(theme)
        if marked_for_review:
            background = ColorPalette.REVIEW.get(theme)
            text = ColorPalette.ACCENT_TEXT.get(theme)
        elif answered:
            background = ColorPalette.ANSWERED.get(theme)
            text = ColorPalette.ACCENT_TEXT.get(theme)
        border = ColorPalette.CURRENT.get(theme) if current else ColorPalette.BORDER.get(theme)
        width = 3 if current else 1
        return (
            f"QPushButton {{ background-color: {background}; color: {text}; "
            f"border: {width}px solid {border}; border-radius: 4px; min-width: 32px; min-height: 32px; }}"
        )

    @staticmethod
    def get_choice_button_style(selected: bool, theme: Theme = Theme.LIGHT) -> str:
        if not selected:
            return "QPushButton { text-align: left; padding: 10px 14px; }"
        return (
            f"QPushButton {{ text-align: left; padding: 10px 14px; "
            f"background-color: {ColorPalette.ACCENT.get(theme)}; "
            f"color: {ColorPalette.ACCENT_TEXT.get(theme)}; "
            f"border: 1px solid {ColorPalette.ACCENT.get(theme)}; }}"
        )

    @staticmethod
    def get_score_style(passed: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.CORRECT.get(theme) if passed else ColorPalette.INCORRECT.get(theme)
        return f"font-size: 22pt; font-weight: bold; color: {color};"
