"""Exam-related constants shared across UI and core layers."""

TICK_INTERVAL_MS: int = 250
LOW_TIME_WARNING_SECONDS: int = 60
DEFAULT_CATEGORY: str = "Practice"
