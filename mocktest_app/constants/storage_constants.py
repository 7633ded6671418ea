"""Storage keys and file locations shared by the repository and entry point."""

from pathlib import Path

ATTEMPTS_KEY: str = "attempt-history"
CUSTOM_TESTS_KEY: str = "custom-tests"
DEFAULT_DATA_DIR: Path = Path.home() / ".mocktest-desk"
