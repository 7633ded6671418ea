"""Application entry point for MockTest Desk."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from mocktest_app.constants.about import APP_NAME
from mocktest_app.core.services.attempt_history import AttemptHistory
from mocktest_app.core.services.exam_catalog import ExamCatalog
from mocktest_app.core.services.exam_repository import ExamRepository
from mocktest_app.core.services.storage import JsonFileStore
from mocktest_app.data.builtin_tests import BUILTIN_TESTS
from mocktest_app.server.api_server import start_api_server
from mocktest_app.ui.main_window import ExamMainWindow
from mocktest_app.utils.logging_config import configure_logging
from mocktest_app.utils.settings import AppSettings


def main() -> None:
    """Load settings, wire storage and services, optionally start the API, then launch the Qt UI."""
    settings = AppSettings()
    logger = configure_logging(settings.log_level)
    logger.info("Starting %s (data in %s)", APP_NAME, settings.data_dir)

    repository = ExamRepository(JsonFileStore(settings.data_dir))
    catalog = ExamCatalog(repository, BUILTIN_TESTS)
    history = AttemptHistory(repository)

    if settings.api_enabled:
        start_api_server(catalog, history, host=settings.api_host, port=settings.api_port)
        logger.info("Local API available at http://%s:%s/", settings.api_host, settings.api_port)

    app = QApplication(sys.argv)
    window = ExamMainWindow(catalog, history, tick_interval_ms=settings.tick_interval_ms)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
