"""Qt main window switching between catalog, runner, result and history modes."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from mocktest_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from mocktest_app.constants.exam_constants import TICK_INTERVAL_MS
from mocktest_app.constants.ui_constants import (
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    HISTORY_SAVE_FAILED_MESSAGE,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    MODE_BUTTON_CATALOG,
    MODE_BUTTON_EXPORT,
    MODE_BUTTON_HISTORY,
    MODE_BUTTON_IMPORT,
    NO_TEST_SELECTED_MESSAGE,
    TEST_IMPORTED_MESSAGE,
    TEST_NOT_FOUND_MESSAGE,
    WINDOW_TITLE,
)
from mocktest_app.core.mocktest_exporter import save_test_to_file
from mocktest_app.core.mocktest_importer import MockTestImportError, load_test_from_file
from mocktest_app.core.models import MockTest, TestAttempt
from mocktest_app.core.services.attempt_history import AttemptHistory
from mocktest_app.core.services.exam_catalog import ExamCatalog, MockTestNotFoundError, ReadOnlyTestError
from mocktest_app.core.services.storage import StorageError
from mocktest_app.core.validation import MockTestValidationError
from mocktest_app.ui.components.catalog_panel import CatalogPanel
from mocktest_app.ui.components.history_panel import HistoryPanel
from mocktest_app.ui.components.result_panel import ResultPanel
from mocktest_app.ui.components.runner_panel import RunnerPanel
from mocktest_app.ui.dialog_helpers import confirm_leave_session, show_error, show_info, show_warning
from mocktest_app.styling.styles import Styles

logger = logging.getLogger(__name__)


class ExamMode(Enum):
    """High-level UI mode of the main window."""

    CATALOG = auto()
    RUNNER = auto()
    RESULT = auto()
    HISTORY = auto()


class ExamMainWindow(QMainWindow):
    """Main Qt window orchestrating the four application modes."""

    def __init__(
        self,
        catalog: ExamCatalog,
        history: AttemptHistory,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1100, 720)

        self.catalog = catalog
        self.history = history
        self._tick_interval_ms = tick_interval_ms
        self._mode = ExamMode.CATALOG
        self._last_export_path: Path | None = None

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.catalog_panel = CatalogPanel(self.catalog, self.history, on_start_test=self._start_test, parent=self)
        self.runner_panel = RunnerPanel(
            on_finished=self._handle_test_finished,
            tick_interval_ms=self._tick_interval_ms,
            parent=self,
        )
        self.result_panel = ResultPanel(
            on_back=lambda: self._set_mode(ExamMode.CATALOG),
            on_retake=self._start_test,
            parent=self,
        )
        self.history_panel = HistoryPanel(self.catalog, self.history, parent=self)

        self.mode_stack.addWidget(self.catalog_panel)
        self.mode_stack.addWidget(self.runner_panel)
        self.mode_stack.addWidget(self.result_panel)
        self.mode_stack.addWidget(self.history_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(ExamMode.CATALOG)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.catalog_button = QPushButton(MODE_BUTTON_CATALOG, self)
        self.catalog_button.setCheckable(True)
        self.catalog_button.clicked.connect(lambda: self._leave_runner_to(ExamMode.CATALOG))
        button_row.addWidget(self.catalog_button)

        self.import_button = QPushButton(MODE_BUTTON_IMPORT, self)
        self.import_button.clicked.connect(self._handle_import_test)
        button_row.addWidget(self.import_button)

        self.export_button = QPushButton(MODE_BUTTON_EXPORT, self)
        self.export_button.clicked.connect(self._handle_export_test)
        button_row.addWidget(self.export_button)

        self.history_button = QPushButton(MODE_BUTTON_HISTORY, self)
        self.history_button.setCheckable(True)
        self.history_button.clicked.connect(lambda: self._leave_runner_to(ExamMode.HISTORY))
        button_row.addWidget(self.history_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: ExamMode) -> None:
        self._mode = mode
        self.catalog_button.setChecked(mode == ExamMode.CATALOG)
        self.history_button.setChecked(mode == ExamMode.HISTORY)
        running = mode == ExamMode.RUNNER
        self.import_button.setEnabled(not running)
        self.export_button.setEnabled(not running)

        if mode == ExamMode.CATALOG:
            self.catalog_panel.refresh()
        elif mode == ExamMode.HISTORY:
            self.history_panel.refresh()

        index_map = {
            ExamMode.CATALOG: 0,
            ExamMode.RUNNER: 1,
            ExamMode.RESULT: 2,
            ExamMode.HISTORY: 3,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _leave_runner_to(self, mode: ExamMode) -> None:
        if self.runner_panel.has_active_session():
            if not confirm_leave_session(self):
                self._set_mode(ExamMode.RUNNER)
                return
            self.runner_panel.discard_session()
        self._set_mode(mode)

    def _start_test(self, test_id: str) -> None:
        try:
            test = self.catalog.require_test(test_id)
        except MockTestNotFoundError:
            show_warning(self, "Unavailable", TEST_NOT_FOUND_MESSAGE)
            self._set_mode(ExamMode.CATALOG)
            return
        self.runner_panel.begin(test)
        self._set_mode(ExamMode.RUNNER)

    def _handle_test_finished(self, test: MockTest, attempt: TestAttempt) -> None:
        saved = self.history.add_attempt(attempt)
        self.result_panel.show_result(test, attempt)
        self._set_mode(ExamMode.RESULT)
        if not saved:
            show_warning(self, "History not saved", HISTORY_SAVE_FAILED_MESSAGE)

    def _handle_import_test(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            imported = load_test_from_file(Path(file_path))
        except (OSError, MockTestImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return

        try:
            test = self.catalog.add_test(imported.test)
        except (MockTestValidationError, ReadOnlyTestError) as exc:
            show_error(self, "Test rejected", str(exc))
            return
        except StorageError as exc:
            logger.warning("Imported test could not be saved: %s", exc)
            show_warning(self, "Not saved", f"The test is available for this session only.\n{exc}")
            test = imported.test

        self._set_mode(ExamMode.CATALOG)
        self.catalog_panel.refresh(select_test_id=test.id)
        show_info(
            self,
            "Test imported",
            TEST_IMPORTED_MESSAGE.format(title=test.title, count=test.question_count),
        )

    def _handle_export_test(self) -> None:
        test_id = self.catalog_panel.get_selected_test_id()
        test = self.catalog.find_test(test_id) if test_id else None
        if test is None:
            show_warning(self, "No test", NO_TEST_SELECTED_MESSAGE)
            return

        default_path = self._last_export_path or (Path.cwd() / f"{test.id}.txt")
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(default_path),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            save_test_to_file(Path(file_path), test)
        except (OSError, ValueError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_path = Path(file_path)
        show_info(self, "Test saved", f"Test exported to {file_path}.")

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self.runner_panel.has_active_session() and not confirm_leave_session(self):
            event.ignore()
            return
        self.runner_panel.discard_session()
        event.accept()
