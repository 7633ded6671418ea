"""Component for browsing, filtering and starting mock tests."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from mocktest_app.constants.ui_constants import (
    CATALOG_ALL_CATEGORIES,
    CATALOG_ALL_DIFFICULTIES,
    CATALOG_DELETE_BUTTON,
    CATALOG_EMPTY_STATE,
    CATALOG_NO_ATTEMPT,
    CATALOG_SEARCH_PLACEHOLDER,
    CATALOG_START_BUTTON,
    TEST_NOT_FOUND_MESSAGE,
)
from mocktest_app.core.models import MockTest, TestDifficulty
from mocktest_app.core.services.attempt_history import AttemptHistory, attempt_accuracy
from mocktest_app.core.services.exam_catalog import (
    CatalogFilters,
    ExamCatalog,
    MockTestNotFoundError,
    ReadOnlyTestError,
)
from mocktest_app.core.services.storage import StorageError
from mocktest_app.ui.dialog_helpers import confirm_delete_test, show_error, show_warning
from mocktest_app.styling.styles import Styles


class CatalogPanel(QWidget):
    """Lists built-in and custom tests with search and filter controls."""

    def __init__(
        self,
        catalog: ExamCatalog,
        history: AttemptHistory,
        on_start_test: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.catalog = catalog
        self.history = history
        self.on_start_test = on_start_test

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        filter_row = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(CATALOG_SEARCH_PLACEHOLDER)
        self.search_input.textChanged.connect(lambda _: self._reload_list())
        filter_row.addWidget(self.search_input, stretch=2)

        self.difficulty_combo = QComboBox(self)
        self.difficulty_combo.addItem(CATALOG_ALL_DIFFICULTIES, userData=None)
        for difficulty in TestDifficulty:
            self.difficulty_combo.addItem(difficulty.value.capitalize(), userData=difficulty)
        self.difficulty_combo.currentIndexChanged.connect(lambda _: self._reload_list())
        filter_row.addWidget(self.difficulty_combo)

        self.category_combo = QComboBox(self)
        self.category_combo.currentIndexChanged.connect(lambda _: self._reload_list())
        filter_row.addWidget(self.category_combo)
        layout.addLayout(filter_row)

        content_row = QHBoxLayout()
        self.test_list = QListWidget(self)
        self.test_list.setAlternatingRowColors(True)
        self.test_list.currentItemChanged.connect(lambda *_: self._update_details())
        self.test_list.itemDoubleClicked.connect(lambda _: self._handle_start_click())
        content_row.addWidget(self.test_list, stretch=2)

        self.details_group = QGroupBox("Details", self)
        details_layout = QVBoxLayout()
        self.details_group.setLayout(details_layout)
        self.title_label = QLabel("", self)
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        details_layout.addWidget(self.title_label)
        self.details_label = QLabel("", self)
        self.details_label.setWordWrap(True)
        self.details_label.setTextFormat(Qt.RichText)
        details_layout.addWidget(self.details_label)
        self.last_attempt_label = QLabel("", self)
        self.last_attempt_label.setWordWrap(True)
        self.last_attempt_label.setStyleSheet(Styles.get_muted_label_style())
        details_layout.addWidget(self.last_attempt_label)
        details_layout.addStretch()

        button_row = QHBoxLayout()
        self.delete_button = QPushButton(CATALOG_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete_click)
        button_row.addWidget(self.delete_button)
        button_row.addStretch()
        self.start_button = QPushButton(CATALOG_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start_click)
        button_row.addWidget(self.start_button)
        details_layout.addLayout(button_row)
        content_row.addWidget(self.details_group, stretch=3)
        layout.addLayout(content_row, stretch=1)

        self.empty_label = QLabel(CATALOG_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

    def refresh(self, select_test_id: str | None = None) -> None:
        """Rebuild the category filter and test list from the catalog."""
        selected_category = self.category_combo.currentData()
        self.category_combo.blockSignals(True)
        self.category_combo.clear()
        self.category_combo.addItem(CATALOG_ALL_CATEGORIES, userData=None)
        for category in self.catalog.get_categories():
            self.category_combo.addItem(category, userData=category)
        index = self.category_combo.findData(selected_category)
        self.category_combo.setCurrentIndex(max(index, 0))
        self.category_combo.blockSignals(False)
        self._reload_list(select_test_id)

    def get_selected_test_id(self) -> str | None:
        item = self.test_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def _current_filters(self) -> CatalogFilters:
        return CatalogFilters(
            search=self.search_input.text(),
            difficulty=self.difficulty_combo.currentData(),
            category=self.category_combo.currentData(),
        )

    def _reload_list(self, select_test_id: str | None = None) -> None:
        keep_id = select_test_id or self.get_selected_test_id()
        tests = self.catalog.filter_tests(self._current_filters())
        self.test_list.blockSignals(True)
        self.test_list.clear()
        for test in tests:
            suffix = "" if self.catalog.is_builtin(test.id) else "  (custom)"
            item = QListWidgetItem(f"{test.title}{suffix}", self.test_list)
            item.setData(Qt.UserRole, test.id)
            if test.id == keep_id:
                self.test_list.setCurrentItem(item)
        if self.test_list.currentItem() is None and self.test_list.count():
            self.test_list.setCurrentRow(0)
        self.test_list.blockSignals(False)
        self.empty_label.setVisible(not tests)
        self._update_details()

    def _update_details(self) -> None:
        test_id = self.get_selected_test_id()
        test = self.catalog.find_test(test_id) if test_id else None
        self.start_button.setEnabled(test is not None)
        self.delete_button.setEnabled(test is not None and not self.catalog.is_builtin(test.id))
        if test is None:
            self.title_label.setText("")
            self.details_label.setText("")
            self.last_attempt_label.setText("")
            return
        self.title_label.setText(test.title)
        self.details_label.setText(_describe_test(test))
        latest = self.history.get_latest_attempt(test.id)
        if latest is None:
            self.last_attempt_label.setText(CATALOG_NO_ATTEMPT)
        else:
            self.last_attempt_label.setText(
                f"Last attempt: {latest.score:g}/{test.total_marks:g} marks, "
                f"{attempt_accuracy(latest)}% accuracy"
            )

    def _handle_start_click(self) -> None:
        test_id = self.get_selected_test_id()
        if test_id is None:
            return
        self.on_start_test(test_id)

    def _handle_delete_click(self) -> None:
        test_id = self.get_selected_test_id()
        test = self.catalog.find_test(test_id) if test_id else None
        if test is None:
            return
        if not confirm_delete_test(self, test.title):
            return
        try:
            self.catalog.remove_test(test.id)
        except MockTestNotFoundError:
            show_warning(self, "Delete failed", TEST_NOT_FOUND_MESSAGE)
        except (ReadOnlyTestError, StorageError) as exc:
            show_error(self, "Delete failed", str(exc))
        self.refresh()


def _describe_test(test: MockTest) -> str:
    rows = [
        test.description,
        f"<b>Category:</b> {test.category} · <b>Difficulty:</b> {test.difficulty.value}",
        f"<b>Duration:</b> {test.duration_minutes} min · <b>Questions:</b> {test.question_count}"
        f" · <b>Total marks:</b> {test.total_marks:g}",
        "<b>Sections:</b> " + ", ".join(section.title for section in test.sections),
    ]
    if test.recommended_prep:
        rows.append("<b>Recommended prep:</b> " + "; ".join(test.recommended_prep))
    return "<br/>".join(row for row in rows if row)
