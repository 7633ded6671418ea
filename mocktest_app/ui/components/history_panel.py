"""Component listing past attempts and overall progress."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from mocktest_app.constants.ui_constants import HISTORY_COLUMNS, HISTORY_EMPTY_STATE
from mocktest_app.core.services.attempt_history import AttemptHistory, attempt_accuracy, build_overview
from mocktest_app.core.services.exam_catalog import ExamCatalog
from mocktest_app.core.services.session_clock import format_clock
from mocktest_app.styling.styles import Styles


class HistoryPanel(QWidget):
    """Newest-first table of attempts with a progress summary on top."""

    def __init__(self, catalog: ExamCatalog, history: AttemptHistory, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.catalog = catalog
        self.history = history

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.overview_label = QLabel("", self)
        self.overview_label.setStyleSheet(Styles.get_large_label_style())
        self.overview_label.setWordWrap(True)
        layout.addWidget(self.overview_label)

        self.table = QTableWidget(0, len(HISTORY_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(HISTORY_COLUMNS))
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        layout.addWidget(self.table, stretch=1)

        self.empty_label = QLabel(HISTORY_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

    def refresh(self) -> None:
        attempts = self.history.get_attempts()
        overview = build_overview(self.catalog.list_tests(), attempts)
        self.overview_label.setText(
            f"{overview.test_count} tests · {overview.question_count} questions · "
            f"{overview.attempt_count} attempts · average score {overview.average_score:g} · "
            f"average accuracy {overview.average_accuracy:g}%"
        )

        self.table.setRowCount(len(attempts))
        for row, attempt in enumerate(attempts):
            test = self.catalog.find_test(attempt.test_id)
            title = test.title if test is not None else attempt.test_id
            completed = attempt.completed_at or attempt.started_at
            total_marks = f"/{test.total_marks:g}" if test is not None else ""
            values = (
                title,
                completed.astimezone().strftime("%Y-%m-%d %H:%M"),
                f"{attempt.score:g}{total_marks}",
                f"{attempt.breakdown.correct}/{attempt.breakdown.total_questions}",
                f"{attempt_accuracy(attempt)}%",
                format_clock(attempt.duration_seconds),
            )
            for column, value in enumerate(values):
                self.table.setItem(row, column, QTableWidgetItem(value))
        self.empty_label.setVisible(not attempts)
