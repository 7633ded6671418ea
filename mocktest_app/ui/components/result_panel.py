"""Component summarizing a submitted attempt."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from mocktest_app.constants.ui_constants import RESULT_BACK_BUTTON, RESULT_RETAKE_BUTTON
from mocktest_app.core.attempt_review import build_review, review_to_markdown
from mocktest_app.core.models import MockTest, TestAttempt
from mocktest_app.core.services.session_clock import format_clock
from mocktest_app.ui.question_renderer import render_review_page
from mocktest_app.styling.styles import Styles


class ResultPanel(QWidget):
    """Score, breakdown and per-question review for the latest attempt."""

    def __init__(
        self,
        on_back: Callable[[], None],
        on_retake: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_back = on_back
        self.on_retake = on_retake
        self._test_id: str | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel("", self)
        layout.addWidget(self.score_label)

        self.breakdown_label = QLabel("", self)
        self.breakdown_label.setWordWrap(True)
        layout.addWidget(self.breakdown_label)

        self.review_view = QWebEngineView(self)
        layout.addWidget(self.review_view, stretch=1)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(RESULT_BACK_BUTTON, self)
        self.back_button.clicked.connect(lambda: self.on_back())
        button_row.addWidget(self.back_button)
        button_row.addStretch()
        self.retake_button = QPushButton(RESULT_RETAKE_BUTTON, self)
        self.retake_button.clicked.connect(self._handle_retake)
        button_row.addWidget(self.retake_button)
        layout.addLayout(button_row)

    def show_result(self, test: MockTest, attempt: TestAttempt) -> None:
        self._test_id = test.id
        breakdown = attempt.breakdown
        self.title_label.setText(f"Results: {test.title}")
        self.score_label.setText(f"{attempt.score:g} / {test.total_marks:g}")
        self.score_label.setStyleSheet(Styles.get_score_style(passed=attempt.score > 0))
        self.breakdown_label.setText(
            f"Correct: {breakdown.correct} · Incorrect: {breakdown.incorrect} · "
            f"Unattempted: {breakdown.unattempted} · Accuracy: {breakdown.accuracy_percent}% · "
            f"Time taken: {format_clock(attempt.duration_seconds)}"
        )
        markdown = review_to_markdown(build_review(test, attempt))
        self.review_view.setHtml(render_review_page(markdown))

    def _handle_retake(self) -> None:
        if self._test_id is not None:
            self.on_retake(self._test_id)
