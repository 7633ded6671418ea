"""Component hosting a running exam session."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from mocktest_app.constants.exam_constants import LOW_TIME_WARNING_SECONDS, TICK_INTERVAL_MS
from mocktest_app.constants.ui_constants import (
    RUNNER_NEXT_BUTTON,
    RUNNER_PREV_BUTTON,
    RUNNER_PROGRESS_TEMPLATE,
    RUNNER_REVIEW_BUTTON,
    RUNNER_SUBMIT_BUTTON,
    RUNNER_UNREVIEW_BUTTON,
)
from mocktest_app.core.exam_session import ExamSession
from mocktest_app.core.models import MockTest, TestAttempt
from mocktest_app.core.services.session_clock import format_clock
from mocktest_app.ui.dialog_helpers import confirm_submit
from mocktest_app.ui.qt_ticker import QtTicker
from mocktest_app.ui.question_renderer import render_question_page
from mocktest_app.styling.styles import Styles

_NAVIGATOR_COLUMNS = 8
_DISPLAY_REFRESH_MS = 200


class RunnerPanel(QWidget):
    """Shows one question at a time with answer, review and navigation controls."""

    def __init__(
        self,
        on_finished: Callable[[MockTest, TestAttempt], None],
        tick_interval_ms: int = TICK_INTERVAL_MS,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_finished = on_finished
        self._ticker = QtTicker(self, tick_interval_ms)
        self._session: ExamSession | None = None
        self._choice_buttons: list[QPushButton] = []
        self._navigator_buttons: list[QPushButton] = []
        self._font_size: int = 14

        self._build_ui()
        self._configure_display_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label, stretch=1)
        self.timer_label = QLabel("00:00", self)
        self.timer_label.setStyleSheet(Styles.get_timer_style(low_time=False))
        header_row.addWidget(self.timer_label)
        self.submit_button = QPushButton(RUNNER_SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(self._handle_submit_click)
        header_row.addWidget(self.submit_button)
        layout.addLayout(header_row)

        progress_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        self.progress_label.setStyleSheet(Styles.get_muted_label_style())
        progress_row.addWidget(self.progress_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        progress_row.addWidget(self.progress_bar, stretch=1)
        layout.addLayout(progress_row)

        body_row = QHBoxLayout()
        question_column = QVBoxLayout()
        self.question_view = QWebEngineView(self)
        question_column.addWidget(self.question_view, stretch=1)
        self.choices_layout = QVBoxLayout()
        question_column.addLayout(self.choices_layout)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(RUNNER_PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        self.review_button = QPushButton(RUNNER_REVIEW_BUTTON, self)
        self.review_button.setCheckable(True)
        self.review_button.clicked.connect(self._handle_toggle_review)
        nav_row.addWidget(self.review_button)
        nav_row.addStretch()
        self.next_button = QPushButton(RUNNER_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        question_column.addLayout(nav_row)
        body_row.addLayout(question_column, stretch=3)

        self.navigator_group = QGroupBox("Questions", self)
        self.navigator_layout = QGridLayout()
        self.navigator_group.setLayout(self.navigator_layout)
        self.navigator_group.setMinimumWidth(240)
        body_row.addWidget(self.navigator_group, stretch=1, alignment=Qt.AlignTop)
        layout.addLayout(body_row, stretch=1)

    def _configure_display_timer(self) -> None:
        self.display_timer = QTimer(self)
        self.display_timer.setInterval(_DISPLAY_REFRESH_MS)
        self.display_timer.timeout.connect(self._refresh_timer_label)

    # --- Session lifecycle ---

    def begin(self, test: MockTest) -> None:
        """Start a fresh attempt of ``test``, discarding any session in progress."""
        self.discard_session()
        self._session = ExamSession(test, ticker=self._ticker, on_complete=self._handle_complete)
        self.title_label.setText(test.title)
        self._build_navigator()
        self._session.start()
        self.display_timer.start()
        self._show_current_question()

    def has_active_session(self) -> bool:
        return self._session is not None and self._session.is_active()

    def discard_session(self) -> None:
        """Stop the running session without recording an attempt."""
        self.display_timer.stop()
        if self._session is not None:
            self._session.close()
        self._session = None

    def _handle_complete(self, attempt: TestAttempt) -> None:
        session = self._session
        self.display_timer.stop()
        self._session = None
        if session is not None:
            self.on_finished(session.get_test(), attempt)

    def _handle_submit_click(self) -> None:
        session = self._session
        if session is None or not session.is_active():
            return
        unanswered = session.get_test().question_count - session.attempted_count()
        if not confirm_submit(self, unanswered, session.review_count()):
            return
        session.submit()

    # --- Navigation and answers ---

    def _handle_previous(self) -> None:
        if self._session is not None and self._session.go_previous():
            self._show_current_question()

    def _handle_next(self) -> None:
        if self._session is not None and self._session.go_next():
            self._show_current_question()

    def _handle_jump(self, section_index: int, question_index: int) -> None:
        if self._session is not None and self._session.jump_to(section_index, question_index):
            self._show_current_question()

    def _handle_toggle_review(self) -> None:
        if self._session is not None:
            self._session.toggle_current_review()
            self._refresh_indicators()

    def _handle_choice(self, choice_id: str) -> None:
        if self._session is not None and self._session.select_current_choice(choice_id):
            self._refresh_indicators()

    # --- Rendering ---

    def _show_current_question(self) -> None:
        session = self._session
        if session is None:
            return
        question = session.get_current_question()
        slot = session.get_current_slot()
        self.question_view.setHtml(
            render_question_page(
                question,
                session.get_current_section(),
                slot.flat_index + 1,
                session.get_test().question_count,
                self._font_size,
            )
        )

        while self.choices_layout.count():
            item = self.choices_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._choice_buttons = []
        for letter_index, choice in enumerate(question.choices):
            button = QPushButton(f"{chr(ord('A') + letter_index)}. {choice.label}", self)
            button.setProperty("choice_id", choice.id)
            button.clicked.connect(lambda _checked=False, choice_id=choice.id: self._handle_choice(choice_id))
            self.choices_layout.addWidget(button)
            self._choice_buttons.append(button)

        self.prev_button.setEnabled(not session.is_first_question())
        self.next_button.setEnabled(not session.is_last_question())
        self._refresh_indicators()

    def _build_navigator(self) -> None:
        while self.navigator_layout.count():
            item = self.navigator_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._navigator_buttons = []
        if self._session is None:
            return
        for slot in self._session.get_slots():
            button = QPushButton(str(slot.flat_index + 1), self)
            button.clicked.connect(
                lambda _checked=False, s=slot.section_index, q=slot.question_index: self._handle_jump(s, q)
            )
            row, column = divmod(slot.flat_index, _NAVIGATOR_COLUMNS)
            self.navigator_layout.addWidget(button, row, column)
            self._navigator_buttons.append(button)

    def _refresh_indicators(self) -> None:
        session = self._session
        if session is None:
            return
        current = session.get_current_slot()
        response = session.get_response(current.question_id)
        selected_id = response.choice_id if response else None
        for button in self._choice_buttons:
            button.setStyleSheet(Styles.get_choice_button_style(button.property("choice_id") == selected_id))

        marked = bool(response and response.marked_for_review)
        self.review_button.setChecked(marked)
        self.review_button.setText(RUNNER_UNREVIEW_BUTTON if marked else RUNNER_REVIEW_BUTTON)

        for slot, button in zip(session.get_slots(), self._navigator_buttons):
            slot_response = session.get_response(slot.question_id)
            button.setStyleSheet(
                Styles.get_navigator_button_style(
                    answered=bool(slot_response and slot_response.is_attempted),
                    marked_for_review=bool(slot_response and slot_response.marked_for_review),
                    current=slot.flat_index == current.flat_index,
                )
            )

        self.progress_label.setText(
            RUNNER_PROGRESS_TEMPLATE.format(
                number=current.flat_index + 1,
                total=session.get_test().question_count,
                answered=session.attempted_count(),
                review=session.review_count(),
            )
        )
        self.progress_bar.setValue(session.progress_percent())
        self._refresh_timer_label()

    def _refresh_timer_label(self) -> None:
        if self._session is None:
            return
        remaining = self._session.get_remaining_seconds()
        self.timer_label.setText(format_clock(remaining))
        self.timer_label.setStyleSheet(Styles.get_timer_style(low_time=remaining <= LOW_TIME_WARNING_SECONDS))

    def apply_font_size(self, font_size: int) -> None:
        self._font_size = font_size
        self._show_current_question()
