"""Question rendering utilities for the exam runner."""

from __future__ import annotations

from mocktest_app.core.markdown_math_renderer import renderer
from mocktest_app.core.models import Question, Section


def render_question_page(
    question: Question,
    section: Section,
    number: int,
    total: int,
    font_size: int = 14,
) -> str:
    """Render a question prompt with its section heading as HTML.

    Args:
        question: The question to display (prompt supports Markdown and LaTeX)
        section: Section the question belongs to
        number: 1-based position of the question in the whole test
        total: Number of questions in the test
        font_size: Font size in points for the question text (default 14)

    Returns:
        HTML string ready for display in QWebEngineView
    """
    marks = f"{question.marks:g} mark(s)"
    if question.penalty:
        marks += f", -{question.penalty:g} if wrong"
    markdown_lines = [
        f"*{section.title}* · Question {number} of {total} · {marks}",
        question.prompt.strip() or "(No question text)",
    ]
    markdown = "\n\n".join(markdown_lines)
    return renderer.render_full_document(markdown, font_size=font_size)


def render_review_page(review_markdown: str, font_size: int = 12) -> str:
    """Render the per-question review of a submitted attempt."""
    return renderer.render_full_document(review_markdown, title="Attempt review", font_size=font_size)
