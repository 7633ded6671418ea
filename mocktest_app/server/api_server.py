"""FastAPI server exposing the local test catalog and attempt history."""

from __future__ import annotations

from dataclasses import asdict
import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
import uvicorn

from mocktest_app.constants.about import APP_NAME, APP_VERSION
from mocktest_app.constants.exam_constants import DEFAULT_CATEGORY
from mocktest_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from mocktest_app.core.exam_codec import ExamDataError, attempt_to_dict, mock_test_from_dict, mock_test_to_dict
from mocktest_app.core.mocktest_exporter import serialize_test
from mocktest_app.core.models import MockTest, QuestionDifficulty, TestDifficulty
from mocktest_app.core.services.attempt_history import AttemptHistory, build_overview
from mocktest_app.core.services.exam_catalog import (
    CatalogFilters,
    ExamCatalog,
    MockTestNotFoundError,
    ReadOnlyTestError,
)
from mocktest_app.core.services.storage import StorageError
from mocktest_app.core.validation import MockTestValidationError

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChoicePayload(_CamelModel):
    id: str
    label: str
    is_correct: bool = False
    explanation: str | None = None


class QuestionPayload(_CamelModel):
    id: str
    prompt: str
    choices: list[ChoicePayload]
    difficulty: QuestionDifficulty = QuestionDifficulty.EASY
    marks: float = 1
    negative_marks: float | None = None
    tags: list[str] | None = None


class SectionPayload(_CamelModel):
    id: str
    title: str
    questions: list[QuestionPayload]
    description: str | None = None


class MockTestPayload(_CamelModel):
    """Payload schema for creating or replacing a custom test.

    ``id`` may be left empty, in which case it is derived from the title.
    ``totalMarks`` is always recomputed from the questions.
    """

    id: str = ""
    title: str
    description: str = ""
    duration_minutes: int = Field(gt=0)
    total_marks: float = 0
    category: str = DEFAULT_CATEGORY
    difficulty: TestDifficulty = TestDifficulty.BEGINNER
    sections: list[SectionPayload]
    recommended_prep: list[str] | None = None


def _summarize(test: MockTest, builtin: bool) -> dict[str, object]:
    return {
        "id": test.id,
        "title": test.title,
        "description": test.description,
        "category": test.category,
        "difficulty": test.difficulty.value,
        "durationMinutes": test.duration_minutes,
        "questionCount": test.question_count,
        "totalMarks": test.total_marks,
        "builtin": builtin,
    }


def _get_catalog_dependency(catalog: ExamCatalog):
    def dependency() -> ExamCatalog:
        return catalog

    return dependency


def _get_history_dependency(history: AttemptHistory):
    def dependency() -> AttemptHistory:
        return history

    return dependency


def create_api_app(catalog: ExamCatalog, history: AttemptHistory) -> FastAPI:
    """Create a FastAPI application wired to the provided catalog and history."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    catalog_dep = _get_catalog_dependency(catalog)
    history_dep = _get_history_dependency(history)

    @app.get("/health")
    def get_health() -> dict[str, object]:
        return {"status": "ok", "version": APP_VERSION}

    @app.get("/tests")
    def list_tests(
        search: str = "",
        difficulty: TestDifficulty | None = None,
        category: str | None = None,
        exam_catalog: ExamCatalog = Depends(catalog_dep),
    ) -> list[dict[str, object]]:
        filters = CatalogFilters(search=search, difficulty=difficulty, category=category)
        return [
            _summarize(test, exam_catalog.is_builtin(test.id))
            for test in exam_catalog.filter_tests(filters)
        ]

    @app.get("/tests/{test_id}")
    def get_test(test_id: str, exam_catalog: ExamCatalog = Depends(catalog_dep)) -> dict[str, object]:
        try:
            test = exam_catalog.require_test(test_id)
        except MockTestNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return mock_test_to_dict(test)

    @app.get("/tests/{test_id}/export", response_class=PlainTextResponse)
    def export_test(test_id: str, exam_catalog: ExamCatalog = Depends(catalog_dep)) -> str:
        try:
            test = exam_catalog.require_test(test_id)
        except MockTestNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return serialize_test(test)

    @app.post("/tests", status_code=201)
    def save_test(
        payload: MockTestPayload,
        exam_catalog: ExamCatalog = Depends(catalog_dep),
    ) -> dict[str, object]:
        document = payload.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            saved = exam_catalog.add_test(mock_test_from_dict(document))
        except MockTestValidationError as exc:
            raise HTTPException(status_code=422, detail=exc.problems) from exc
        except (ExamDataError, ValueError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except ReadOnlyTestError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except StorageError as exc:
            logger.warning("Custom test kept in memory only: %s", exc)
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return mock_test_to_dict(saved)

    @app.delete("/tests/{test_id}", status_code=204)
    def delete_test(test_id: str, exam_catalog: ExamCatalog = Depends(catalog_dep)) -> None:
        try:
            exam_catalog.remove_test(test_id)
        except MockTestNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ReadOnlyTestError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except StorageError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc

    @app.get("/attempts")
    def list_attempts(
        test_id: str | None = Query(default=None, alias="testId"),
        attempt_history: AttemptHistory = Depends(history_dep),
    ) -> list[dict[str, object]]:
        if test_id is None:
            attempts = attempt_history.get_attempts()
        else:
            attempts = attempt_history.get_attempts_for_test(test_id)
        return [attempt_to_dict(attempt) for attempt in attempts]

    @app.get("/stats")
    def get_stats(
        exam_catalog: ExamCatalog = Depends(catalog_dep),
        attempt_history: AttemptHistory = Depends(history_dep),
    ) -> dict[str, object]:
        overview = build_overview(exam_catalog.list_tests(), attempt_history.get_attempts())
        return {to_camel(key): value for key, value in asdict(overview).items()}

    return app


def start_api_server(
    catalog: ExamCatalog,
    history: AttemptHistory,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(catalog, history)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="MockTestApiServer", daemon=True)
    thread.start()
    return thread
