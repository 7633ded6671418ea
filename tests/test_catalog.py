from dataclasses import replace

import pytest

from mocktest_app.core import models
from mocktest_app.core.services.exam_catalog import (
    CatalogFilters,
    ExamCatalog,
    MockTestNotFoundError,
    ReadOnlyTestError,
)
from mocktest_app.core.services.exam_repository import ExamRepository
from mocktest_app.core.services.storage import StorageError
from mocktest_app.core.validation import MockTestValidationError

from conftest import FailingStore, make_sample_test, make_two_section_test


def test_builtin_tests_are_listed_first(catalog):
    custom = catalog.add_test(make_sample_test("custom-one"))

    assert [test.id for test in catalog.list_tests()] == ["sample", custom.id]
    assert catalog.is_builtin("sample")
    assert not catalog.is_builtin("custom-one")


def test_find_and_require(catalog):
    assert catalog.find_test("sample").title == "Sample Test"
    assert catalog.find_test("missing") is None
    with pytest.raises(MockTestNotFoundError) as excinfo:
        catalog.require_test("missing")
    assert excinfo.value.test_id == "missing"


def test_add_test_replaces_by_id_and_prepends_new(catalog):
    catalog.add_test(make_sample_test("first"))
    catalog.add_test(make_sample_test("second"))
    catalog.add_test(replace(make_sample_test("first"), title="First, revised"))

    custom = catalog.get_custom_tests()
    assert [test.id for test in custom] == ["second", "first"]
    assert custom[1].title == "First, revised"


def test_custom_tests_persist_through_repository(repository, sample_test):
    ExamCatalog(repository, [sample_test]).add_test(make_sample_test("saved"))

    reloaded = ExamCatalog(repository, [sample_test])

    assert reloaded.find_test("saved") is not None


def test_builtin_ids_are_read_only(catalog):
    with pytest.raises(ReadOnlyTestError):
        catalog.add_test(make_sample_test("sample"))
    with pytest.raises(ReadOnlyTestError):
        catalog.remove_test("sample")


def test_remove_test(catalog):
    catalog.add_test(make_sample_test("temp"))
    catalog.remove_test("temp")

    assert catalog.find_test("temp") is None
    with pytest.raises(MockTestNotFoundError):
        catalog.remove_test("temp")


def test_add_test_validates(catalog):
    broken = replace(make_sample_test("broken"), duration_minutes=0)

    with pytest.raises(MockTestValidationError):
        catalog.add_test(broken)
    assert catalog.get_custom_tests() == []


def test_add_test_recomputes_total_marks(catalog):
    saved = catalog.add_test(replace(make_sample_test("marks"), total_marks=99))

    assert saved.total_marks == 3


def test_storage_failure_keeps_test_in_memory(sample_test):
    catalog = ExamCatalog(ExamRepository(FailingStore()), [sample_test])

    with pytest.raises(StorageError):
        catalog.add_test(make_sample_test("volatile"))
    assert catalog.find_test("volatile") is not None


def test_filters(catalog):
    catalog.add_test(make_two_section_test())

    by_search = catalog.filter_tests(CatalogFilters(search="SECTIONED"))
    by_difficulty = catalog.filter_tests(CatalogFilters(difficulty=models.TestDifficulty.BEGINNER))
    by_category = catalog.filter_tests(CatalogFilters(category="Logic"))

    assert [test.id for test in by_search] == ["two-sections"]
    assert [test.id for test in by_difficulty] == ["sample"]
    assert [test.id for test in by_category] == ["two-sections"]
    assert len(catalog.filter_tests(CatalogFilters())) == 2


def test_categories_are_unique_and_ordered(catalog):
    catalog.add_test(make_two_section_test())
    catalog.add_test(make_sample_test("another"))

    assert catalog.get_categories() == ["Practice", "Logic"]
