"""Tests for the filter query language."""

import pytest

from upkeepctl.domain.filters import (
    DaysFilter,
    FilterQuery,
    SortOrder,
    StatusFilter,
    apply_filter,
)
from upkeepctl.domain.tasks import ProcessedTask, Task, process_tasks

NOW = "2024-01-15"


@pytest.fixture
def processed() -> list[ProcessedTask]:
    tasks = [
        # up-to-date, due 2024-02-10 (26 days)
        Task(
            path="e.md",
            name="Echo",
            last_done="2024-01-10",
            interval=1,
            interval_unit="month",
            tags=["garden"],
        ),
        # never completed
        Task(
            path="a.md",
            name="alpha",
            last_done=None,
            interval=1,
            interval_unit="months",
            tags=["recurring-task", "bicycle"],
        ),
        # overdue by 14 days
        Task(
            path="b.md",
            name="Bravo",
            last_done="2023-12-01",
            interval=1,
            interval_unit="months",
            tags=["bicycle-chain"],
        ),
        # due today
        Task(
            path="c.md",
            name="charlie",
            last_done="2024-01-01",
            interval=2,
            interval_unit="weeks",
        ),
        # due soon, 2 days
        Task(
            path="d.md",
            name="Delta",
            last_done="2024-01-10",
            interval=1,
            interval_unit="week",
            tags=["garden"],
        ),
    ]
    return process_tasks(tasks, NOW)


def _names(items: list[ProcessedTask]) -> list[str]:
    return [t.name for t in items]


class TestParse:
    def test_empty(self) -> None:
        assert FilterQuery.parse(None) == FilterQuery()
        assert FilterQuery.parse("  \n ") == FilterQuery()

    def test_or_union(self) -> None:
        query = FilterQuery.parse("status:overdue OR status:due-soon")
        assert query.status == [StatusFilter.OVERDUE, StatusFilter.DUE_SOON]

    def test_or_is_case_insensitive(self) -> None:
        query = FilterQuery.parse("tag:bike or tag:garden")
        assert query.tag == ["bike", "garden"]

    def test_bare_status_keywords(self) -> None:
        query = FilterQuery.parse("overdue OR Due-Today")
        assert query.status == [StatusFilter.OVERDUE, StatusFilter.DUE_TODAY]

    def test_multiple_lines(self) -> None:
        query = FilterQuery.parse("tag:bicycle\ninterval:week\nsort:name\nlimit:10")
        assert query.tag == ["bicycle"]
        assert query.interval == ["week"]
        assert query.sort is SortOrder.NAME
        assert query.limit == 10

    def test_days_comparators(self) -> None:
        query = FilterQuery.parse("days:<=3\ndays:>-5\ndays:7")
        assert query.days == [
            DaysFilter(op="<=", value=3),
            DaysFilter(op=">", value=-5),
            DaysFilter(op="=", value=7),
        ]

    @pytest.mark.parametrize(
        "text",
        ["limit:abc", "limit:0", "limit:-2", "sort:random", "status:bogus", "foo:bar", "days:~3"],
    )
    def test_invalid_clauses_ignored(self, text: str) -> None:
        assert FilterQuery.parse(text) == FilterQuery()

    def test_duplicates_collapse(self) -> None:
        query = FilterQuery.parse("status:overdue\noverdue")
        assert query.status == [StatusFilter.OVERDUE]


class TestApplyFilter:
    def test_default_sort_is_due_date(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery())
        assert _names(result) == ["alpha", "Bravo", "charlie", "Delta", "Echo"]

    def test_overdue_includes_never_completed(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery.parse("status:overdue"))
        assert _names(result) == ["alpha", "Bravo"]

    def test_never_completed(self, processed: list[ProcessedTask]) -> None:
        assert _names(apply_filter(processed, FilterQuery.parse("never-completed"))) == ["alpha"]

    def test_up_to_date_means_not_overdue(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery.parse("up-to-date"))
        assert _names(result) == ["charlie", "Delta", "Echo"]

    def test_exact_categories(self, processed: list[ProcessedTask]) -> None:
        assert _names(apply_filter(processed, FilterQuery.parse("due-today"))) == ["charlie"]
        assert _names(apply_filter(processed, FilterQuery.parse("due-soon"))) == ["Delta"]

    def test_union(self, processed: list[ProcessedTask]) -> None:
        query = FilterQuery.parse("status:due-today OR status:due-soon")
        assert _names(apply_filter(processed, query)) == ["charlie", "Delta"]

    def test_all(self, processed: list[ProcessedTask]) -> None:
        assert len(apply_filter(processed, FilterQuery.parse("status:all OR overdue"))) == 5

    def test_tag_substring(self, processed: list[ProcessedTask]) -> None:
        assert _names(apply_filter(processed, FilterQuery.parse("tag:bicycle"))) == [
            "alpha",
            "Bravo",
        ]
        assert _names(apply_filter(processed, FilterQuery.parse("tag:gard OR tag:chain"))) == [
            "Bravo",
            "Delta",
            "Echo",
        ]

    def test_interval_substring(self, processed: list[ProcessedTask]) -> None:
        assert _names(apply_filter(processed, FilterQuery.parse("interval:week"))) == [
            "charlie",
            "Delta",
        ]
        assert _names(apply_filter(processed, FilterQuery.parse("interval:MONTH"))) == [
            "alpha",
            "Bravo",
            "Echo",
        ]

    def test_days_skip_tasks_without_due_date(self, processed: list[ProcessedTask]) -> None:
        assert _names(apply_filter(processed, FilterQuery.parse("days:<=3"))) == [
            "Bravo",
            "charlie",
            "Delta",
        ]

    def test_days_clauses_combine(self, processed: list[ProcessedTask]) -> None:
        query = FilterQuery.parse("days:>0\ndays:<10")
        assert _names(apply_filter(processed, query)) == ["Delta"]

    def test_filters_narrow_sequentially(self, processed: list[ProcessedTask]) -> None:
        query = FilterQuery.parse("tag:garden\nup-to-date\ndays:>5")
        assert _names(apply_filter(processed, query)) == ["Echo"]

    def test_sort_by_name_ignores_case(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery.parse("sort:name"))
        assert _names(result) == ["alpha", "Bravo", "charlie", "Delta", "Echo"]

    def test_sort_by_status_severity(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery.parse("sort:status"))
        assert [str(t.status.category) for t in result] == [
            "never-completed",
            "overdue",
            "due-today",
            "due-soon",
            "up-to-date",
        ]

    def test_limit_after_sort(self, processed: list[ProcessedTask]) -> None:
        result = apply_filter(processed, FilterQuery.parse("sort:name\nlimit:2"))
        assert _names(result) == ["alpha", "Bravo"]

    def test_input_untouched(self, processed: list[ProcessedTask]) -> None:
        before = list(processed)
        apply_filter(processed, FilterQuery.parse("overdue\nlimit:1"))
        assert processed == before
