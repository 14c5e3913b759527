"""Tests for task records, tag recognition, and processing."""

from datetime import date

from upkeepctl.domain.status import StatusCategory
from upkeepctl.domain.tasks import (
    Task,
    is_recurring_task,
    normalize_tags,
    process_task,
    process_tasks,
    sort_tasks,
    task_from_frontmatter,
)

NOW = "2024-01-15"


def _fm(**fields: object) -> dict[str, object]:
    base: dict[str, object] = {
        "tags": ["recurring-task"],
        "last_done": "2024-01-01",
        "interval": 1,
        "interval_unit": "months",
    }
    base.update(fields)
    return base


class TestNormalizeTags:
    def test_list_with_hashes(self) -> None:
        assert normalize_tags(["#recurring-task", "bike", None, "bike"]) == [
            "recurring-task",
            "bike",
        ]

    def test_comma_string(self) -> None:
        assert normalize_tags("#recurring-task, bike  garden") == [
            "recurring-task",
            "bike",
            "garden",
        ]

    def test_missing(self) -> None:
        assert normalize_tags(None) == []


class TestIsRecurringTask:
    def test_tag(self) -> None:
        assert is_recurring_task({"tags": ["recurring-task"]})
        assert is_recurring_task({"tags": "#recurring-task"})

    def test_type(self) -> None:
        assert is_recurring_task({"type": "recurring-task"})

    def test_custom_tag(self) -> None:
        assert is_recurring_task({"tags": ["chore"]}, task_tag="chore")
        assert not is_recurring_task({"tags": ["recurring-task"]}, task_tag="chore")

    def test_other_notes(self) -> None:
        assert not is_recurring_task({"tags": ["journal"]})
        assert not is_recurring_task({})


class TestTaskFromFrontmatter:
    def test_builds_task(self) -> None:
        task = task_from_frontmatter("chores/Bike chain.md", _fm(complete_early_days=3))
        assert task is not None
        assert task.name == "Bike chain"
        assert task.path == "chores/Bike chain.md"
        assert task.interval == 1
        assert task.interval_unit == "months"
        assert task.complete_early_days == 3
        assert task.tags == ["recurring-task"]

    def test_requires_interval_fields(self) -> None:
        assert task_from_frontmatter("a.md", _fm(interval=None)) is None
        fm = _fm()
        del fm["interval_unit"]
        assert task_from_frontmatter("a.md", fm) is None

    def test_not_a_task(self) -> None:
        assert task_from_frontmatter("a.md", _fm(tags=["journal"])) is None

    def test_yaml_date_value(self) -> None:
        task = task_from_frontmatter("a.md", _fm(last_done=date(2024, 1, 1)))
        assert task is not None
        assert task.last_done == date(2024, 1, 1)
        assert task.last_done_iso == "2024-01-01"

    def test_never_has_no_iso(self) -> None:
        task = task_from_frontmatter("a.md", _fm(last_done="never"))
        assert task is not None
        assert task.last_done_iso is None


class TestProcessing:
    def _tasks(self) -> list[Task]:
        return [
            Task(path="c.md", name="c", last_done="2024-01-10", interval=1, interval_unit="month"),
            Task(path="a.md", name="a", last_done=None, interval=1, interval_unit="month"),
            Task(path="b.md", name="b", last_done="2023-12-01", interval=1, interval_unit="month"),
            Task(path="d.md", name="d", last_done="2023-12-10", interval=1, interval_unit="month"),
        ]

    def test_process_task_attaches_status(self) -> None:
        item = process_task(self._tasks()[2], NOW)
        assert item.status.category is StatusCategory.OVERDUE
        assert item.days_remaining == -14
        assert item.calculated_next_due == "2024-01-01"
        assert item.path == "b.md"

    def test_sort_by_due_date_no_due_first(self) -> None:
        ordered = sort_tasks(process_tasks(self._tasks(), NOW))
        assert [t.name for t in ordered] == ["a", "b", "d", "c"]

    def test_sort_is_stable(self) -> None:
        twins = [
            Task(path=f"{n}.md", name=n, last_done="2024-01-01", interval=1, interval_unit="week")
            for n in ("x", "y", "z")
        ]
        assert [t.name for t in sort_tasks(process_tasks(twins, NOW))] == ["x", "y", "z"]

    def test_to_dict(self) -> None:
        data = process_task(self._tasks()[0], NOW).to_dict()
        assert data["status"] == "up-to-date"
        assert data["next_due"] == "2024-02-10"
        assert data["days_remaining"] == 26
        assert data["eligible"] is False
        assert data["last_done"] == "2024-01-10"
        assert data["complete_early_days"] == 7
