"""Tests for TaskQueryService: list_tasks and status."""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from upkeepctl.config.settings import UpkeepSettings
from upkeepctl.infrastructure.vault import Vault
from upkeepctl.services.query import TaskQueryService
from upkeepctl.services.result import NOT_A_TASK, NOT_FOUND

WriteTask = Callable[..., Path]

TODAY = date(2024, 2, 10)


@pytest.fixture
def chores(write_task: WriteTask) -> None:
    write_task("bike", last_done="2024-01-01", interval=1, interval_unit="months")
    write_task("plants", last_done="2024-02-09", interval=1, interval_unit="week")
    write_task("filter", last_done="never", interval=3, interval_unit="months")
    write_task("gutters", last_done="2024-01-20", interval=1, interval_unit="year")


class TestListTasks:
    @pytest.mark.usefixtures("chores")
    def test_all_tasks_in_due_order(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks(now=TODAY)
        assert result.ok
        assert result.op == "list_tasks"
        data = result.data
        assert data["today"] == "2024-02-10"
        assert data["total"] == 4
        assert data["count"] == 4
        assert data["attention"] == 2
        assert [i["name"] for i in data["items"]] == ["filter", "bike", "plants", "gutters"]
        assert data["query"] == {}

    @pytest.mark.usefixtures("chores")
    def test_item_shape(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks(now=TODAY)
        bike = next(i for i in result.data["items"] if i["name"] == "bike")
        assert bike["path"] == "chores/bike.md"
        assert bike["status"] == "overdue"
        assert bike["days_remaining"] == -9
        assert bike["next_due"] == "2024-02-01"
        assert bike["eligible"] is True
        assert bike["display"]["status"] == "⚠️ Overdue by 9 days"
        assert bike["display"]["style"] == "upkeep.overdue"
        assert 0 <= bike["display"]["progress"] <= 100

    @pytest.mark.usefixtures("chores")
    def test_overdue_filter_includes_never_completed(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks("overdue", now=TODAY)
        assert [i["name"] for i in result.data["items"]] == ["filter", "bike"]
        assert result.data["total"] == 4
        assert result.data["count"] == 2
        assert result.data["query"] == {"status": ["overdue"]}

    @pytest.mark.usefixtures("chores")
    def test_days_filter_skips_tasks_without_due_date(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks("days:<30", now=TODAY)
        assert [i["name"] for i in result.data["items"]] == ["bike", "plants"]

    @pytest.mark.usefixtures("chores")
    def test_sort_and_limit(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks("sort:name\nlimit:2", now=TODAY)
        assert [i["name"] for i in result.data["items"]] == ["bike", "filter"]

    def test_empty_vault(self, vault: Vault) -> None:
        result = TaskQueryService(vault).list_tasks(now=TODAY)
        assert result.ok
        assert result.data["items"] == []
        assert result.data["total"] == 0

    @pytest.mark.usefixtures("chores")
    def test_localized_display(self, vault_root: Path) -> None:
        vault = Vault(UpkeepSettings.from_cli(vault_root=vault_root, locale="de"))
        result = TaskQueryService(vault).list_tasks("status:never-completed", now=TODAY)
        assert result.data["items"][0]["display"]["status"] == "⚠️ Nie erledigt"


class TestStatus:
    @pytest.mark.usefixtures("chores")
    def test_single_task(self, vault: Vault) -> None:
        result = TaskQueryService(vault).status("chores/plants", now=TODAY)
        assert result.ok
        assert result.op == "status"
        assert result.data["today"] == "2024-02-10"
        assert result.data["name"] == "plants"
        assert result.data["status"] == "due-soon"
        assert result.data["days_remaining"] == 6
        assert result.data["display"]["due"] == "📅 Next Due on Friday"

    def test_missing_note(self, vault: Vault) -> None:
        result = TaskQueryService(vault).status("chores/nope", now=TODAY)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == NOT_FOUND

    def test_plain_note(self, vault: Vault, vault_root: Path) -> None:
        (vault_root / "journal.md").write_text("# Monday\n")
        result = TaskQueryService(vault).status("journal", now=TODAY)
        assert result.error is not None
        assert result.error.code == NOT_A_TASK
