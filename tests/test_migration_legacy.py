"""Tests for the legacy due-date-only task migration.

Legacy tasks carry only frequency + next_due_date. Migration derives the
recurrence descriptor from the due date and rebalances weekly tasks once.
"""

from __future__ import annotations

import logging

from freezegun import freeze_time
import pytest

from tidyhome import const
from tidyhome.migration_legacy import (
    migrate_task_to_recurrence,
    migrate_tasks,
    needs_migration,
)


def _legacy(task_id: str, frequency: str, due: str | None, **extra):
    """Legacy task: no scheduled_day, anchor_date or completed_dates."""
    task = {
        const.DATA_TASK_ID: task_id,
        const.DATA_TASK_FREQUENCY: frequency,
        const.DATA_TASK_ESTIMATED_MINUTES: extra.pop("minutes", 10),
        const.DATA_TASK_ROOM: extra.pop("room", "Kitchen"),
        const.DATA_TASK_IS_COMPLETED: extra.pop("is_completed", False),
    }
    if due is not None:
        task[const.DATA_TASK_NEXT_DUE_DATE] = due
    task.update(extra)
    return task


# =============================================================================
# Detection
# =============================================================================


class TestNeedsMigration:
    """Tests for needs_migration."""

    def test_legacy_task(self) -> None:
        assert needs_migration(_legacy("a", "Weekly", "2024-01-05")) is True

    def test_migrated_task(self) -> None:
        task = _legacy("a", "Daily", "2024-01-05", completed_dates=[])
        assert needs_migration(task) is False


# =============================================================================
# Single Task
# =============================================================================


class TestMigrateTaskToRecurrence:
    """Per-frequency derivation rules."""

    def test_daily(self) -> None:
        """Daily tasks get no descriptor."""
        updates = migrate_task_to_recurrence(_legacy("a", "Daily", "2024-01-05"))

        assert updates == {
            const.DATA_TASK_SCHEDULED_DAY: None,
            const.DATA_TASK_ANCHOR_DATE: None,
            const.DATA_TASK_COMPLETED_DATES: [],
        }

    def test_weekly_takes_weekday(self) -> None:
        """2024-01-05 is a Friday (5)."""
        updates = migrate_task_to_recurrence(_legacy("a", "Weekly", "2024-01-05"))

        assert updates[const.DATA_TASK_SCHEDULED_DAY] == 5
        assert updates[const.DATA_TASK_ANCHOR_DATE] is None

    def test_biweekly_anchored_on_due_date(self) -> None:
        updates = migrate_task_to_recurrence(_legacy("a", "Bi-Weekly", "2024-01-07"))

        assert updates[const.DATA_TASK_SCHEDULED_DAY] == 0
        assert updates[const.DATA_TASK_ANCHOR_DATE] == "2024-01-07"

    def test_monthly_takes_day_of_month(self) -> None:
        updates = migrate_task_to_recurrence(_legacy("a", "Monthly", "2024-02-29"))

        assert updates[const.DATA_TASK_SCHEDULED_DAY] == 29
        assert updates[const.DATA_TASK_ANCHOR_DATE] is None

    def test_quarterly_anchored_on_due_date(self) -> None:
        updates = migrate_task_to_recurrence(_legacy("a", "Quarterly", "2024-03-15"))

        assert updates[const.DATA_TASK_SCHEDULED_DAY] == 15
        assert updates[const.DATA_TASK_ANCHOR_DATE] == "2024-03-15"

    def test_completed_flag_becomes_completed_date(self) -> None:
        """A completed legacy task records today as done."""
        task = _legacy("a", "Weekly", "2024-01-05", is_completed=True)

        updates = migrate_task_to_recurrence(task, today="2024-01-05")

        assert updates[const.DATA_TASK_COMPLETED_DATES] == ["2024-01-05"]

    @freeze_time("2024-06-01 10:00:00")
    def test_completed_flag_defaults_to_today(self) -> None:
        task = _legacy("a", "Weekly", "2024-01-05", is_completed=True)

        updates = migrate_task_to_recurrence(task)

        assert updates[const.DATA_TASK_COMPLETED_DATES] == ["2024-06-01"]

    def test_missing_due_date_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Without a due date the descriptor stays unset and a warning is logged."""
        with caplog.at_level(logging.WARNING, logger="tidyhome"):
            updates = migrate_task_to_recurrence(_legacy("a", "Monthly", None))

        assert updates[const.DATA_TASK_SCHEDULED_DAY] is None
        assert "no usable next_due_date" in caplog.text

    def test_unknown_frequency_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown frequencies only get completed_dates."""
        with caplog.at_level(logging.WARNING, logger="tidyhome"):
            updates = migrate_task_to_recurrence(_legacy("a", "Yearly", "2024-01-05"))

        assert updates == {const.DATA_TASK_COMPLETED_DATES: []}
        assert "unknown frequency" in caplog.text


# =============================================================================
# Task List
# =============================================================================


class TestMigrateTasks:
    """Tests for migrate_tasks."""

    def test_migrates_and_rebalances(self) -> None:
        """Weekly rooms are rebalanced after the descriptor is derived."""
        tasks = [
            _legacy("k", "Weekly", "2024-01-05", minutes=30, room="Kitchen"),
            _legacy("b", "Bi-Weekly", "2024-01-06", minutes=20, room="Bathroom"),
            _legacy("m", "Monthly", "2024-01-20", room="Office"),
        ]

        result = migrate_tasks(tasks, today="2024-01-01")

        assert [t[const.DATA_TASK_ID] for t in result] == ["k", "b", "m"]
        assert result[0][const.DATA_TASK_SCHEDULED_DAY] == 1
        assert result[1][const.DATA_TASK_SCHEDULED_DAY] == 2
        assert result[1][const.DATA_TASK_ANCHOR_DATE] == "2024-01-06"
        assert result[2][const.DATA_TASK_SCHEDULED_DAY] == 20
        assert all(t[const.DATA_TASK_COMPLETED_DATES] == [] for t in result)
        # Due state is left for the next refresh
        assert result[0][const.DATA_TASK_NEXT_DUE_DATE] == "2024-01-05"
        assert const.DATA_TASK_SCHEDULED_DAY not in tasks[0]

    def test_already_migrated_tasks_untouched(self) -> None:
        """Tasks with completed_dates keep their descriptor."""
        tasks = [
            _legacy("new", "Weekly", "2024-01-05", minutes=5),
            _legacy(
                "old",
                "Monthly",
                "2024-01-05",
                scheduled_day=12,
                completed_dates=["2024-01-12"],
            ),
        ]

        result = migrate_tasks(tasks, today="2024-01-01")

        assert result[1][const.DATA_TASK_SCHEDULED_DAY] == 12
        assert result[1][const.DATA_TASK_COMPLETED_DATES] == ["2024-01-12"]

    def test_idempotent(self) -> None:
        """A second run changes nothing."""
        tasks = [
            _legacy("k", "Weekly", "2024-01-05", minutes=30, room="Kitchen"),
            _legacy("b", "Weekly", "2024-01-06", minutes=20, room="Bathroom"),
        ]
        once = migrate_tasks(tasks, today="2024-01-01", available_days=[3, 4])

        twice = migrate_tasks(once, today="2024-01-01", available_days=[6])

        assert twice == once
        assert [t[const.DATA_TASK_SCHEDULED_DAY] for t in twice] == [3, 4]

    def test_empty(self) -> None:
        assert migrate_tasks([]) == []
