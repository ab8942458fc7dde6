"""Migration logic for legacy due-date-only tasks.

Legacy tasks carried only a frequency and a next_due_date. This module
derives the recurrence descriptor (scheduled_day, anchor_date) from that due
date, initializes completed_dates, and rebalances the weekly tasks once.

The migration is idempotent: tasks that already have completed_dates are
left alone, so running it twice changes nothing. The caller records that it
ran (see const.MIGRATION_KEY) and persists the returned tasks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from . import const
from .engines.workload_engine import WorkloadEngine
from .helpers.schedule_helpers import apply_schedule_assignments
from .utils.dt_utils import day_of_month, day_of_week, dt_today_iso

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .type_defs import ISODate, TaskData, TaskUpdates


def needs_migration(task: TaskData) -> bool:
    """Return True if the task predates the recurrence model.

    Daily tasks never get a scheduled_day, so completed_dates is the marker.
    """
    return const.DATA_TASK_COMPLETED_DATES not in task


def migrate_task_to_recurrence(
    task: TaskData,
    today: ISODate | None = None,
) -> TaskUpdates:
    """Derive recurrence fields for a legacy task.

    Args:
        task: Legacy task with frequency and next_due_date.
        today: Date recorded as completed when the legacy is_completed flag
            is set; defaults to today in the configured timezone.

    Returns:
        Only the fields that need updating:
        - Daily: scheduled_day and anchor_date cleared
        - Weekly: weekday of next_due_date, anchor cleared
        - BiWeekly: weekday of next_due_date, anchored on next_due_date
        - Monthly: day-of-month of next_due_date, anchor cleared
        - Quarterly: day-of-month of next_due_date, anchored on next_due_date
        - completed_dates: [today] if is_completed else []
    """
    frequency = task.get(const.DATA_TASK_FREQUENCY)
    due_date = task.get(const.DATA_TASK_NEXT_DUE_DATE)
    updates: TaskUpdates = {}

    if frequency == const.FREQUENCY_DAILY:
        updates[const.DATA_TASK_SCHEDULED_DAY] = None
        updates[const.DATA_TASK_ANCHOR_DATE] = None
    elif frequency in const.WEEKDAY_FREQUENCIES:
        updates[const.DATA_TASK_SCHEDULED_DAY] = (
            day_of_week(due_date) if due_date else None
        )
        updates[const.DATA_TASK_ANCHOR_DATE] = (
            due_date if frequency == const.FREQUENCY_BIWEEKLY else None
        )
    elif frequency in const.MONTH_DAY_FREQUENCIES:
        updates[const.DATA_TASK_SCHEDULED_DAY] = (
            day_of_month(due_date) if due_date else None
        )
        updates[const.DATA_TASK_ANCHOR_DATE] = (
            due_date if frequency == const.FREQUENCY_QUARTERLY else None
        )
    else:
        const.LOGGER.warning(
            "Migration: Task %s has unknown frequency %s, recurrence left unset",
            task.get(const.DATA_TASK_ID),
            frequency,
        )

    if (
        frequency != const.FREQUENCY_DAILY
        and const.DATA_TASK_SCHEDULED_DAY in updates
        and updates[const.DATA_TASK_SCHEDULED_DAY] is None
    ):
        const.LOGGER.warning(
            "Migration: Task %s has no usable next_due_date (%s)",
            task.get(const.DATA_TASK_ID),
            due_date,
        )

    if task.get(const.DATA_TASK_IS_COMPLETED):
        updates[const.DATA_TASK_COMPLETED_DATES] = [today or dt_today_iso()]
    else:
        updates[const.DATA_TASK_COMPLETED_DATES] = []

    return updates


def migrate_tasks(
    tasks: Sequence[TaskData],
    today: ISODate | None = None,
    available_days: Iterable[int] | None = None,
) -> list[TaskData]:
    """Run the one-time recurrence migration over a task list.

    1. Add scheduled_day, anchor_date and completed_dates to legacy tasks
    2. Rebalance weekday assignments for all Weekly/BiWeekly tasks

    Args:
        tasks: Every task of the household.
        today: Migration date; defaults to today in the configured timezone.
        available_days: Weekdays for the rebalance.

    Returns:
        New task list in input order. When no task needs migration the
        tasks come back as unchanged copies and no rebalance happens.
    """
    pending = [task for task in tasks if needs_migration(task)]
    if not pending:
        const.LOGGER.debug("Migration: No legacy tasks found")
        return [cast("TaskData", dict(task)) for task in tasks]

    const.LOGGER.info(
        "Migrating %s of %s tasks to recurrence model", len(pending), len(tasks)
    )

    migrated: list[TaskData] = []
    for task in tasks:
        if needs_migration(task):
            updated: dict[str, Any] = dict(task)
            updated.update(migrate_task_to_recurrence(task, today))
            migrated.append(cast("TaskData", updated))
        else:
            migrated.append(task)

    assignments = WorkloadEngine.optimize_weekly_schedule(migrated, available_days)
    result = apply_schedule_assignments(migrated, assignments)

    const.LOGGER.info("Migration complete. Tasks updated with recurrence fields")
    return result
