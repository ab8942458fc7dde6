"""Tests for data_builders - task validation and building.

Covers:
- TaskValidationError attributes and message
- Schema validation (required fields, types, dates)
- Frequency-aware scheduled_day rules
- Available-day validation
- build_task create/update precedence and defaults
"""

from __future__ import annotations

from freezegun import freeze_time
import pytest

from tests.helpers import make_task
from tidyhome import const
from tidyhome.data_builders import (
    TaskValidationError,
    build_task,
    validate_available_days,
    validate_task_data,
)

# =============================================================================
# Exception
# =============================================================================


class TestTaskValidationError:
    """Tests for the TaskValidationError exception."""

    def test_attributes_and_message(self) -> None:
        error = TaskValidationError(
            field=const.DATA_TASK_SCHEDULED_DAY,
            message="weekday must be 0-6",
            task_id="k1",
        )

        assert error.field == "scheduled_day"
        assert error.task_id == "k1"
        assert str(error) == "Task k1: scheduled_day: weekday must be 0-6"

    def test_message_without_task_id(self) -> None:
        error = TaskValidationError(field="available_days", message="bad")
        assert str(error) == "available_days: bad"


# =============================================================================
# Validation
# =============================================================================


class TestValidateTaskData:
    """Tests for validate_task_data."""

    def test_valid_task_passes(self) -> None:
        """A well-formed task comes back as an equal copy."""
        task = make_task(
            scheduled_day=3,
            anchor_date="2024-01-01",
            completed_dates=["2024-01-03"],
            next_due_date="2024-01-10",
            priority="High",
            custom_note="kept",
        )

        result = validate_task_data(task)

        assert result == task
        assert result is not task

    def test_minutes_coerced(self) -> None:
        """Numeric strings are accepted for estimated_minutes."""
        result = validate_task_data(make_task(estimated_minutes="20"))
        assert result[const.DATA_TASK_ESTIMATED_MINUTES] == 20

    @pytest.mark.parametrize(
        ("changes", "field"),
        [
            ({const.DATA_TASK_FREQUENCY: "Yearly"}, const.DATA_TASK_FREQUENCY),
            ({const.DATA_TASK_ESTIMATED_MINUTES: 0}, const.DATA_TASK_ESTIMATED_MINUTES),
            ({const.DATA_TASK_ANCHOR_DATE: "2024-13-01"}, const.DATA_TASK_ANCHOR_DATE),
            ({const.DATA_TASK_NEXT_DUE_DATE: "01/05/2024"}, const.DATA_TASK_NEXT_DUE_DATE),
            ({const.DATA_TASK_PRIORITY: "Urgent"}, const.DATA_TASK_PRIORITY),
            ({const.DATA_TASK_SCHEDULED_DAY: 32}, const.DATA_TASK_SCHEDULED_DAY),
            ({const.DATA_TASK_ID: ""}, const.DATA_TASK_ID),
        ],
    )
    def test_schema_errors_name_the_field(self, changes, field: str) -> None:
        task = {**make_task(), **changes}

        with pytest.raises(TaskValidationError) as exc_info:
            validate_task_data(task)

        assert exc_info.value.field == field

    def test_missing_required_field(self) -> None:
        task = make_task()
        del task[const.DATA_TASK_FREQUENCY]

        with pytest.raises(TaskValidationError) as exc_info:
            validate_task_data(task)

        assert exc_info.value.field == const.DATA_TASK_FREQUENCY
        assert exc_info.value.task_id == "task-1"

    @pytest.mark.parametrize(
        "frequency", [const.FREQUENCY_WEEKLY, const.FREQUENCY_BIWEEKLY]
    )
    def test_weekday_frequencies_reject_month_days(self, frequency: str) -> None:
        with pytest.raises(TaskValidationError, match="weekday 0-6"):
            validate_task_data(make_task(frequency=frequency, scheduled_day=15))

    @pytest.mark.parametrize(
        "frequency", [const.FREQUENCY_MONTHLY, const.FREQUENCY_QUARTERLY]
    )
    def test_month_day_frequencies_reject_zero(self, frequency: str) -> None:
        with pytest.raises(TaskValidationError, match="day-of-month 1-31"):
            validate_task_data(make_task(frequency=frequency, scheduled_day=0))

    def test_sunday_and_day_31_accepted(self) -> None:
        validate_task_data(make_task(scheduled_day=0))
        validate_task_data(make_task(frequency=const.FREQUENCY_MONTHLY, scheduled_day=31))

    def test_unset_descriptor_accepted(self) -> None:
        """None clears scheduled_day and anchor_date."""
        task = {
            **make_task(),
            const.DATA_TASK_SCHEDULED_DAY: None,
            const.DATA_TASK_ANCHOR_DATE: None,
        }

        assert validate_task_data(task)[const.DATA_TASK_SCHEDULED_DAY] is None


class TestValidateAvailableDays:
    """Tests for validate_available_days."""

    def test_valid_days(self) -> None:
        assert validate_available_days([0, 3, 6]) == [0, 3, 6]

    @pytest.mark.parametrize("days", [[7], [-1], ["1"]])
    def test_invalid_days(self, days) -> None:
        with pytest.raises(TaskValidationError) as exc_info:
            validate_available_days(days)

        assert exc_info.value.field == "available_days"


# =============================================================================
# Building
# =============================================================================


class TestBuildTask:
    """Tests for build_task."""

    @freeze_time("2024-01-15 12:00:00")
    def test_create_applies_defaults(self) -> None:
        task = build_task({const.DATA_TASK_DESCRIPTION: "Mop floor"})

        assert task[const.DATA_TASK_ID].startswith("task-")
        assert task[const.DATA_TASK_DESCRIPTION] == "Mop floor"
        assert task[const.DATA_TASK_ROOM] == ""
        assert task[const.DATA_TASK_FREQUENCY] == const.FREQUENCY_WEEKLY
        assert task[const.DATA_TASK_ESTIMATED_MINUTES] == const.DEFAULT_ESTIMATED_MINUTES
        assert task[const.DATA_TASK_PRIORITY] == const.PRIORITY_MEDIUM
        assert task[const.DATA_TASK_COMPLETED_DATES] == []
        assert task[const.DATA_TASK_NEXT_DUE_DATE] == "2024-01-15"
        assert task[const.DATA_TASK_IS_DUE] is True
        assert task[const.DATA_TASK_IS_COMPLETED] is False

    def test_create_generates_unique_ids(self) -> None:
        first = build_task({})
        second = build_task({})
        assert first[const.DATA_TASK_ID] != second[const.DATA_TASK_ID]

    def test_create_keeps_given_id(self) -> None:
        assert build_task({const.DATA_TASK_ID: "k1"})[const.DATA_TASK_ID] == "k1"

    def test_update_preserves_existing_fields(self) -> None:
        """user_input > existing > default."""
        existing = build_task(
            {
                const.DATA_TASK_ID: "k1",
                const.DATA_TASK_DESCRIPTION: "Wipe counters",
                const.DATA_TASK_FREQUENCY: const.FREQUENCY_MONTHLY,
                const.DATA_TASK_SCHEDULED_DAY: 12,
                const.DATA_TASK_COMPLETED_DATES: ["2024-01-12"],
                const.DATA_TASK_NEXT_DUE_DATE: "2024-02-12",
            }
        )

        updated = build_task({const.DATA_TASK_ESTIMATED_MINUTES: 25}, existing)

        assert updated[const.DATA_TASK_ID] == "k1"
        assert updated[const.DATA_TASK_ESTIMATED_MINUTES] == 25
        assert updated[const.DATA_TASK_DESCRIPTION] == "Wipe counters"
        assert updated[const.DATA_TASK_SCHEDULED_DAY] == 12
        assert updated[const.DATA_TASK_COMPLETED_DATES] == ["2024-01-12"]
        assert updated[const.DATA_TASK_NEXT_DUE_DATE] == "2024-02-12"
        assert updated[const.DATA_TASK_COMPLETED_DATES] is not (
            existing[const.DATA_TASK_COMPLETED_DATES]
        )

    def test_update_cannot_change_id(self) -> None:
        existing = build_task({const.DATA_TASK_ID: "k1"})

        updated = build_task({const.DATA_TASK_ID: "other"}, existing)

        assert updated[const.DATA_TASK_ID] == "k1"

    def test_invalid_result_raises(self) -> None:
        with pytest.raises(TaskValidationError) as exc_info:
            build_task(
                {
                    const.DATA_TASK_ID: "k1",
                    const.DATA_TASK_FREQUENCY: const.FREQUENCY_WEEKLY,
                    const.DATA_TASK_SCHEDULED_DAY: 20,
                }
            )

        assert exc_info.value.field == const.DATA_TASK_SCHEDULED_DAY
        assert exc_info.value.task_id == "k1"
