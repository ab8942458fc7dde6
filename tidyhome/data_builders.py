"""Task validation and building helpers.

This module is the SINGLE SOURCE OF TRUTH for:
- Task field defaults
- Task shape validation (voluptuous schema + frequency-aware rules)
- Complete task structure building

The engines assume well-typed input and never raise; this is where callers
catch malformed data before it reaches them.

Consumers:
- helpers.schedule_helpers (room seeding, onboarding)
- migration_legacy (legacy task conversion)
- any persistence adapter loading tasks from the document store
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, cast
import uuid

import voluptuous as vol

from . import const
from .type_defs import TaskData
from .utils.dt_utils import dt_today_iso

# ==============================================================================
# EXCEPTIONS
# ==============================================================================


class TaskValidationError(Exception):
    """Validation error with field-specific information.

    Attributes:
        field: The DATA_TASK_* key (or "available_days") that failed
        message: Human-readable reason
        task_id: Id of the offending task, when known

    Example:
        raise TaskValidationError(
            field=const.DATA_TASK_SCHEDULED_DAY,
            message="weekday must be 0-6",
            task_id="k1",
        )
    """

    def __init__(self, field: str, message: str, task_id: str | None = None) -> None:
        """Initialize TaskValidationError.

        Args:
            field: Key of the field that failed validation
            message: Reason for the failure
            task_id: Optional id of the task being validated
        """
        self.field = field
        self.message = message
        self.task_id = task_id
        prefix = f"Task {task_id}: " if task_id else ""
        super().__init__(f"{prefix}{field}: {message}")


# ==============================================================================
# SCHEMAS
# ==============================================================================


def iso_date(value: Any) -> str:
    """Voluptuous validator for canonical YYYY-MM-DD strings."""
    if not isinstance(value, str) or len(value) != 10:
        raise vol.Invalid(f"expected date as YYYY-MM-DD, got {value!r}")
    try:
        date.fromisoformat(value)
    except ValueError as err:
        raise vol.Invalid(f"invalid date {value!r}") from err
    return value


TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_TASK_ID): vol.All(str, vol.Length(min=1)),
        vol.Required(const.DATA_TASK_FREQUENCY): vol.In(const.FREQUENCY_OPTIONS),
        vol.Required(const.DATA_TASK_ESTIMATED_MINUTES): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(const.DATA_TASK_SCHEDULED_DAY): vol.Any(
            None, vol.All(int, vol.Range(min=0, max=const.MAX_DAY_OF_MONTH))
        ),
        vol.Optional(const.DATA_TASK_ANCHOR_DATE): vol.Any(None, iso_date),
        vol.Optional(const.DATA_TASK_NEXT_DUE_DATE): iso_date,
        vol.Optional(const.DATA_TASK_COMPLETED_DATES): [iso_date],
        vol.Optional(const.DATA_TASK_ROOM): str,
        vol.Optional(const.DATA_TASK_ROOM_ID): str,
        vol.Optional(const.DATA_TASK_ROOM_TYPE): str,
        vol.Optional(const.DATA_TASK_DESCRIPTION): str,
        vol.Optional(const.DATA_TASK_PRIORITY): vol.In(const.PRIORITY_OPTIONS),
        vol.Optional(const.DATA_TASK_IS_DUE): bool,
        vol.Optional(const.DATA_TASK_IS_COMPLETED): bool,
        vol.Optional(const.DATA_TASK_LAST_COMPLETED): vol.Any(None, str),
        vol.Optional(const.DATA_TASK_ASSIGNED_TO): str,
    },
    extra=vol.ALLOW_EXTRA,
)

AVAILABLE_DAYS_SCHEMA = vol.Schema(
    [vol.All(int, vol.Range(min=const.SUNDAY, max=const.SATURDAY))]
)


# ==============================================================================
# VALIDATION
# ==============================================================================


def validate_task_data(data: Mapping[str, Any]) -> TaskData:
    """Validate a task mapping and return the normalized copy.

    Runs TASK_SCHEMA, then the frequency-aware scheduled_day rule:
    weekday frequencies need 0-6, month-day frequencies need 1-31.

    Args:
        data: Task mapping with DATA_TASK_* keys

    Returns:
        Validated TaskData (a new dict; the input is not modified)

    Raises:
        TaskValidationError: On the first failing field
    """
    task_id = data.get(const.DATA_TASK_ID)
    try:
        validated = TASK_SCHEMA(dict(data))
    except vol.Invalid as err:
        field = str(err.path[0]) if err.path else ""
        raise TaskValidationError(
            field=field, message=err.error_message, task_id=task_id
        ) from err

    frequency = validated[const.DATA_TASK_FREQUENCY]
    scheduled_day = validated.get(const.DATA_TASK_SCHEDULED_DAY)
    if scheduled_day is not None:
        if frequency in const.WEEKDAY_FREQUENCIES and scheduled_day > const.SATURDAY:
            raise TaskValidationError(
                field=const.DATA_TASK_SCHEDULED_DAY,
                message=f"{frequency} tasks need a weekday 0-6, got {scheduled_day}",
                task_id=task_id,
            )
        if (
            frequency in const.MONTH_DAY_FREQUENCIES
            and scheduled_day < const.MIN_DAY_OF_MONTH
        ):
            raise TaskValidationError(
                field=const.DATA_TASK_SCHEDULED_DAY,
                message=f"{frequency} tasks need a day-of-month 1-31, got {scheduled_day}",
                task_id=task_id,
            )

    return cast("TaskData", validated)


def validate_available_days(days: Iterable[int]) -> list[int]:
    """Validate scheduler weekdays (0=Sunday..6=Saturday).

    Raises:
        TaskValidationError: If any value is not an int in 0-6
    """
    try:
        return cast("list[int]", AVAILABLE_DAYS_SCHEMA(list(days)))
    except vol.Invalid as err:
        raise TaskValidationError(
            field="available_days", message=err.error_message
        ) from err


# ==============================================================================
# BUILDING
# ==============================================================================


def build_task(
    user_input: Mapping[str, Any],
    existing: TaskData | None = None,
) -> TaskData:
    """Build task data for create or update operations.

    One function handles both create (existing=None) and update
    (existing=TaskData). Field precedence is user_input > existing > default.

    Args:
        user_input: Data with DATA_TASK_* keys
        existing: None for create, existing TaskData for update

    Returns:
        Complete, validated TaskData ready for storage

    Raises:
        TaskValidationError: If the resulting task is malformed

    Examples:
        # CREATE mode - generates an id, applies defaults for missing fields
        task = build_task({DATA_TASK_DESCRIPTION: "Mop floor", DATA_TASK_ROOM: "Kitchen"})

        # UPDATE mode - preserves existing fields not in user_input
        task = build_task({DATA_TASK_ESTIMATED_MINUTES: 20}, existing=old_task)
    """

    def get_field(data_key: str, default: Any) -> Any:
        """Get field value: user_input > existing > default."""
        if data_key in user_input:
            return user_input[data_key]
        if existing is not None:
            return existing.get(data_key, default)
        return default

    if existing is None:
        task_id = user_input.get(const.DATA_TASK_ID) or f"task-{uuid.uuid4().hex[:12]}"
    else:
        task_id = existing[const.DATA_TASK_ID]

    task: dict[str, Any] = dict(existing or {})
    task.update(user_input)
    task.update(
        {
            const.DATA_TASK_ID: task_id,
            const.DATA_TASK_DESCRIPTION: get_field(const.DATA_TASK_DESCRIPTION, ""),
            const.DATA_TASK_ROOM: get_field(const.DATA_TASK_ROOM, ""),
            const.DATA_TASK_FREQUENCY: get_field(
                const.DATA_TASK_FREQUENCY, const.FREQUENCY_WEEKLY
            ),
            const.DATA_TASK_ESTIMATED_MINUTES: get_field(
                const.DATA_TASK_ESTIMATED_MINUTES, const.DEFAULT_ESTIMATED_MINUTES
            ),
            const.DATA_TASK_PRIORITY: get_field(
                const.DATA_TASK_PRIORITY, const.DEFAULT_PRIORITY
            ),
            const.DATA_TASK_COMPLETED_DATES: list(
                get_field(const.DATA_TASK_COMPLETED_DATES, None) or []
            ),
            const.DATA_TASK_NEXT_DUE_DATE: get_field(
                const.DATA_TASK_NEXT_DUE_DATE, None
            )
            or dt_today_iso(),
            const.DATA_TASK_IS_DUE: get_field(const.DATA_TASK_IS_DUE, True),
            const.DATA_TASK_IS_COMPLETED: get_field(const.DATA_TASK_IS_COMPLETED, False),
        }
    )

    return validate_task_data(task)
