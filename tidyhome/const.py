# File: const.py
"""Constants for the TidyHome scheduling core.

This file centralizes frequency values, task data keys, scheduling defaults
and migration markers for consistency across the engines and helpers.
"""

import logging

# ------------------------------------------------------------------------------------------------
# Logging
# ------------------------------------------------------------------------------------------------
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Frequencies
# ------------------------------------------------------------------------------------------------
# Values match the stored document format
FREQUENCY_DAILY = "Daily"
FREQUENCY_WEEKLY = "Weekly"
FREQUENCY_BIWEEKLY = "Bi-Weekly"
FREQUENCY_MONTHLY = "Monthly"
FREQUENCY_QUARTERLY = "Quarterly"

FREQUENCY_OPTIONS = [
    FREQUENCY_DAILY,
    FREQUENCY_WEEKLY,
    FREQUENCY_BIWEEKLY,
    FREQUENCY_MONTHLY,
    FREQUENCY_QUARTERLY,
]

# scheduled_day is a day-of-week (0=Sunday..6=Saturday)
WEEKDAY_FREQUENCIES = frozenset({FREQUENCY_WEEKLY, FREQUENCY_BIWEEKLY})

# scheduled_day is a day-of-month (1-31)
MONTH_DAY_FREQUENCIES = frozenset({FREQUENCY_MONTHLY, FREQUENCY_QUARTERLY})

# anchor_date decides which weeks/quarters are "on"
ANCHORED_FREQUENCIES = frozenset({FREQUENCY_BIWEEKLY, FREQUENCY_QUARTERLY})

# ------------------------------------------------------------------------------------------------
# Task Data Keys
# ------------------------------------------------------------------------------------------------
DATA_TASK_ID = "id"
DATA_TASK_DESCRIPTION = "description"
DATA_TASK_FREQUENCY = "frequency"
DATA_TASK_ESTIMATED_MINUTES = "estimated_minutes"
DATA_TASK_PRIORITY = "priority"
DATA_TASK_ROOM = "room"
DATA_TASK_ROOM_ID = "room_id"
DATA_TASK_ROOM_TYPE = "room_type"
DATA_TASK_SCHEDULED_DAY = "scheduled_day"
DATA_TASK_ANCHOR_DATE = "anchor_date"
DATA_TASK_COMPLETED_DATES = "completed_dates"
DATA_TASK_NEXT_DUE_DATE = "next_due_date"
DATA_TASK_IS_DUE = "is_due"
DATA_TASK_IS_COMPLETED = "is_completed"
DATA_TASK_LAST_COMPLETED = "last_completed"
DATA_TASK_ASSIGNED_TO = "assigned_to"

# Template keys (room seed tasks)
DATA_TEMPLATE_DESCRIPTION = "description"
DATA_TEMPLATE_FREQUENCY = "frequency"
DATA_TEMPLATE_ESTIMATED_MINUTES = "estimated_minutes"
DATA_TEMPLATE_PRIORITY = "priority"

# ------------------------------------------------------------------------------------------------
# Priorities
# ------------------------------------------------------------------------------------------------
PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Medium"
PRIORITY_LOW = "Low"

PRIORITY_OPTIONS = [PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_LOW]

DEFAULT_PRIORITY = PRIORITY_MEDIUM

# ------------------------------------------------------------------------------------------------
# Calendar Constants
# ------------------------------------------------------------------------------------------------
# Weekday numbering used by scheduled_day (0=Sunday..6=Saturday)
SUNDAY = 0
MONDAY = 1
TUESDAY = 2
WEDNESDAY = 3
THURSDAY = 4
FRIDAY = 5
SATURDAY = 6

DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12
MONTHS_PER_QUARTER = 3
MIN_DAY_OF_MONTH = 1
MAX_DAY_OF_MONTH = 31

# ------------------------------------------------------------------------------------------------
# Scheduling Defaults
# ------------------------------------------------------------------------------------------------
# Monday-Saturday; Sunday is left free
DEFAULT_AVAILABLE_DAYS = [MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY]

# Forward search horizon for next_occurrence_on_or_after
NEXT_OCCURRENCE_SEARCH_DAYS = 366

# Monthly/quarterly walk stops once it passes the range end year by this much
MONTH_WALK_YEAR_MARGIN = 1

# Stagger spacing for default month days: 1, 8, 15, 22
DEFAULT_MONTH_DAY_STAGGER = 7
DEFAULT_MONTH_DAY_CYCLE = 28

DEFAULT_ESTIMATED_MINUTES = 15

# ------------------------------------------------------------------------------------------------
# Migration
# ------------------------------------------------------------------------------------------------
MIGRATION_KEY = "tidyhome_schema_v2"
