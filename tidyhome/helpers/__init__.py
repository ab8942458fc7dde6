# File: helpers/__init__.py
"""Helper functions for TidyHome callers.

Submodules:
    - schedule_helpers: Wire the workload and schedule engines together
      (apply assignments, refresh due state, seed rooms, toggle completion)

Usage:
    from . import schedule_helpers as sh
    from .schedule_helpers import rebalance_tasks
"""

from . import schedule_helpers

__all__ = ["schedule_helpers"]
