# File: utils/__init__.py
"""Pure Python utilities for TidyHome.

Submodules:
    - dt_utils: Date parsing, formatting and calendar arithmetic

Usage:
    from . import dt_utils
    from .dt_utils import dt_add_days
"""

from . import dt_utils

__all__ = ["dt_utils"]
