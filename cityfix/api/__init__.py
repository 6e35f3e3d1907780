# cityfix/api/__init__.py
# This file makes the api directory a Python package.

from . import reports
from . import stats

__all__ = [
    "reports",
    "stats",
]
