"""SQLAlchemy ORM models.

Models represent database tables:
- littime: quotes keyed by packed 12-hour clock time
"""

from litclock.models.quote import LitTime

__all__ = ["LitTime"]
