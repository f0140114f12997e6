"""Utility functions for automigrate."""

from datetime import datetime


def migration_timestamp(now: datetime | None = None) -> str:
    """Get a filename-safe ISO8601 timestamp (e.g. 2024-05-01T12-30-00).

    Args:
        now: Moment to format, defaults to the current local time

    Returns:
        Timestamp with colons and periods replaced by hyphens
    """
    moment = now or datetime.now()
    return moment.isoformat(timespec="seconds").replace(":", "-").replace(".", "-")
