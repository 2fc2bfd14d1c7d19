"""Common time helpers shared across models."""

from datetime import UTC, datetime, tzinfo


def local_now(tz: tzinfo | None = None) -> datetime:
    """Current instant as an aware datetime in the viewer's zone.

    With no zone given, the system local zone is used.
    """
    if tz is None:
        return datetime.now(UTC).astimezone()
    return datetime.now(tz)


def to_local(timestamp: int, tz: tzinfo | None) -> datetime:
    """Convert epoch seconds to an aware datetime in the given zone."""
    dt = datetime.fromtimestamp(timestamp, tz=UTC)
    if tz is None:
        return dt.astimezone()
    return dt.astimezone(tz)
