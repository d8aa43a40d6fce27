"""Core Utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current UTC time without tzinfo.

    Sticky timestamps are stored naive and read back as UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
