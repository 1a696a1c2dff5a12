"""Formatting helpers for the search history list."""

from datetime import UTC, datetime, timedelta, tzinfo


def format_search_time(
    timestamp: int, now: datetime | None = None, tz: tzinfo = UTC
) -> str:
    """Render an epoch-millisecond timestamp relative to today."""
    moment = datetime.fromtimestamp(timestamp / 1000, tz=tz)
    current = (now or datetime.now(tz=tz)).astimezone(tz)
    clock = moment.strftime("%H:%M")
    if moment.date() == current.date():
        return f"Today {clock}"
    if moment.date() == current.date() - timedelta(days=1):
        return f"Yesterday {clock}"
    return moment.strftime("%d/%m/%y %H:%M")
