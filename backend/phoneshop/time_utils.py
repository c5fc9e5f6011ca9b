from __future__ import annotations

import time
from datetime import date, datetime, timezone
from typing import Optional


def local_now() -> datetime:
    """Wall-clock 'now' in the server's local timezone (naive)."""
    return datetime.now()


def now_iso() -> str:
    """Current instant as an ISO-8601 string with millisecond precision and trailing 'Z'."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def parse_local_datetime(value) -> Optional[datetime]:
    """
    Parse a record timestamp into a naive datetime on the local calendar.

    Offset-aware values ("...Z", "+03:00") are converted to local time,
    naive values and plain dates are taken as local already. Anything
    that cannot be parsed yields None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """'YYYY-MM-DD' -> date; None / "" -> None. Raises ValueError on bad input."""
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    return date.fromisoformat(s[:10])

