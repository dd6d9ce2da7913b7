from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional


STATUS_MAP: Dict[str, Dict[str, str]] = {
    "Ready to Blast": {"class": "ready", "label": "Ready", "color": "#22c55e"},
    "New": {"class": "new", "label": "New", "color": "#6b7280"},
    "On Hold": {"class": "hold", "label": "On Hold", "color": "#eab308"},
    "Too High": {"class": "high", "label": "Too High", "color": "#f97316"},
    "Sold": {"class": "sold", "label": "Sold", "color": "#ef4444"},
}

_SECONDS_PER_DAY = 60 * 60 * 24


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 text (``Z`` suffix allowed) or datetime -> aware UTC datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utc_now_iso() -> str:
    """Timestamp in the ``2026-01-21T06:34:05.343Z`` shape stored on records."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def days_since_added(value: Any, now: Optional[datetime] = None) -> Optional[int]:
    added = parse_timestamp(value)
    if added is None:
        return None
    current = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    delta = abs((current - added).total_seconds())
    return int(math.floor(delta / _SECONDS_PER_DAY))


def format_date(value: Any) -> str:
    """``"2026-01-21T06:34:05Z"`` -> ``"Jan 21, 2026"``; ``"-"`` when unknown."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return "-"
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_currency(amount: Any) -> str:
    if not amount:
        return "-"
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return f"${amount}"
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return "$" + f"{amount:,.3f}".rstrip("0").rstrip(".")


def format_number(value: Any) -> str:
    """Render a number the way a spreadsheet expects (``2.0`` -> ``"2"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
