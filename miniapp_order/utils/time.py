"""Clock helpers used by pickup-time rules, history sorting and placeholder order ids."""

from __future__ import annotations

from datetime import datetime

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def current_local_datetime() -> datetime:
    """Return naive local wall-clock time.

    Pickup times are exchanged as local timestamps without an offset, so every
    comparison against them has to use naive local time too.
    """
    return datetime.now().replace(microsecond=0)


def epoch_millis(now: datetime | None = None) -> int:
    """Return milliseconds since the Unix epoch for `now` (default: current time)."""
    current = now or datetime.now()
    return int(current.timestamp() * 1000)


def to_naive_local(value: datetime) -> datetime:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_timestamp(value: str) -> datetime | None:
    """Parse ISO 8601, spreadsheet-style or epoch timestamps into naive local time.

    Returns None when the value matches none of the known forms.
    """
    text = value.strip()
    if not text:
        return None

    if text.isdigit():
        number = int(text)
        seconds = number / 1000 if number >= 10**11 else number
        try:
            return datetime.fromtimestamp(seconds)
        except (OverflowError, OSError, ValueError):
            return None

    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return to_naive_local(datetime.fromisoformat(iso_text))
    except ValueError:
        pass

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
