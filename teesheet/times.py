import re
from datetime import date, datetime, time
from typing import Optional, Tuple

from teesheet.exceptions import InvalidTimeError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse "8:05" / "08:05" into (8, 5). Returns None when unparseable or out of range."""
    if value is None:
        return None
    match = _HHMM.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not 0 <= hours <= 23 or not 0 <= minutes <= 59:
        return None
    return hours, minutes


def require_hhmm(value: Optional[str]) -> Tuple[int, int]:
    parsed = parse_hhmm(value)
    if parsed is None:
        raise InvalidTimeError(f"Invalid time {value!r}. Use HH:MM (e.g., 08:00)")
    return parsed


def start_time_on(day: date, value: str) -> datetime:
    """Tee-off start on a given day from an HH:MM string."""
    hours, minutes = require_hhmm(value)
    return datetime.combine(day, time(hours, minutes))


def format_hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")
