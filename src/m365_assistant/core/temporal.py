"""
Date, time and duration resolution

Turns the raw text of date/time/duration entities into datetime values.
Classification never calls into this module; it is an optional post-step
used when building drafts for the calendar and reminder collaborators.
"""
import calendar
import logging
import re
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..models.intent import EntityType, ExtractedEntity, TimeOfDay

logger = logging.getLogger(__name__)

# Indexed like datetime.weekday(): Monday is 0
WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

NAMED_TIMES = {
    "noon": TimeOfDay(hours=12, minutes=0),
    "midnight": TimeOfDay(hours=0, minutes=0),
    "morning": TimeOfDay(hours=9, minutes=0),
    "afternoon": TimeOfDay(hours=14, minutes=0),
    "evening": TimeOfDay(hours=18, minutes=0),
}

_RELATIVE_RE = re.compile(r"(?:in\s+)?(\d+)\s+(days?|weeks?|months?)")
_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?")
_DURATION_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(minutes?|mins?|hours?|hrs?|h)\b")
_ORDINAL_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)

_FORMATS_WITH_YEAR = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)

# Year is appended before parsing so February 29 resolves in leap years
_FORMATS_WITHOUT_YEAR = (
    "%m/%d",
    "%m-%d",
    "%B %d",
    "%b %d",
)


def _add_months(value: datetime, months: int) -> datetime:
    """Shift by calendar months, clamping the day to the target month's length"""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _parse_absolute(text: str, now: datetime) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None and now.tzinfo is not None:
            parsed = parsed.replace(tzinfo=now.tzinfo)
        return parsed
    except ValueError:
        pass

    normalized = _ORDINAL_RE.sub(r"\1", text.replace(",", " "))
    normalized = " ".join(normalized.split())

    for fmt in _FORMATS_WITH_YEAR:
        try:
            return datetime.strptime(normalized, fmt).replace(tzinfo=now.tzinfo)
        except ValueError:
            continue

    for fmt in _FORMATS_WITHOUT_YEAR:
        try:
            return datetime.strptime(f"{normalized} {now.year}", f"{fmt} %Y").replace(
                tzinfo=now.tzinfo
            )
        except ValueError:
            continue

    return None


def parse_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Resolve a date expression relative to now

    Args:
        text: Raw date text such as "tomorrow", "next friday", "in 2 weeks"
        now: Reference instant, defaults to the current local time

    Returns:
        The resolved datetime (same wall-clock time as now for relative
        expressions), or None if the text is not a recognisable date
    """
    now = now or datetime.now()
    lower = text.lower().strip()
    if not lower:
        return None

    if lower in ("today", "tonight"):
        return now
    if lower == "tomorrow":
        return now + timedelta(days=1)

    for index, day in enumerate(WEEKDAYS):
        if day in lower:
            # A bare weekday is always in the future, never today
            days_until = index - now.weekday()
            if days_until <= 0:
                days_until += 7
            if "next" in lower:
                days_until += 7
            return now + timedelta(days=days_until)

    match = _RELATIVE_RE.search(lower)
    if match:
        amount = int(match.group(1))
        unit = match.group(2)
        if unit.startswith("day"):
            return now + timedelta(days=amount)
        if unit.startswith("week"):
            return now + timedelta(weeks=amount)
        return _add_months(now, amount)

    return _parse_absolute(text.strip(), now)


def parse_time(text: str) -> Optional[TimeOfDay]:
    """
    Resolve a time expression to hours and minutes

    Named times use a fixed table; otherwise "H", "H:MM" with an optional
    am/pm suffix is converted to 24-hour time.
    """
    lower = text.lower().strip()
    if lower in NAMED_TIMES:
        return NAMED_TIMES[lower]

    match = _TIME_RE.search(lower)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2)) if match.group(2) else 0
    period = match.group(3)

    if period == "pm" and hours < 12:
        hours += 12
    if period == "am" and hours == 12:
        hours = 0

    if hours > 23 or minutes > 59:
        logger.debug(f"Time out of range in {text!r}")
        return None
    return TimeOfDay(hours=hours, minutes=minutes)


def parse_duration(text: str) -> Optional[timedelta]:
    """Resolve "30 minutes", "1.5 hours" or "2h" to a timedelta"""
    match = _DURATION_RE.search(text.lower())
    if not match:
        return None
    amount = float(match.group(1))
    if match.group(2).startswith("m"):
        return timedelta(minutes=amount)
    return timedelta(hours=amount)


def resolve_when(
    entities: Sequence[ExtractedEntity],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Combine the first date and time entities into a single datetime

    A time without a date falls on today. Returns None when neither a
    date nor a time could be resolved.
    """
    now = now or datetime.now()
    date_entity = next((e for e in entities if e.type == EntityType.DATE), None)
    time_entity = next((e for e in entities if e.type == EntityType.TIME), None)

    day = parse_date(date_entity.value, now) if date_entity else None
    time_of_day = parse_time(time_entity.value) if time_entity else None

    if day is None and time_of_day is None:
        return None

    base = day or now
    if time_of_day is None:
        return base
    return base.replace(
        hour=time_of_day.hours, minute=time_of_day.minutes, second=0, microsecond=0
    )
