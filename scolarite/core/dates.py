import re
from datetime import date, datetime

from django.utils import timezone

# Wire format of the REST surface: "dd-MM-yyyy" (optionally followed by "HH:mm:ss")
WIRE_DATE_FORMAT = "%d-%m-%Y"

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
DISPLAY_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"

EMPTY = "N/A"

_DATE_ONLY = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")
_DATE_TIME = re.compile(r"^(\d{2})-(\d{2})-(\d{4}) (\d{2}):(\d{2}):(\d{2})$")


def format_date(value) -> str:
    """
    Normalize a backend date for display.

    "15-03-2024"          -> "15/03/2024"
    "15-03-2024 10:30:00" -> "15/03/2024 10:30:00"
    ISO strings are accepted as a fallback and shown as a date.
    None / "" -> "N/A"; anything unparseable is returned unchanged.
    """
    if value is None or value == "":
        return EMPTY

    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.strftime(DISPLAY_DATETIME_FORMAT)
    if isinstance(value, date):
        return value.strftime(DISPLAY_DATE_FORMAT)

    text = str(value).strip()

    m = _DATE_ONLY.match(text)
    if m:
        day, month, year = (int(p) for p in m.groups())
        try:
            return date(year, month, day).strftime(DISPLAY_DATE_FORMAT)
        except ValueError:
            return text

    m = _DATE_TIME.match(text)
    if m:
        day, month, year, hour, minute, second = (int(p) for p in m.groups())
        try:
            return datetime(year, month, day, hour, minute, second).strftime(DISPLAY_DATETIME_FORMAT)
        except ValueError:
            return text

    try:
        return datetime.fromisoformat(text).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return text


def to_wire(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime(WIRE_DATE_FORMAT)
