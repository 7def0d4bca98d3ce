from datetime import date, datetime

import pytest
from django.utils import timezone

from core.dates import format_date, to_wire


@pytest.mark.parametrize("value", [None, ""])
def test_format_date_empty_is_na(value):
    assert format_date(value) == "N/A"


def test_format_date_wire_date():
    assert format_date("05-03-2025") == "05/03/2025"


def test_format_date_wire_datetime():
    assert format_date("05-03-2025 14:07:09") == "05/03/2025 14:07:09"


def test_format_date_iso_fallback():
    assert format_date("2025-03-05") == "05/03/2025"


def test_format_date_unparseable_returned_as_is():
    assert format_date("bientôt") == "bientôt"


def test_format_date_python_values():
    assert format_date(date(2024, 12, 31)) == "31/12/2024"
    assert format_date(datetime(2024, 12, 31, 8, 5, 0)) == "31/12/2024 08:05:00"


def test_to_wire():
    assert to_wire(None) is None
    assert to_wire(date(2025, 1, 9)) == "09-01-2025"


def test_to_wire_uses_local_time(settings):
    settings.TIME_ZONE = "Africa/Casablanca"
    aware = timezone.make_aware(datetime(2025, 6, 1, 12, 0), timezone.get_fixed_timezone(0))
    assert to_wire(aware) == timezone.localtime(aware).strftime("%d-%m-%Y")
