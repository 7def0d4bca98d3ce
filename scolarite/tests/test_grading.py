from decimal import Decimal

import pytest

from academics import grading


@pytest.mark.parametrize("value,code", [
    ("20", "TB"), ("16", "TB"), ("15.99", "B"), ("14", "B"),
    ("12", "AB"), ("10", "P"), ("9.99", "AR"), ("0", "AR"),
])
def test_mention_code_bounds(value, code):
    assert grading.mention_code(Decimal(value)) == code


@pytest.mark.parametrize("avg,label", [
    ("17", "Très Bien"), ("16", "Très Bien"), ("15.99", "Bien"), ("14", "Bien"), ("14.5", "Bien"),
    ("12", "Assez Bien"), ("11", "Passable"), ("4", "Passable"),
])
def test_overall_mention_floors_at_passable(avg, label):
    assert grading.overall_mention(Decimal(avg)) == label


def test_average():
    assert grading.average([]) is None
    assert grading.average([Decimal("12"), Decimal("15.5")]) == Decimal("13.75")
    assert grading.average([10, 11, 11]) == Decimal("10.67")


def test_format_value():
    assert grading.format_value(Decimal("8")) == "8.00"
    assert grading.format_value(14.5) == "14.50"
