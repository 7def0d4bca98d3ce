from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class Mention:
    code: str
    label: str
    floor: Decimal


# per-module ladder (closed lower bounds)
MENTIONS = [
    Mention("TB", "Très Bien", Decimal("16")),
    Mention("B", "Bien", Decimal("14")),
    Mention("AB", "Assez Bien", Decimal("12")),
    Mention("P", "Passable", Decimal("10")),
    Mention("AR", "Ajourné", Decimal("0")),
]


def _dec(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def mention_code(value) -> str:
    value = _dec(value)
    for m in MENTIONS:
        if value >= m.floor:
            return m.code
    return MENTIONS[-1].code


def overall_mention(average) -> str:
    """Mention of a mean; the overall ladder stops at "Passable"."""
    average = _dec(average)
    for m in MENTIONS[:3]:
        if average >= m.floor:
            return m.label
    return "Passable"


def average(values) -> Decimal | None:
    values = [_dec(v) for v in values]
    if not values:
        return None
    return (sum(values) / len(values)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_value(value) -> str:
    return f"{_dec(value):.2f}"
