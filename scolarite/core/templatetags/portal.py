from datetime import date

from django import template

from core.dates import format_date, to_wire
from core.workflow import allowed_actions as _allowed_actions

register = template.Library()


@register.filter
def display_date(value):
    """Date-only display for list cells ("N/A" when unset)."""
    if isinstance(value, date):
        value = to_wire(value)
    return format_date(value)


@register.filter
def display_datetime(value):
    return format_date(value)


@register.simple_tag
def allowed_actions(kind, status):
    return _allowed_actions(kind, status)


@register.filter
def status_badge(status):
    return {
        "EN_ATTENTE": "warning",
        "EN_COURS": "warning",
        "ENREGISTRE": "info",
        "APPROVEE": "success",
        "PAYE": "success",
        "CONFIRME": "success",
        "TRAITEE": "success",
        "REFUSEE": "danger",
        "NON_PAYE": "danger",
        "ANNULE": "secondary",
    }.get(status, "secondary")
