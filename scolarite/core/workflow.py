"""
Status transition table shared by every view, service and API endpoint.

Each record kind has a fixed set of admin actions. An action is legal only
from its source statuses; services call `ensure_allowed` before touching a
record, templates call `allowed_actions` to decide which buttons to render.
"""
from dataclasses import dataclass

from .exceptions import IllegalTransition

REQUEST = "request"
PAYMENT = "payment"
ENROLLMENT = "enrollment"
COMPLAINT = "complaint"


@dataclass(frozen=True)
class Transition:
    action: str
    sources: frozenset
    target: str
    label: str


def _t(action, sources, target, label):
    return Transition(action, frozenset(sources), target, label)


TRANSITIONS = {
    REQUEST: (
        _t("approve", ["EN_ATTENTE"], "APPROVEE", "Approuver"),
        _t("reject", ["EN_ATTENTE"], "REFUSEE", "Rejeter"),
    ),
    PAYMENT: (
        _t("pay", ["NON_PAYE", "EN_COURS"], "PAYE", "Marquer payé"),
        # cancelling a paid payment is allowed (corrections); it goes back to unpaid
        _t("cancel", ["PAYE", "NON_PAYE"], "NON_PAYE", "Annuler"),
    ),
    ENROLLMENT: (
        _t("confirm", ["ENREGISTRE", "ANNULE"], "CONFIRME", "Confirmer"),
        _t("cancel", ["ENREGISTRE", "CONFIRME"], "ANNULE", "Annuler"),
    ),
    COMPLAINT: (
        _t("treat", ["EN_ATTENTE"], "TRAITEE", "Traiter"),
    ),
}


def transitions_for(kind: str) -> tuple:
    try:
        return TRANSITIONS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind}") from None


def allowed_actions(kind: str, status: str) -> tuple:
    return tuple(t.action for t in transitions_for(kind) if status in t.sources)


def get_transition(kind: str, action: str) -> Transition:
    for t in transitions_for(kind):
        if t.action == action:
            return t
    raise ValueError(f"Unknown action {action!r} for {kind}")


def ensure_allowed(kind: str, status: str, action: str) -> Transition:
    t = get_transition(kind, action)
    if status not in t.sources:
        raise IllegalTransition(
            f"Action « {t.label} » impossible depuis le statut {status}."
        )
    return t
