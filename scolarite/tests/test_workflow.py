import pytest

from core import workflow
from core.exceptions import IllegalTransition


@pytest.mark.parametrize("kind,status,expected", [
    (workflow.REQUEST, "EN_ATTENTE", ("approve", "reject")),
    (workflow.REQUEST, "APPROVEE", ()),
    (workflow.REQUEST, "REFUSEE", ()),
    (workflow.PAYMENT, "NON_PAYE", ("pay", "cancel")),
    (workflow.PAYMENT, "EN_COURS", ("pay",)),
    (workflow.PAYMENT, "PAYE", ("cancel",)),
    (workflow.ENROLLMENT, "ENREGISTRE", ("confirm", "cancel")),
    (workflow.ENROLLMENT, "CONFIRME", ("cancel",)),
    (workflow.ENROLLMENT, "ANNULE", ("confirm",)),
    (workflow.COMPLAINT, "EN_ATTENTE", ("treat",)),
    (workflow.COMPLAINT, "TRAITEE", ()),
])
def test_allowed_actions(kind, status, expected):
    assert workflow.allowed_actions(kind, status) == expected


def test_ensure_allowed_returns_target():
    assert workflow.ensure_allowed(workflow.PAYMENT, "PAYE", "cancel").target == "NON_PAYE"


def test_ensure_allowed_rejects_terminal_request():
    with pytest.raises(IllegalTransition) as exc:
        workflow.ensure_allowed(workflow.REQUEST, "APPROVEE", "reject")
    assert "APPROVEE" in exc.value.message


def test_unknown_kind_and_action():
    with pytest.raises(ValueError):
        workflow.allowed_actions("invoice", "PAYE")
    with pytest.raises(ValueError):
        workflow.get_transition(workflow.REQUEST, "archive")
