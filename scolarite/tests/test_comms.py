import pytest
from django.urls import reverse

from comms import services
from comms.models import Complaint
from core.exceptions import IllegalTransition, InvalidInput

pytestmark = pytest.mark.django_db


def test_complaint_requires_subject_and_message(student):
    with pytest.raises(InvalidInput) as exc:
        services.create_complaint(student, "Note manquante", "   ")
    assert exc.value.message == "Veuillez remplir tous les champs."


def test_treat_complaint(student):
    complaint = services.create_complaint(student, "Note manquante", "Ma note de Java n'apparaît pas.")
    services.treat_complaint(complaint, "Note ajoutée.")
    complaint.refresh_from_db()
    assert complaint.status == "TRAITEE"
    assert complaint.response == "Note ajoutée."
    assert complaint.processed_at is not None


def test_treat_requires_response(student):
    complaint = services.create_complaint(student, "Sujet", "Message")
    with pytest.raises(InvalidInput):
        services.treat_complaint(complaint, "")
    complaint.refresh_from_db()
    assert complaint.status == "EN_ATTENTE"


def test_treated_complaint_cannot_be_treated_twice(student):
    complaint = services.treat_complaint(services.create_complaint(student, "Sujet", "Message"), "Ok")
    with pytest.raises(IllegalTransition):
        services.treat_complaint(complaint, "Encore")


def test_edit_complaint_keeps_status(student):
    complaint = services.create_complaint(student, "Sujet", "Message")
    services.edit_complaint(complaint, "Sujet corrigé", "Message corrigé")
    complaint.refresh_from_db()
    assert (complaint.subject, complaint.status) == ("Sujet corrigé", "EN_ATTENTE")


def test_student_complaint_from_portal(student_client, student, banners):
    response = student_client.post(reverse("comms:my_complaint_create"), {
        "subject": "Emploi du temps", "message": "Conflit entre deux séances.",
    })
    assert "Réclamation créée avec succès !" in banners(response)
    assert student.complaints.count() == 1


def test_admin_treats_from_portal(admin_client, student, banners):
    complaint = services.create_complaint(student, "Sujet", "Message")
    response = admin_client.post(reverse("comms:complaint_treat", args=[complaint.pk]), {"response": "Traité."})
    assert "Réclamation traitée avec succès !" in banners(response)
    assert Complaint.objects.get().status == "TRAITEE"
