import pytest
from django.urls import reverse

from core.exceptions import Duplicate, IllegalTransition
from registrar import services
from registrar.models import DocumentRequest

pytestmark = pytest.mark.django_db


def test_create_request_starts_pending(student):
    req = services.create_request(student, "ATTESTATION_SCOLARITE")
    assert req.status == "EN_ATTENTE"
    assert req.processed_at is None


def test_duplicate_pending_request_rejected(student):
    services.create_request(student, "ATTESTATION_SCOLARITE")
    with pytest.raises(Duplicate):
        services.create_request(student, "ATTESTATION_SCOLARITE")
    # a different document type is a separate request
    services.create_request(student, "RELEVE_NOTES")


def test_new_request_allowed_once_previous_is_decided(student, admin_user):
    first = services.create_request(student, "ATTESTATION_SCOLARITE")
    services.approve_request(first, admin_user)
    second = services.create_request(student, "ATTESTATION_SCOLARITE")
    assert second.pk != first.pk


def test_approve_records_decision(student, admin_user):
    req = services.approve_request(services.create_request(student, "RELEVE_NOTES"), admin_user)
    req.refresh_from_db()
    assert req.status == "APPROVEE"
    assert req.processed_by == admin_user
    assert req.processed_at is not None


def test_decided_request_is_terminal(student, admin_user):
    req = services.reject_request(services.create_request(student, "RELEVE_NOTES"), admin_user)
    with pytest.raises(IllegalTransition):
        services.approve_request(req, admin_user)


def test_admin_creates_request_by_identity(admin_client, banners, student):
    response = admin_client.post(reverse("registrar:request_create"), {
        "email": student.email, "code_apogee": student.code_apogee, "cin": student.cin,
        "document_type": "CONVENTION_DE_STAGE",
    })
    assert response.status_code == 302
    assert "Demande créée avec succès !" in banners(response)
    assert DocumentRequest.objects.get().document_type == "CONVENTION_DE_STAGE"


def test_admin_create_with_unknown_identity(admin_client, banners, student):
    response = admin_client.post(reverse("registrar:request_create"), {
        "email": student.email, "code_apogee": 1, "cin": student.cin,
        "document_type": "CONVENTION_DE_STAGE",
    })
    assert "Étudiant non trouvé avec les informations fournies." in banners(response)
    assert not DocumentRequest.objects.exists()


def test_admin_approve_then_reject_shows_error(admin_client, banners, student):
    req = services.create_request(student, "ATTESTATION_SCOLARITE")
    admin_client.post(reverse("registrar:request_approve", args=[req.pk]))
    response = admin_client.post(reverse("registrar:request_reject", args=[req.pk]))
    req.refresh_from_db()
    assert req.status == "APPROVEE"
    assert any("impossible" in b for b in banners(response))


def test_request_list_filters_by_status_and_kind(admin_client, student, admin_user):
    approved = services.approve_request(services.create_request(student, "RELEVE_NOTES"), admin_user)
    services.create_request(student, "ATTESTATION_SCOLARITE")
    response = admin_client.get(reverse("registrar:request_list"), {"status": "APPROVEE", "kind": "RELEVE_NOTES"})
    assert [r.pk for r in response.context["requests"]] == [approved.pk]


def test_student_creates_own_request(student_client, student, banners):
    response = student_client.post(reverse("registrar:my_request_create"), {"document_type": "RELEVE_NOTES"})
    assert "Demande créée avec succès !" in banners(response)
    assert student.document_requests.count() == 1


def test_student_pdf_blocked_until_approved(student_client, student, banners):
    req = services.create_request(student, "ATTESTATION_SCOLARITE")
    response = student_client.get(reverse("registrar:my_request_pdf", args=[req.pk]))
    assert response.status_code == 302
    assert "Vous pouvez télécharger le PDF uniquement après approbation de la demande." in banners(response)


def test_student_pdf_after_approval(student_client, student, admin_user):
    req = services.approve_request(services.create_request(student, "ATTESTATION_SCOLARITE"), admin_user)
    response = student_client.get(reverse("registrar:my_request_pdf", args=[req.pk]))
    assert response.status_code == 200
    assert response["Content-Type"] == "application/pdf"
    assert "Attestation_de_scolarit" in response["Content-Disposition"]
    assert b"".join(response.streaming_content).startswith(b"%PDF")


def test_student_cannot_fetch_someone_elses_pdf(client, student, other_student, admin_user):
    req = services.approve_request(services.create_request(other_student, "ATTESTATION_SCOLARITE"), admin_user)
    client.force_login(student.user)
    response = client.get(reverse("registrar:my_request_pdf", args=[req.pk]))
    assert response.status_code == 302


def test_transcript_download_mirrors_current_grades(student_client, student, admin_user, make_grades):
    make_grades(("Analyse", "16"), ("Physique", "10"))
    req = services.create_request(student, "RELEVE_NOTES")
    services.approve_request(req, admin_user)

    response = student_client.get(reverse("registrar:my_request_pdf", args=[req.pk]))
    pdf = b"".join(response.streaming_content)
    assert b"Analyse" in pdf
    assert b"Physique" in pdf
    assert b"13.00 / 20" in pdf
