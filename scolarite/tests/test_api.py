from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from academics import services as academics_services
from finance import services as finance_services
from people.models import Student
from registrar import services as registrar_services

pytestmark = pytest.mark.django_db


# ---------- auth ----------

def test_login_returns_token_and_role(student):
    response = APIClient().post("/api/auth/login", {"email": "Sara.Alami@ensab.ma", "password": "password"}, format="json")
    assert response.status_code == 200
    assert response.json()["role"] == "ETUDIANT"
    assert response.json()["token"]


def test_login_admin_role(admin_user):
    response = APIClient().post("/api/auth/login", {"email": "admin", "password": "admin-pass"}, format="json")
    assert response.json()["role"] == "ADMIN"


def test_login_wrong_password(student):
    response = APIClient().post("/api/auth/login", {"email": student.email, "password": "nope"}, format="json")
    assert response.status_code == 400
    assert response.json()["message"] == "Email ou mot de passe incorrect."


def test_anonymous_is_rejected():
    response = APIClient().get("/api/admin/etudiants")
    assert response.status_code == 401
    assert "message" in response.json()


def test_student_token_cannot_reach_admin_routes(student_api):
    assert student_api.get("/api/admin/etudiants").status_code == 403


# ---------- admin ----------

def test_admin_creates_student_with_wire_names(admin_api):
    response = admin_api.post("/api/admin/etudiants", {
        "nom": "Idrissi", "prenom": "Omar", "email": "omar.idrissi@ensab.ma", "codeApogee": 20240001,
        "cin": "EE112233", "filiere": "Génie Civil", "niveau": "GC1", "anneeUniversitaire": "2024-2025",
    }, format="json")
    assert response.status_code == 201
    assert response.json()["codeApogee"] == 20240001
    assert Student.objects.get().user.username == "omar.idrissi@ensab.ma"


def test_admin_duplicate_student_is_conflict(admin_api, student):
    response = admin_api.post("/api/admin/etudiants", {
        "nom": "X", "prenom": "Y", "email": student.email, "codeApogee": 1,
        "cin": "Z", "filiere": "GI", "niveau": "GI1", "anneeUniversitaire": "2024-2025",
    }, format="json")
    assert response.status_code == 409


def test_admin_student_search(admin_api, student, other_student):
    response = admin_api.get("/api/admin/etudiants", {"q": "bennani"})
    assert [s["id"] for s in response.json()] == [other_student.pk]


def test_admin_student_not_found(admin_api):
    response = admin_api.get("/api/admin/etudiants/999")
    assert response.status_code == 404
    assert response.json()["message"] == "Étudiant non trouvé avec l'ID: 999"


def test_admin_student_grades(admin_api, student, make_grades):
    make_grades(("Java", "13.5"))
    response = admin_api.get(f"/api/admin/etudiants/{student.pk}/notes")
    [grade] = response.json()
    assert (grade["module"], grade["valeur"], grade["etudiantId"]) == ("Java", 13.5, student.pk)


def test_admin_request_flow(admin_api, student):
    response = admin_api.post("/api/admin/demandes", {
        "email": student.email, "codeApogee": student.code_apogee, "cin": student.cin,
        "typeDocument": "ATTESTATION_SCOLARITE",
    }, format="json")
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "EN_ATTENTE"
    assert body["dateTraitement"] is None
    assert body["etudiant"]["codeApogee"] == student.code_apogee

    approved = admin_api.put(f"/api/admin/demandes/{body['id']}/approve")
    assert approved.json()["status"] == "APPROVEE"
    assert approved.json()["admin"] == "admin"

    again = admin_api.put(f"/api/admin/demandes/{body['id']}/reject")
    assert again.status_code == 409


def test_admin_duplicate_request_is_conflict(admin_api, student):
    registrar_services.create_request(student, "RELEVE_NOTES")
    response = admin_api.post("/api/admin/demandes", {
        "email": student.email, "codeApogee": student.code_apogee, "cin": student.cin,
        "typeDocument": "RELEVE_NOTES",
    }, format="json")
    assert response.status_code == 409
    assert response.json()["message"] == "Une demande en attente existe déjà pour cet étudiant."


def test_admin_request_list_filters(admin_api, student, admin_user):
    registrar_services.approve_request(registrar_services.create_request(student, "RELEVE_NOTES"), admin_user)
    registrar_services.create_request(student, "ATTESTATION_SCOLARITE")
    response = admin_api.get("/api/admin/demandes", {"status": "EN_ATTENTE"})
    assert [r["typeDocument"] for r in response.json()] == ["ATTESTATION_SCOLARITE"]


def test_admin_payment_pay_and_cancel(admin_api, student):
    payment = finance_services.create_payment(student, "FRAIS_SCOLARITE", Decimal("3000"))
    paid = admin_api.put(f"/api/admin/paiements/{payment.pk}/pay").json()
    assert paid["status"] == "PAYE"
    assert paid["datePaiement"] is not None
    cancelled = admin_api.put(f"/api/admin/paiements/{payment.pk}/cancel").json()
    assert cancelled["status"] == "NON_PAYE"
    assert cancelled["datePaiement"] is None


def test_admin_payment_negative_amount(admin_api, student):
    response = admin_api.post("/api/admin/paiements", {
        "email": student.email, "codeApogee": student.code_apogee, "cin": student.cin,
        "typePaiement": "AUTRES", "montant": "-5",
    }, format="json")
    assert response.status_code == 400
    assert response.json()["message"] == "Le montant doit être un nombre positif."


def test_admin_receipt_download(admin_api, student):
    payment = finance_services.create_payment(student, "ASSURANCE", Decimal("100"))
    response = admin_api.get(f"/api/admin/paiements/{payment.pk}/recu")
    assert response.status_code == 200
    assert response["Content-Type"] == "application/pdf"


def test_admin_enrollment_create_and_confirm(admin_api, student):
    response = admin_api.post("/api/admin/inscriptions", {
        "etudiantId": student.pk, "typeInscription": "MASTER", "anneeUniversitaire": "2025-2026",
    }, format="json")
    assert response.status_code == 201
    confirmed = admin_api.put(f"/api/admin/inscriptions/{response.json()['id']}/confirm")
    assert confirmed.json()["status"] == "CONFIRME"


def test_admin_enrollment_bad_year(admin_api, student):
    response = admin_api.post("/api/admin/inscriptions", {
        "etudiantId": student.pk, "typeInscription": "MASTER", "anneeUniversitaire": "2025",
    }, format="json")
    assert response.status_code == 400
    assert response.json()["message"] == "L'année universitaire doit être au format AAAA-AAAA (ex. 2024-2025)."


def test_admin_grade_crud(admin_api, student):
    created = admin_api.post("/api/admin/notes", {"etudiantId": student.pk, "module": "Java", "valeur": "14.25"}, format="json")
    assert created.status_code == 201
    grade_id = created.json()["id"]

    updated = admin_api.put(f"/api/admin/notes/{grade_id}", {"module": "Java", "valeur": "16"}, format="json")
    assert updated.json()["valeur"] == 16.0

    out_of_range = admin_api.put(f"/api/admin/notes/{grade_id}", {"module": "Java", "valeur": "21"}, format="json")
    assert out_of_range.status_code == 400
    assert out_of_range.json()["message"] == "La valeur doit être un nombre entre 0 et 20."

    assert admin_api.delete(f"/api/admin/notes/{grade_id}").status_code == 204


def test_admin_complaint_treat(admin_api, student):
    response = admin_api.post("/api/admin/reclamations", {
        "email": student.email, "codeApogee": student.code_apogee, "cin": student.cin,
        "sujet": "Note", "message": "Note manquante",
    }, format="json")
    complaint_id = response.json()["id"]

    blank = admin_api.put(f"/api/admin/reclamations/{complaint_id}/treat", {"reponse": ""}, format="json")
    assert blank.status_code == 400
    assert blank.json()["message"] == "Veuillez saisir une réponse."

    treated = admin_api.put(f"/api/admin/reclamations/{complaint_id}/treat", {"reponse": "Corrigé."}, format="json")
    assert treated.json()["status"] == "TRAITEE"
    assert treated.json()["reponse"] == "Corrigé."


# ---------- student ----------

def test_student_profile(student_api, make_grades):
    make_grades(("Java", "16"), ("Web", "14"))
    body = student_api.get("/api/etudiant/profile").json()
    assert body["email"] == "sara.alami@ensab.ma"
    assert body["moyenne"] == "15.00"
    assert body["mention"] == "Bien"


def test_student_sees_only_own_requests(student_api, student, other_student):
    registrar_services.create_request(student, "RELEVE_NOTES")
    registrar_services.create_request(other_student, "RELEVE_NOTES")
    body = student_api.get("/api/etudiant/demandes").json()
    assert len(body) == 1
    assert body[0]["etudiant"]["id"] == student.pk


def test_student_pdf_gated_on_approval(student_api, student, admin_user):
    req = registrar_services.create_request(student, "ATTESTATION_SCOLARITE")
    pending = student_api.get(f"/api/etudiant/demandes/{req.pk}/pdf")
    assert pending.status_code == 403
    assert pending.json()["message"] == "Vous pouvez télécharger le PDF uniquement après approbation de la demande."

    registrar_services.approve_request(req, admin_user)
    assert student_api.get(f"/api/etudiant/demandes/{req.pk}/pdf").status_code == 200


def test_student_pdf_of_other_student_is_not_found(student_api, other_student, admin_user):
    req = registrar_services.approve_request(registrar_services.create_request(other_student, "ATTESTATION_SCOLARITE"), admin_user)
    assert student_api.get(f"/api/etudiant/demandes/{req.pk}/pdf").status_code == 404


def test_student_creates_payment_and_enrollment(student_api, student):
    payment = student_api.post("/api/etudiant/paiements", {"typePaiement": "ASSURANCE", "montant": "120.50"}, format="json")
    assert payment.status_code == 201
    assert payment.json()["status"] == "NON_PAYE"
    assert payment.json()["montant"] == 120.5

    enrollment = student_api.post("/api/etudiant/inscriptions", {"typeInscription": "REINSC", "anneeUniversitaire": "2025-2026"}, format="json")
    assert enrollment.status_code == 201
    assert enrollment.json()["status"] == "ENREGISTRE"


def test_student_complaint_needs_both_fields(student_api):
    response = student_api.post("/api/etudiant/reclamations", {"sujet": "Note", "message": "   "}, format="json")
    assert response.status_code == 400


def test_student_grades(student_api, make_grades):
    make_grades(("Java", "12"))
    assert [g["module"] for g in student_api.get("/api/etudiant/notes").json()] == ["Java"]


def test_wire_dates(student_api, student):
    academics_services.create_enrollment(student, "MASTER", "2024-2025")
    created = student_api.get("/api/etudiant/inscriptions").json()[0]["dateCreation"]
    day, month, year = created.split("-")
    assert len(day) == 2 and len(month) == 2 and len(year) == 4


# ---------- malformed queries ----------

@pytest.mark.parametrize("path", ["/api/admin/etudiants", "/api/admin/notes"])
def test_status_query_on_collections_without_status(admin_api, student, path):
    response = admin_api.get(path, {"status": "X"})
    assert response.status_code == 200


def test_status_query_still_filters_requests(admin_api, student):
    registrar_services.create_request(student, "RELEVE_NOTES")
    assert admin_api.get("/api/admin/demandes", {"status": "REFUSEE"}).json() == []


@pytest.mark.parametrize("method,path", [
    ("put", "/api/admin/demandes/abc/approve"),
    ("get", "/api/admin/etudiants/abc"),
    ("get", "/api/admin/paiements/abc/recu"),
    ("delete", "/api/admin/notes/abc"),
])
def test_non_numeric_id_is_not_found(admin_api, method, path):
    assert getattr(admin_api, method)(path).status_code == 404


def test_student_non_numeric_id_is_not_found(student_api):
    assert student_api.get("/api/etudiant/demandes/abc/pdf").status_code == 404


def test_grade_list_ignores_non_numeric_student_filter(admin_api, make_grades):
    make_grades(("Java", "12"))
    response = admin_api.get("/api/admin/notes", {"etudiantId": "abc"})
    assert response.status_code == 200
    assert len(response.json()) == 1
