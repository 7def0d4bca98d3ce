from decimal import Decimal

import pytest

from finance import services as finance_services
from registrar import services as registrar_services
from reports.services import (
    payment_receipt_pdf, receipt_filename, request_document_pdf, request_filename,
    transcript_rows, transcript_summary,
)

pytestmark = pytest.mark.django_db


def test_receipt(student):
    payment = finance_services.create_payment(student, "ASSURANCE", Decimal("250"))
    pdf = payment_receipt_pdf(payment)
    assert pdf.startswith(b"%PDF")
    assert b"250.00 MAD" in pdf
    assert b"BK123456" in pdf
    assert receipt_filename(payment) == f"Recu_Paiement_{payment.pk}_Alami.pdf"


def test_receipt_without_emblems(student, settings, tmp_path):
    settings.PORTAL_DOCUMENT_ASSETS = {"left": tmp_path / "absent.png", "right": tmp_path / "absent2.png"}
    payment = finance_services.create_payment(student, "ASSURANCE", Decimal("250"))
    pdf = payment_receipt_pdf(payment)
    assert b"ENSA" in pdf
    assert b"UH1" in pdf


@pytest.mark.parametrize("document_type,marker", [
    ("ATTESTATION_SCOLARITE", b"certifie que :"),
    ("CONVENTION_DE_STAGE", b"Article 3 : Encadrement"),
])
def test_request_documents(student, document_type, marker):
    req = registrar_services.create_request(student, document_type)
    pdf = request_document_pdf(req)
    assert pdf.startswith(b"%PDF")
    assert marker in pdf


def test_transcript_lists_grades(student, make_grades):
    grades = make_grades(("Java", "15"), ("Compilation", "8.5"))
    req = registrar_services.create_request(student, "RELEVE_NOTES")
    pdf = request_document_pdf(req, grades=grades)
    assert b"Java" in pdf
    assert b"8.50" in pdf
    assert request_filename(req) == "Relevé_de_notes_Alami.pdf"


def test_transcript_without_grades(student):
    req = registrar_services.create_request(student, "RELEVE_NOTES")
    assert b"Aucune note disponible" in request_document_pdf(req, grades=[])


def test_transcript_rows_and_summary(make_grades):
    grades = make_grades(("Java", "15"), ("Compilation", "8.5"))
    assert transcript_rows(grades) == [("Java", "15.00", "B"), ("Compilation", "8.50", "AR")]
    assert transcript_summary(grades) == ("11.75", "Passable")
    assert transcript_summary([]) == ("0.00", None)
