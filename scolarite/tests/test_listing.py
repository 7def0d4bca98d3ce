import logging

import pytest
from django.db import DatabaseError
from django.test import RequestFactory
from django.urls import reverse

from core.listing import ListFilter
from people.models import Student

pytestmark = pytest.mark.django_db


def test_from_request_defaults():
    flt = ListFilter.from_request(RequestFactory().get("/", {"q": "  ", "status": ""}))
    assert flt == ListFilter()
    assert flt.as_context() == {"q": "", "status": "all", "kind": "all"}


def test_search_is_case_insensitive(student, other_student):
    flt = ListFilter(q="YOUSS")
    assert list(flt.apply(Student.objects.all(), search=("first_name",))) == [other_student]


def test_code_field_matches_as_text(student, other_student):
    flt = ListFilter(q="9999")
    qs = flt.apply(Student.objects.all(), search=("last_name",), code_field="code_apogee")
    assert list(qs) == [other_student]


def test_empty_query_keeps_everything(student, other_student):
    assert ListFilter().apply(Student.objects.all(), search=("last_name",)).count() == 2


def test_status_filter_ignored_without_status_field(student, other_student):
    flt = ListFilter(status="APPROVEE")
    assert flt.apply(Student.objects.all(), search=("last_name",)).count() == 2


def test_status_filter_on_status_field(student):
    from registrar import services as registrar_services
    from registrar.models import DocumentRequest

    registrar_services.create_request(student, "RELEVE_NOTES")
    qs = DocumentRequest.objects.all()
    assert ListFilter(status="APPROVEE").apply(qs, status_field="status").count() == 0
    assert ListFilter(status="EN_ATTENTE").apply(qs, status_field="status").count() == 1


@pytest.mark.parametrize("url", ["people:student_list", "academics:grade_list"])
def test_status_query_on_lists_without_status(admin_client, student, url):
    response = admin_client.get(reverse(url), {"status": "X", "kind": "Y"})
    assert response.status_code == 200


def test_load_failure_shows_banner_and_empty_collection(admin_client, student, monkeypatch, caplog):
    def broken(self, qs, **kwargs):
        raise DatabaseError("database is locked")

    monkeypatch.setattr(ListFilter, "apply", broken)
    with caplog.at_level(logging.ERROR, logger="core.listing"):
        response = admin_client.get(reverse("people:student_list"))

    assert response.status_code == 200
    assert response.context["students"] == ()
    assert "Erreur lors du chargement des étudiants." in response.content.decode()
    assert "Collection load failed for Student" in caplog.text
