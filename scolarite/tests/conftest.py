"""
Shared fixtures: one school admin, one student (created through the service so
it owns a login account) and clients logged in as each of them.
"""
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import User
from people import services as people_services

STUDENT_DATA = {
    "last_name": "Alami",
    "first_name": "Sara",
    "email": "sara.alami@ensab.ma",
    "code_apogee": 20231234,
    "cin": "BK123456",
    "program": "Génie Informatique",
    "level": "GI2",
    "academic_year": "2024-2025",
}


@pytest.fixture(autouse=True)
def fast_settings(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
    # uncompressed streams keep drawn text searchable in the PDF bytes
    settings.PORTAL_PDF_COMPRESSION = False


@pytest.fixture
def admin_user(db):
    user = User.objects.create_user(username="admin", email="admin@ensab.ma", password="admin-pass")
    user.is_school_admin = True
    user.save()
    return user


@pytest.fixture
def student_data():
    return dict(STUDENT_DATA)


@pytest.fixture
def student(db, student_data):
    return people_services.create_student(student_data)


@pytest.fixture
def other_student(db):
    return people_services.create_student({
        **STUDENT_DATA,
        "last_name": "Bennani",
        "first_name": "Youssef",
        "email": "youssef.bennani@ensab.ma",
        "code_apogee": 20239999,
        "cin": "JA998877",
    })


@pytest.fixture
def admin_client(client, admin_user):
    client.force_login(admin_user)
    return client


@pytest.fixture
def student_client(client, student):
    client.force_login(student.user)
    return client


def _bearer(user):
    api = APIClient()
    api.credentials(HTTP_AUTHORIZATION=f"Bearer {RefreshToken.for_user(user).access_token}")
    return api


@pytest.fixture
def admin_api(admin_user):
    return _bearer(admin_user)


@pytest.fixture
def student_api(student):
    return _bearer(student.user)


@pytest.fixture
def make_grades(student):
    from academics import services as academics_services

    def _make(*pairs, owner=None):
        return [academics_services.add_grade(owner or student, module, Decimal(value)) for module, value in pairs]
    return _make


@pytest.fixture
def banners():
    """Texts of the flash messages queued by a (non-followed) response."""
    from django.contrib.messages import get_messages

    def _read(response):
        return [str(m) for m in get_messages(response.wsgi_request)]
    return _read
