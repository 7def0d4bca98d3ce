import logging

from django.conf import settings
from django.db import transaction

from accounts.models import User
from core.exceptions import Duplicate, NotFound
from .models import Student

logger = logging.getLogger(__name__)

STUDENT_FIELDS = ("last_name", "first_name", "email", "code_apogee", "cin", "program", "level", "academic_year")


def get_student(student_id) -> Student:
    try:
        return Student.objects.get(pk=student_id)
    except Student.DoesNotExist:
        raise NotFound(f"Étudiant non trouvé avec l'ID: {student_id}") from None


def student_for_user(user) -> Student:
    """The student record behind a logged-in student account."""
    try:
        return Student.objects.get(user=user)
    except Student.DoesNotExist:
        pass
    # accounts created before the link existed are matched on their login e-mail
    student = Student.objects.filter(email__iexact=user.email or user.username).first()
    if student is None:
        raise NotFound("Étudiant non trouvé.")
    return student


def resolve_student(email, code_apogee, cin) -> Student:
    student = Student.objects.filter(
        email__iexact=(email or "").strip(),
        code_apogee=code_apogee,
        cin__iexact=(cin or "").strip(),
    ).first()
    if student is None:
        raise NotFound("Étudiant non trouvé avec les informations fournies.")
    return student


def _check_unique(data, exclude_pk=None):
    others = Student.objects.exclude(pk=exclude_pk) if exclude_pk else Student.objects.all()
    if others.filter(email__iexact=data["email"]).exists():
        raise Duplicate("Un étudiant avec cet e-mail existe déjà.")
    if others.filter(code_apogee=data["code_apogee"]).exists():
        raise Duplicate("Un étudiant avec ce code Apogée existe déjà.")


@transaction.atomic
def create_student(data: dict) -> Student:
    """Create the student and its login account (username = e-mail)."""
    _check_unique(data)
    email = data["email"].strip().lower()
    if User.objects.filter(username__iexact=email).exists():
        raise Duplicate("Un compte utilisateur avec cet e-mail existe déjà.")

    user = User(
        username=email,
        email=email,
        first_name=data["first_name"],
        last_name=data["last_name"],
        is_student=True,
    )
    user.set_password(settings.PORTAL_STUDENT_DEFAULT_PASSWORD)
    user.save()

    student = Student.objects.create(user=user, **{f: data[f] for f in STUDENT_FIELDS if f != "email"}, email=email)
    logger.info("Student %s created (apogee=%s)", student.pk, student.code_apogee)
    return student


@transaction.atomic
def update_student(student: Student, data: dict) -> Student:
    _check_unique(data, exclude_pk=student.pk)
    for f in STUDENT_FIELDS:
        setattr(student, f, data[f])
    student.email = student.email.strip().lower()
    student.save()

    user = student.user
    if user is not None:
        clash = User.objects.filter(username__iexact=student.email).exclude(pk=user.pk).exists()
        if clash:
            raise Duplicate("Un compte utilisateur avec cet e-mail existe déjà.")
        user.username = student.email
        user.email = student.email
        user.first_name = student.first_name
        user.last_name = student.last_name
        user.save(update_fields=["username", "email", "first_name", "last_name"])

    logger.info("Student %s updated", student.pk)
    return student


@transaction.atomic
def delete_student(student: Student) -> None:
    pk, user = student.pk, student.user
    student.delete()
    if user is not None:
        user.delete()
    logger.info("Student %s deleted", pk)
