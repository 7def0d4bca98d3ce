import logging
import re

from django.utils import timezone

from core import workflow
from core.exceptions import InvalidInput, NotFound
from .models import Enrollment, Grade

logger = logging.getLogger(__name__)

ACADEMIC_YEAR_RE = re.compile(r"^(\d{4})-(\d{4})$")


def validate_academic_year(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInput("Veuillez saisir l'année universitaire.")
    m = ACADEMIC_YEAR_RE.match(value)
    if not m or int(m.group(2)) != int(m.group(1)) + 1:
        raise InvalidInput("L'année universitaire doit être au format AAAA-AAAA (ex. 2024-2025).")
    return value


def validate_grade_value(value):
    if value is None or value < 0 or value > 20:
        raise InvalidInput("La valeur doit être un nombre entre 0 et 20.")
    return value


def get_enrollment(enrollment_id) -> Enrollment:
    try:
        return Enrollment.objects.select_related("student", "processed_by").get(pk=enrollment_id)
    except Enrollment.DoesNotExist:
        raise NotFound(f"Inscription non trouvée avec l'ID: {enrollment_id}") from None


def create_enrollment(student, enrollment_type: str, academic_year: str) -> Enrollment:
    academic_year = validate_academic_year(academic_year)
    enrollment = Enrollment.objects.create(
        student=student, enrollment_type=enrollment_type, academic_year=academic_year,
    )
    logger.info("Enrollment %s created (%s %s) for student %s", enrollment.pk, enrollment_type, academic_year, student.pk)
    return enrollment


def _decide(enrollment: Enrollment, action: str, admin_user) -> Enrollment:
    transition = workflow.ensure_allowed(workflow.ENROLLMENT, enrollment.status, action)
    enrollment.status = transition.target
    enrollment.decided_at = timezone.now()
    enrollment.processed_by = admin_user
    enrollment.save(update_fields=["status", "decided_at", "processed_by"])
    logger.info("Enrollment %s %s -> %s", enrollment.pk, action, enrollment.status)
    return enrollment


def confirm_enrollment(enrollment: Enrollment, admin_user) -> Enrollment:
    return _decide(enrollment, "confirm", admin_user)


def cancel_enrollment(enrollment: Enrollment, admin_user) -> Enrollment:
    return _decide(enrollment, "cancel", admin_user)


def get_grade(grade_id) -> Grade:
    try:
        return Grade.objects.select_related("student").get(pk=grade_id)
    except Grade.DoesNotExist:
        raise NotFound(f"Note non trouvée avec l'ID: {grade_id}") from None


def add_grade(student, module: str, value) -> Grade:
    module = (module or "").strip()
    if not module:
        raise InvalidInput("Veuillez remplir tous les champs.")
    grade = Grade.objects.create(student=student, module=module, value=validate_grade_value(value))
    logger.info("Grade %s added for student %s (%s)", grade.pk, student.pk, module)
    return grade


def update_grade(grade: Grade, module: str, value) -> Grade:
    module = (module or "").strip()
    if not module:
        raise InvalidInput("Veuillez remplir tous les champs.")
    grade.module = module
    grade.value = validate_grade_value(value)
    grade.save(update_fields=["module", "value"])
    logger.info("Grade %s updated", grade.pk)
    return grade


def delete_grade(grade: Grade) -> None:
    pk = grade.pk
    grade.delete()
    logger.info("Grade %s deleted", pk)
