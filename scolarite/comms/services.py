import logging

from django.utils import timezone

from core import workflow
from core.exceptions import InvalidInput, NotFound
from .models import Complaint

logger = logging.getLogger(__name__)


def _required(subject, message):
    subject, message = (subject or "").strip(), (message or "").strip()
    if not subject or not message:
        raise InvalidInput("Veuillez remplir tous les champs.")
    return subject, message


def get_complaint(complaint_id) -> Complaint:
    try:
        return Complaint.objects.select_related("student").get(pk=complaint_id)
    except Complaint.DoesNotExist:
        raise NotFound(f"Réclamation non trouvée avec l'ID: {complaint_id}") from None


def create_complaint(student, subject: str, message: str) -> Complaint:
    subject, message = _required(subject, message)
    complaint = Complaint.objects.create(student=student, subject=subject, message=message)
    logger.info("Complaint %s created for student %s", complaint.pk, student.pk)
    return complaint


def edit_complaint(complaint: Complaint, subject: str, message: str) -> Complaint:
    complaint.subject, complaint.message = _required(subject, message)
    complaint.save(update_fields=["subject", "message"])
    logger.info("Complaint %s edited", complaint.pk)
    return complaint


def treat_complaint(complaint: Complaint, response: str) -> Complaint:
    response = (response or "").strip()
    if not response:
        raise InvalidInput("Veuillez saisir une réponse.")
    transition = workflow.ensure_allowed(workflow.COMPLAINT, complaint.status, "treat")
    complaint.status = transition.target
    complaint.response = response
    complaint.processed_at = timezone.now()
    complaint.save(update_fields=["status", "response", "processed_at"])
    logger.info("Complaint %s treated", complaint.pk)
    return complaint
