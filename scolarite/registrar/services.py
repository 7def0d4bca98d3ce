import logging

from django.utils import timezone

from core import workflow
from core.exceptions import Duplicate, NotFound
from .models import DocumentRequest

logger = logging.getLogger(__name__)


def get_request(request_id) -> DocumentRequest:
    try:
        return DocumentRequest.objects.select_related("student", "processed_by").get(pk=request_id)
    except DocumentRequest.DoesNotExist:
        raise NotFound(f"Demande non trouvée avec l'ID: {request_id}") from None


def create_request(student, document_type: str) -> DocumentRequest:
    pending = DocumentRequest.objects.filter(student=student, document_type=document_type, status="EN_ATTENTE")
    if pending.exists():
        raise Duplicate("Une demande en attente existe déjà pour cet étudiant.")

    req = DocumentRequest.objects.create(student=student, document_type=document_type)
    logger.info("Document request %s created (%s) for student %s", req.pk, document_type, student.pk)
    return req


def _decide(req: DocumentRequest, action: str, admin_user) -> DocumentRequest:
    transition = workflow.ensure_allowed(workflow.REQUEST, req.status, action)
    req.status = transition.target
    req.processed_at = timezone.now()
    req.processed_by = admin_user
    req.save(update_fields=["status", "processed_at", "processed_by"])
    logger.info("Document request %s %s -> %s", req.pk, action, req.status)
    return req


def approve_request(req: DocumentRequest, admin_user) -> DocumentRequest:
    return _decide(req, "approve", admin_user)


def reject_request(req: DocumentRequest, admin_user) -> DocumentRequest:
    return _decide(req, "reject", admin_user)
