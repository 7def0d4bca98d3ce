import logging

from django.utils import timezone

from core import workflow
from core.exceptions import InvalidInput, NotFound
from .models import Payment

logger = logging.getLogger(__name__)


def get_payment(payment_id) -> Payment:
    try:
        return Payment.objects.select_related("student").get(pk=payment_id)
    except Payment.DoesNotExist:
        raise NotFound(f"Paiement non trouvé avec l'ID: {payment_id}") from None


def create_payment(student, payment_type: str, amount) -> Payment:
    if amount is None or amount <= 0:
        raise InvalidInput("Le montant doit être un nombre positif.")
    payment = Payment.objects.create(student=student, payment_type=payment_type, amount=amount)
    logger.info("Payment %s created (%s, %s) for student %s", payment.pk, payment_type, amount, student.pk)
    return payment


def pay_payment(payment: Payment) -> Payment:
    transition = workflow.ensure_allowed(workflow.PAYMENT, payment.status, "pay")
    payment.status = transition.target
    payment.paid_at = timezone.now()
    payment.save(update_fields=["status", "paid_at"])
    logger.info("Payment %s marked paid", payment.pk)
    return payment


def cancel_payment(payment: Payment) -> Payment:
    transition = workflow.ensure_allowed(workflow.PAYMENT, payment.status, "cancel")
    payment.status = transition.target
    payment.paid_at = None
    payment.save(update_fields=["status", "paid_at"])
    logger.info("Payment %s cancelled", payment.pk)
    return payment
