from django.conf import settings
from django.db import models
from django.utils import timezone

from people.models import Student

User = settings.AUTH_USER_MODEL

class DocumentRequest(models.Model):
    TYPE_CHOICES = [
        ("ATTESTATION_SCOLARITE", "Attestation de scolarité"),
        ("RELEVE_NOTES", "Relevé de notes"),
        ("CONVENTION_DE_STAGE", "Convention de stage"),
    ]
    STATUS_CHOICES = [
        ("EN_ATTENTE", "En attente"),
        ("APPROVEE", "Approuvée"),
        ("REFUSEE", "Refusée"),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="document_requests")
    document_type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="EN_ATTENTE")

    created_at = models.DateTimeField(default=timezone.now)
    # both set together, only once the request leaves EN_ATTENTE
    processed_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="processed_requests")

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.get_document_type_display()} - {self.student} ({self.status})"
