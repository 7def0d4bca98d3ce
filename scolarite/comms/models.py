from django.db import models
from django.utils import timezone

from people.models import Student

class Complaint(models.Model):
    STATUS_CHOICES = [
        ("EN_ATTENTE", "En attente"),
        ("TRAITEE", "Traitée"),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="complaints")
    subject = models.CharField(max_length=200)
    message = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="EN_ATTENTE")

    created_at = models.DateTimeField(default=timezone.now)
    processed_at = models.DateTimeField(null=True, blank=True)
    response = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.subject} - {self.student}"
