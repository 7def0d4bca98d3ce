from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from people.models import Student

User = settings.AUTH_USER_MODEL

class Enrollment(models.Model):
    TYPE_CHOICES = [
        ("MASTER", "Master"),
        ("DOCTORAT", "Doctorat"),
        ("REINSC", "Réinscription"),
    ]
    STATUS_CHOICES = [
        ("ENREGISTRE", "Enregistrée"),
        ("CONFIRME", "Confirmée"),
        ("ANNULE", "Annulée"),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="enrollments")
    enrollment_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    academic_year = models.CharField(max_length=9)  # "2024-2025"
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="ENREGISTRE")

    created_at = models.DateTimeField(default=timezone.now)
    decided_at = models.DateTimeField(null=True, blank=True)
    processed_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="processed_enrollments")

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.get_enrollment_type_display()} {self.academic_year} - {self.student}"

class Grade(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="grades")
    module = models.CharField(max_length=120)
    value = models.DecimalField(
        max_digits=4, decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(20)],
    )

    class Meta:
        ordering = ["module"]

    def __str__(self):
        return f"{self.student} · {self.module}: {self.value}"
