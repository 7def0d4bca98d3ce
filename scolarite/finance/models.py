from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from people.models import Student

class Payment(models.Model):
    TYPE_CHOICES = [
        ("FRAIS_INSCRIPTION", "Frais d'inscription"),
        ("FRAIS_SCOLARITE", "Frais de scolarité"),
        ("ASSURANCE", "Assurance"),
        ("AUTRES", "Autres"),
    ]
    STATUS_CHOICES = [
        ("PAYE", "Payé"),
        ("NON_PAYE", "Non payé"),
        ("EN_COURS", "En cours"),
    ]

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="payments")
    payment_type = models.CharField(max_length=30, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="NON_PAYE")

    created_at = models.DateTimeField(default=timezone.now)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Paiement #{self.id} - {self.student}"
