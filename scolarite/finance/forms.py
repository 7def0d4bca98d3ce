from decimal import Decimal

from django import forms

from people.forms import StudentIdentityForm
from .models import Payment

class StudentPaymentForm(forms.Form):
    payment_type = forms.ChoiceField(
        label="Type de paiement",
        choices=Payment.TYPE_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    amount = forms.DecimalField(
        label="Montant (MAD)",
        max_digits=12, decimal_places=2,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
        error_messages={"invalid": "Le montant doit être un nombre positif."},
    )

    def clean_amount(self):
        amount = self.cleaned_data.get("amount")
        if amount is None or amount <= Decimal("0"):
            raise forms.ValidationError("Le montant doit être un nombre positif.")
        return amount

class AdminPaymentForm(StudentIdentityForm, StudentPaymentForm):
    pass
