from decimal import Decimal

from django import forms

from core.exceptions import InvalidInput
from people.models import Student
from .models import Enrollment
from . import services

class StudentEnrollmentForm(forms.Form):
    enrollment_type = forms.ChoiceField(
        label="Type d'inscription",
        choices=Enrollment.TYPE_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    academic_year = forms.CharField(
        label="Année universitaire",
        max_length=9, required=False,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "2024-2025"}),
    )

    def clean_academic_year(self):
        try:
            return services.validate_academic_year(self.cleaned_data.get("academic_year"))
        except InvalidInput as e:
            raise forms.ValidationError(e.message)

class AdminEnrollmentForm(StudentEnrollmentForm):
    student = forms.ModelChoiceField(
        label="Étudiant",
        queryset=Student.objects.all(),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    field_order = ["student", "enrollment_type", "academic_year"]

class GradeEditForm(forms.Form):
    module = forms.CharField(
        label="Module", max_length=120,
        widget=forms.TextInput(attrs={"class": "form-control"}),
        error_messages={"required": "Veuillez remplir tous les champs."},
    )
    value = forms.DecimalField(
        label="Note /20",
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01", "min": 0, "max": 20}),
        error_messages={
            "invalid": "La valeur doit être un nombre entre 0 et 20.",
            "required": "Veuillez remplir tous les champs.",
        },
    )

    def clean_module(self):
        module = (self.cleaned_data.get("module") or "").strip()
        if not module:
            raise forms.ValidationError("Veuillez remplir tous les champs.")
        return module

    def clean_value(self):
        try:
            value = services.validate_grade_value(self.cleaned_data.get("value"))
        except InvalidInput as e:
            raise forms.ValidationError(e.message)
        return value.quantize(Decimal("0.01"))

class GradeForm(GradeEditForm):
    student = forms.ModelChoiceField(
        label="Étudiant",
        queryset=Student.objects.all(),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    field_order = ["student", "module", "value"]
