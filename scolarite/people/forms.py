from django import forms
from .models import Student

class StudentForm(forms.ModelForm):
    code_apogee = forms.IntegerField(
        label="Code Apogée",
        widget=forms.NumberInput(attrs={"class": "form-control", "min": 1}),
        error_messages={"invalid": "Le code Apogée doit être un nombre positif."},
    )

    class Meta:
        model = Student
        fields = ["last_name", "first_name", "email", "code_apogee", "cin", "program", "level", "academic_year"]
        labels = {
            "last_name": "Nom",
            "first_name": "Prénom",
            "email": "E-mail",
            "cin": "CIN",
            "program": "Filière",
            "level": "Niveau",
            "academic_year": "Année universitaire",
        }
        widgets = {
            "last_name": forms.TextInput(attrs={"class": "form-control"}),
            "first_name": forms.TextInput(attrs={"class": "form-control"}),
            "email": forms.EmailInput(attrs={"class": "form-control"}),
            "cin": forms.TextInput(attrs={"class": "form-control"}),
            "program": forms.TextInput(attrs={"class": "form-control"}),
            "level": forms.TextInput(attrs={"class": "form-control"}),
            "academic_year": forms.TextInput(attrs={"class": "form-control", "placeholder": "2024-2025"}),
        }

    def clean_code_apogee(self):
        code = self.cleaned_data.get("code_apogee")
        if code is None or code <= 0:
            raise forms.ValidationError("Le code Apogée doit être un nombre positif.")
        return code

    def clean(self):
        cleaned = super().clean()
        for name in ("last_name", "first_name", "cin", "program", "level", "academic_year"):
            value = cleaned.get(name)
            if isinstance(value, str):
                cleaned[name] = value.strip()
        return cleaned


class StudentIdentityForm(forms.Form):
    """Identifies an existing student by e-mail, Apogée code and CIN."""

    email = forms.EmailField(label="E-mail", widget=forms.EmailInput(attrs={"class": "form-control"}))
    code_apogee = forms.IntegerField(label="Code Apogée", widget=forms.NumberInput(attrs={"class": "form-control", "min": 1}))
    cin = forms.CharField(label="CIN", max_length=20, widget=forms.TextInput(attrs={"class": "form-control"}))

    def clean_code_apogee(self):
        code = self.cleaned_data.get("code_apogee")
        if code is None or code <= 0:
            raise forms.ValidationError("Le code Apogée doit être un nombre positif.")
        return code
