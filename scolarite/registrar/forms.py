from django import forms

from people.forms import StudentIdentityForm
from .models import DocumentRequest

class StudentRequestForm(forms.Form):
    document_type = forms.ChoiceField(
        label="Type de document",
        choices=DocumentRequest.TYPE_CHOICES,
        widget=forms.Select(attrs={"class": "form-select"}),
    )

class AdminRequestForm(StudentIdentityForm, StudentRequestForm):
    pass
