from django import forms

from people.forms import StudentIdentityForm

REQUIRED = {"required": "Veuillez remplir tous les champs."}

class ComplaintForm(forms.Form):
    subject = forms.CharField(
        label="Sujet", max_length=200, error_messages=REQUIRED,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
    message = forms.CharField(
        label="Message", error_messages=REQUIRED,
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 4}),
    )

class AdminComplaintForm(StudentIdentityForm, ComplaintForm):
    pass

class TreatComplaintForm(forms.Form):
    response = forms.CharField(
        label="Réponse",
        error_messages={"required": "Veuillez saisir une réponse."},
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 4}),
    )
