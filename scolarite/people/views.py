from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required, student_required
from academics import grading
from core.exceptions import PortalError
from core.listing import ListFilter, load_collection
from .forms import StudentForm
from .models import Student
from . import services

STUDENT_SEARCH = ("last_name", "first_name", "email", "cin", "program", "level")


@admin_required
def student_list(request):
    flt = ListFilter.from_request(request)
    students = load_collection(
        request, Student.objects.all(), flt,
        "Erreur lors du chargement des étudiants.",
        search=STUDENT_SEARCH, code_field="code_apogee",
    )
    return render(request, "people/student_list.html", {"students": students, "filters": flt.as_context()})


@admin_required
@require_http_methods(["GET", "POST"])
def student_create(request):
    form = StudentForm(request.POST or None)
    if request.method == "POST":
        if form.is_valid():
            try:
                services.create_student(form.cleaned_data)
            except PortalError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, "Étudiant ajouté avec succès !")
                return redirect("people:student_list")
        else:
            messages.error(request, "Veuillez corriger les erreurs du formulaire.")
    return render(request, "people/student_form.html", {"form": form, "editing": False})


@admin_required
@require_http_methods(["GET", "POST"])
def student_edit(request, student_id: int):
    try:
        student = services.get_student(student_id)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("people:student_list")

    form = StudentForm(request.POST or None, instance=student)
    if request.method == "POST":
        if form.is_valid():
            try:
                services.update_student(student, form.cleaned_data)
            except PortalError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, "Étudiant mis à jour avec succès !")
                return redirect("people:student_list")
        else:
            messages.error(request, "Veuillez corriger les erreurs du formulaire.")
    return render(request, "people/student_form.html", {"form": form, "editing": True, "student": student})


@admin_required
@require_http_methods(["POST"])
def student_delete(request, student_id: int):
    try:
        services.delete_student(services.get_student(student_id))
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Étudiant supprimé avec succès !")
    return redirect("people:student_list")


@student_required
def my_profile(request):
    try:
        student = services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    grades = list(student.grades.all())
    avg = grading.average([g.value for g in grades])
    return render(request, "people/my_profile.html", {
        "student": student,
        "grades_count": len(grades),
        "average": grading.format_value(avg) if avg is not None else None,
        "mention": grading.overall_mention(avg) if avg is not None else None,
    })
