from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required, student_required
from core.exceptions import PortalError
from core.listing import ListFilter, load_collection
from people import services as people_services
from people.models import Student
from . import grading, services
from .forms import AdminEnrollmentForm, GradeEditForm, GradeForm, StudentEnrollmentForm
from .models import Enrollment, Grade

ENROLLMENT_SEARCH = ("student__last_name", "student__first_name", "academic_year", "enrollment_type")
GRADE_SEARCH = ("module", "student__last_name", "student__first_name")


def _first_error(form):
    errors = [e for errs in form.errors.values() for e in errs]
    return errors[0] if errors else "Veuillez remplir tous les champs."


def _enrollment_context(request, qs):
    flt = ListFilter.from_request(request)
    enrollments = load_collection(
        request, qs.select_related("student", "processed_by"), flt,
        "Erreur lors du chargement des inscriptions.",
        search=ENROLLMENT_SEARCH, code_field="student__code_apogee", status_field="status", kind_field="enrollment_type",
    )
    return {
        "enrollments": enrollments,
        "filters": flt.as_context(),
        "status_choices": Enrollment.STATUS_CHOICES,
        "kind_choices": Enrollment.TYPE_CHOICES,
    }


# ---------- enrollments (admin) ----------

@admin_required
def enrollment_list(request):
    ctx = _enrollment_context(request, Enrollment.objects.all())
    ctx["form"] = AdminEnrollmentForm()
    return render(request, "academics/enrollment_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def enrollment_create(request):
    form = AdminEnrollmentForm(request.POST)
    if form.is_valid():
        cd = form.cleaned_data
        try:
            services.create_enrollment(cd["student"], cd["enrollment_type"], cd["academic_year"])
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Inscription créée avec succès !")
            return redirect("academics:enrollment_list")
    else:
        messages.error(request, _first_error(form))

    ctx = _enrollment_context(request, Enrollment.objects.all())
    ctx["form"] = form
    return render(request, "academics/enrollment_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def enrollment_confirm(request, enrollment_id: int):
    try:
        services.confirm_enrollment(services.get_enrollment(enrollment_id), request.user)
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Inscription confirmée !")
    return redirect("academics:enrollment_list")


@admin_required
@require_http_methods(["POST"])
def enrollment_cancel(request, enrollment_id: int):
    try:
        services.cancel_enrollment(services.get_enrollment(enrollment_id), request.user)
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Inscription annulée !")
    return redirect("academics:enrollment_list")


# ---------- enrollments (student) ----------

@student_required
def my_enrollments(request):
    try:
        student = people_services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    ctx = _enrollment_context(request, Enrollment.objects.filter(student=student))
    ctx["form"] = StudentEnrollmentForm(initial={"academic_year": student.academic_year})
    return render(request, "academics/my_enrollments.html", ctx)


@student_required
@require_http_methods(["POST"])
def my_enrollment_create(request):
    form = StudentEnrollmentForm(request.POST)
    if not form.is_valid():
        messages.error(request, _first_error(form))
        return redirect("academics:my_enrollments")
    try:
        student = people_services.student_for_user(request.user)
        services.create_enrollment(student, form.cleaned_data["enrollment_type"], form.cleaned_data["academic_year"])
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Inscription créée avec succès !")
    return redirect("academics:my_enrollments")


# ---------- grades ----------

def _grade_context(request):
    flt = ListFilter.from_request(request)
    qs = Grade.objects.select_related("student")
    student_id = (request.GET.get("student") or "").strip()
    if student_id.isdigit():
        qs = qs.filter(student_id=int(student_id))
    grades = load_collection(
        request, qs.order_by("student__last_name", "module"), flt,
        "Erreur lors du chargement des notes.",
        search=GRADE_SEARCH, code_field="student__code_apogee",
    )
    return {
        "grades": grades,
        "filters": flt.as_context(),
        "students": Student.objects.all(),
        "selected_student": student_id,
    }


@admin_required
def grade_list(request):
    ctx = _grade_context(request)
    ctx["form"] = GradeForm(initial={"student": ctx["selected_student"] or None})
    return render(request, "academics/grade_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def grade_create(request):
    form = GradeForm(request.POST)
    if form.is_valid():
        cd = form.cleaned_data
        try:
            services.add_grade(cd["student"], cd["module"], cd["value"])
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Note ajoutée avec succès !")
            return redirect("academics:grade_list")
    else:
        messages.error(request, _first_error(form))

    ctx = _grade_context(request)
    ctx["form"] = form
    return render(request, "academics/grade_list.html", ctx)


@admin_required
@require_http_methods(["GET", "POST"])
def grade_edit(request, grade_id: int):
    try:
        grade = services.get_grade(grade_id)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("academics:grade_list")

    form = GradeEditForm(request.POST or None, initial={"module": grade.module, "value": grade.value})
    if request.method == "POST":
        if form.is_valid():
            try:
                services.update_grade(grade, form.cleaned_data["module"], form.cleaned_data["value"])
            except PortalError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, "Note modifiée avec succès !")
                return redirect("academics:grade_list")
        else:
            messages.error(request, _first_error(form))
    return render(request, "academics/grade_form.html", {"form": form, "grade": grade})


@admin_required
@require_http_methods(["POST"])
def grade_delete(request, grade_id: int):
    try:
        services.delete_grade(services.get_grade(grade_id))
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Note supprimée avec succès !")
    return redirect("academics:grade_list")


@student_required
def my_grades(request):
    try:
        student = people_services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    flt = ListFilter.from_request(request)
    grades = load_collection(
        request, Grade.objects.filter(student=student), flt,
        "Erreur lors du chargement des notes.",
        search=("module",),
    )
    rows = [(g, grading.mention_code(g.value)) for g in grades]
    avg = grading.average([g.value for g in grades])
    return render(request, "academics/my_grades.html", {
        "rows": rows,
        "filters": flt.as_context(),
        "average": grading.format_value(avg) if avg is not None else None,
        "mention": grading.overall_mention(avg) if avg is not None else None,
    })
