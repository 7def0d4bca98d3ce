from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required, student_required
from core.exceptions import PortalError
from core.listing import ListFilter, load_collection
from people import services as people_services
from .forms import AdminComplaintForm, ComplaintForm, TreatComplaintForm
from .models import Complaint
from . import services

COMPLAINT_SEARCH = ("student__last_name", "student__first_name", "subject", "message")


def _first_error(form):
    errors = [e for errs in form.errors.values() for e in errs]
    return errors[0] if errors else "Veuillez remplir tous les champs."


def _list_context(request, qs):
    flt = ListFilter.from_request(request)
    complaints = load_collection(
        request, qs.select_related("student"), flt,
        "Erreur lors du chargement des réclamations.",
        search=COMPLAINT_SEARCH, code_field="student__code_apogee", status_field="status",
    )
    return {
        "complaints": complaints,
        "filters": flt.as_context(),
        "status_choices": Complaint.STATUS_CHOICES,
    }


# ---------- admin ----------

@admin_required
def complaint_list(request):
    ctx = _list_context(request, Complaint.objects.all())
    ctx["form"] = AdminComplaintForm()
    ctx["treat_form"] = TreatComplaintForm()
    return render(request, "comms/complaint_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def complaint_create(request):
    form = AdminComplaintForm(request.POST)
    if form.is_valid():
        cd = form.cleaned_data
        try:
            student = people_services.resolve_student(cd["email"], cd["code_apogee"], cd["cin"])
            services.create_complaint(student, cd["subject"], cd["message"])
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Réclamation créée avec succès !")
            return redirect("comms:complaint_list")
    else:
        messages.error(request, _first_error(form))

    ctx = _list_context(request, Complaint.objects.all())
    ctx["form"] = form
    ctx["treat_form"] = TreatComplaintForm()
    return render(request, "comms/complaint_list.html", ctx)


@admin_required
@require_http_methods(["GET", "POST"])
def complaint_edit(request, complaint_id: int):
    try:
        complaint = services.get_complaint(complaint_id)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("comms:complaint_list")

    form = ComplaintForm(request.POST or None, initial={"subject": complaint.subject, "message": complaint.message})
    if request.method == "POST":
        if form.is_valid():
            try:
                services.edit_complaint(complaint, form.cleaned_data["subject"], form.cleaned_data["message"])
            except PortalError as e:
                messages.error(request, e.message)
            else:
                messages.success(request, "Réclamation modifiée avec succès !")
                return redirect("comms:complaint_list")
        else:
            messages.error(request, _first_error(form))
    return render(request, "comms/complaint_form.html", {"form": form, "complaint": complaint})


@admin_required
@require_http_methods(["POST"])
def complaint_treat(request, complaint_id: int):
    form = TreatComplaintForm(request.POST)
    if not form.is_valid():
        messages.error(request, _first_error(form))
        return redirect("comms:complaint_list")
    try:
        services.treat_complaint(services.get_complaint(complaint_id), form.cleaned_data["response"])
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Réclamation traitée avec succès !")
    return redirect("comms:complaint_list")


# ---------- student ----------

@student_required
def my_complaints(request):
    try:
        student = people_services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    ctx = _list_context(request, Complaint.objects.filter(student=student))
    ctx["form"] = ComplaintForm()
    return render(request, "comms/my_complaints.html", ctx)


@student_required
@require_http_methods(["POST"])
def my_complaint_create(request):
    form = ComplaintForm(request.POST)
    if not form.is_valid():
        messages.error(request, _first_error(form))
        return redirect("comms:my_complaints")
    try:
        student = people_services.student_for_user(request.user)
        services.create_complaint(student, form.cleaned_data["subject"], form.cleaned_data["message"])
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Réclamation créée avec succès !")
    return redirect("comms:my_complaints")
