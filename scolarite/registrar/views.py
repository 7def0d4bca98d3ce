from io import BytesIO

from django.contrib import messages
from django.http import FileResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required, student_required
from core.exceptions import DocumentNotReady, PortalError
from core.listing import ListFilter, load_collection
from people import services as people_services
from reports.services import request_document_pdf, request_filename
from .forms import AdminRequestForm, StudentRequestForm
from .models import DocumentRequest
from . import services

REQUEST_SEARCH = ("student__last_name", "student__first_name", "document_type")


def _list_context(request, qs):
    flt = ListFilter.from_request(request)
    requests_ = load_collection(
        request, qs.select_related("student", "processed_by"), flt,
        "Erreur lors du chargement des demandes.",
        search=REQUEST_SEARCH, code_field="student__code_apogee", status_field="status", kind_field="document_type",
    )
    return {
        "requests": requests_,
        "filters": flt.as_context(),
        "status_choices": DocumentRequest.STATUS_CHOICES,
        "kind_choices": DocumentRequest.TYPE_CHOICES,
    }


def _pdf_response(req):
    pdf = request_document_pdf(req)
    return FileResponse(BytesIO(pdf), as_attachment=True, filename=request_filename(req), content_type="application/pdf")


# ---------- admin ----------

@admin_required
def request_list(request):
    ctx = _list_context(request, DocumentRequest.objects.all())
    ctx["form"] = AdminRequestForm()
    return render(request, "registrar/request_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def request_create(request):
    form = AdminRequestForm(request.POST)
    if form.is_valid():
        cd = form.cleaned_data
        try:
            student = people_services.resolve_student(cd["email"], cd["code_apogee"], cd["cin"])
            services.create_request(student, cd["document_type"])
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Demande créée avec succès !")
            return redirect("registrar:request_list")
    else:
        messages.error(request, "Veuillez remplir tous les champs.")

    ctx = _list_context(request, DocumentRequest.objects.all())
    ctx["form"] = form
    return render(request, "registrar/request_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def request_approve(request, request_id: int):
    try:
        services.approve_request(services.get_request(request_id), request.user)
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Demande approuvée !")
    return redirect("registrar:request_list")


@admin_required
@require_http_methods(["POST"])
def request_reject(request, request_id: int):
    try:
        services.reject_request(services.get_request(request_id), request.user)
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Demande rejetée !")
    return redirect("registrar:request_list")


@admin_required
def request_pdf(request, request_id: int):
    try:
        req = services.get_request(request_id)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("registrar:request_list")
    return _pdf_response(req)


# ---------- student ----------

@student_required
def my_requests(request):
    try:
        student = people_services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    ctx = _list_context(request, DocumentRequest.objects.filter(student=student))
    ctx["form"] = StudentRequestForm()
    return render(request, "registrar/my_requests.html", ctx)


@student_required
@require_http_methods(["POST"])
def my_request_create(request):
    form = StudentRequestForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Veuillez choisir un type de document.")
        return redirect("registrar:my_requests")
    try:
        student = people_services.student_for_user(request.user)
        services.create_request(student, form.cleaned_data["document_type"])
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Demande créée avec succès !")
    return redirect("registrar:my_requests")


@student_required
def my_request_pdf(request, request_id: int):
    try:
        student = people_services.student_for_user(request.user)
        req = services.get_request(request_id)
        if req.student_id != student.pk:
            raise DocumentNotReady("Demande non trouvée.")
        if req.status != "APPROVEE":
            raise DocumentNotReady()
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("registrar:my_requests")
    return _pdf_response(req)
