from io import BytesIO

from django.contrib import messages
from django.http import FileResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from accounts.decorators import admin_required, student_required
from core.exceptions import NotFound, PortalError
from core.listing import ListFilter, load_collection
from people import services as people_services
from reports.services import payment_receipt_pdf, receipt_filename
from .forms import AdminPaymentForm, StudentPaymentForm
from .models import Payment
from . import services

PAYMENT_SEARCH = ("student__last_name", "student__first_name", "payment_type")


def _form_errors(form):
    errors = [e for errs in form.errors.values() for e in errs]
    return errors[0] if errors else "Veuillez remplir tous les champs."


def _list_context(request, qs):
    flt = ListFilter.from_request(request)
    payments = load_collection(
        request, qs.select_related("student"), flt,
        "Erreur lors du chargement des paiements.",
        search=PAYMENT_SEARCH, code_field="student__code_apogee", status_field="status", kind_field="payment_type",
    )
    return {
        "payments": payments,
        "filters": flt.as_context(),
        "status_choices": Payment.STATUS_CHOICES,
        "kind_choices": Payment.TYPE_CHOICES,
    }


def _receipt_response(payment):
    pdf = payment_receipt_pdf(payment)
    return FileResponse(BytesIO(pdf), as_attachment=True, filename=receipt_filename(payment), content_type="application/pdf")


# ---------- admin ----------

@admin_required
def payment_list(request):
    ctx = _list_context(request, Payment.objects.all())
    ctx["form"] = AdminPaymentForm()
    return render(request, "finance/payment_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def payment_create(request):
    form = AdminPaymentForm(request.POST)
    if form.is_valid():
        cd = form.cleaned_data
        try:
            student = people_services.resolve_student(cd["email"], cd["code_apogee"], cd["cin"])
            services.create_payment(student, cd["payment_type"], cd["amount"])
        except PortalError as e:
            messages.error(request, e.message)
        else:
            messages.success(request, "Paiement créé avec succès !")
            return redirect("finance:payment_list")
    else:
        messages.error(request, _form_errors(form))

    ctx = _list_context(request, Payment.objects.all())
    ctx["form"] = form
    return render(request, "finance/payment_list.html", ctx)


@admin_required
@require_http_methods(["POST"])
def payment_pay(request, payment_id: int):
    try:
        services.pay_payment(services.get_payment(payment_id))
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Paiement marqué comme payé !")
    return redirect("finance:payment_list")


@admin_required
@require_http_methods(["POST"])
def payment_cancel(request, payment_id: int):
    try:
        services.cancel_payment(services.get_payment(payment_id))
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Paiement annulé !")
    return redirect("finance:payment_list")


@admin_required
def payment_receipt(request, payment_id: int):
    try:
        payment = services.get_payment(payment_id)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("finance:payment_list")
    return _receipt_response(payment)


# ---------- student ----------

@student_required
def my_payments(request):
    try:
        student = people_services.student_for_user(request.user)
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("accounts:dashboard")

    ctx = _list_context(request, Payment.objects.filter(student=student))
    ctx["form"] = StudentPaymentForm()
    return render(request, "finance/my_payments.html", ctx)


@student_required
@require_http_methods(["POST"])
def my_payment_create(request):
    form = StudentPaymentForm(request.POST)
    if not form.is_valid():
        messages.error(request, _form_errors(form))
        return redirect("finance:my_payments")
    try:
        student = people_services.student_for_user(request.user)
        services.create_payment(student, form.cleaned_data["payment_type"], form.cleaned_data["amount"])
    except PortalError as e:
        messages.error(request, e.message)
    else:
        messages.success(request, "Paiement créé avec succès !")
    return redirect("finance:my_payments")


@student_required
def my_payment_receipt(request, payment_id: int):
    try:
        student = people_services.student_for_user(request.user)
        payment = services.get_payment(payment_id)
        if payment.student_id != student.pk:
            raise NotFound(f"Paiement non trouvé avec l'ID: {payment_id}")
    except PortalError as e:
        messages.error(request, e.message)
        return redirect("finance:my_payments")
    return _receipt_response(payment)
