from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from academics import grading
from academics.models import Enrollment
from comms.models import Complaint
from core.exceptions import NotFound
from finance.models import Payment
from people.models import Student
from people.services import student_for_user
from registrar.models import DocumentRequest

@require_http_methods(["GET", "POST"])
def login_view(request):
    if request.user.is_authenticated:
        return redirect("accounts:dashboard")

    error = None
    if request.method == "POST":
        username = request.POST.get("username", "").strip()
        password = request.POST.get("password", "")
        user = authenticate(request, username=username, password=password)
        if user is None and "@" in username:
            # student accounts are keyed on the lower-cased e-mail
            user = authenticate(request, username=username.lower(), password=password)
        if user:
            login(request, user)
            return redirect("accounts:dashboard")
        error = "Identifiant ou mot de passe incorrect."
    return render(request, "accounts/login.html", {"error": error})

@require_http_methods(["GET", "POST"])
def logout_view(request):
    logout(request)
    return redirect("accounts:login")

@login_required
def dashboard(request):
    role = request.user.primary_role()
    ctx = {"role": role}

    if role == "admin":
        ctx.update({
            "students_count": Student.objects.count(),
            "pending_requests": DocumentRequest.objects.filter(status="EN_ATTENTE").count(),
            "unpaid_payments": Payment.objects.filter(status="NON_PAYE").count(),
            "registered_enrollments": Enrollment.objects.filter(status="ENREGISTRE").count(),
            "pending_complaints": Complaint.objects.filter(status="EN_ATTENTE").count(),
            "recent_requests": DocumentRequest.objects.select_related("student")[:5],
        })

    if role == "student":
        try:
            student = student_for_user(request.user)
        except NotFound:
            student = None
        if student is not None:
            avg = grading.average(student.grades.values_list("value", flat=True))
            ctx.update({
                "student": student,
                "average": grading.format_value(avg) if avg is not None else None,
                "mention": grading.overall_mention(avg) if avg is not None else None,
                "my_pending_requests": student.document_requests.filter(status="EN_ATTENTE").count(),
                "my_unpaid_payments": student.payments.exclude(status="PAYE").count(),
                "my_pending_complaints": student.complaints.filter(status="EN_ATTENTE").count(),
            })

    return render(request, "accounts/dashboard.html", ctx)
