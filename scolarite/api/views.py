import logging
from io import BytesIO

from django.http import FileResponse
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from academics import grading, services as academics_services
from academics.models import Enrollment, Grade
from comms import services as comms_services
from comms.models import Complaint
from core.exceptions import DocumentNotReady, NotFound
from core.listing import ListFilter
from finance import services as finance_services
from finance.models import Payment
from people import services as people_services
from people.models import Student
from registrar import services as registrar_services
from registrar.models import DocumentRequest
from reports.services import payment_receipt_pdf, receipt_filename, request_document_pdf, request_filename
from .permissions import IsSchoolAdmin, IsStudent
from .serializers import (
    AdminComplaintCreateSerializer, AdminEnrollmentCreateSerializer, AdminPaymentCreateSerializer,
    AdminRequestCreateSerializer, ComplaintSerializer, ComplaintTreatSerializer, DocumentRequestSerializer,
    EnrollmentSerializer, GradeSerializer, GradeWriteSerializer, LoginSerializer, PaymentSerializer,
    StudentComplaintCreateSerializer, StudentEnrollmentCreateSerializer, StudentPaymentCreateSerializer,
    StudentRequestCreateSerializer, StudentSerializer,
)

logger = logging.getLogger(__name__)


def _pdf(content: bytes, filename: str):
    return FileResponse(BytesIO(content), as_attachment=True, filename=filename, content_type="application/pdf")


# ==================== AUTH ====================

class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        refresh = RefreshToken.for_user(user)
        logger.info("API login for %s", user.username)
        return Response({"token": str(refresh.access_token), "role": user.api_role()})


# ==================== ADMIN ====================

class AdminStudentViewSet(viewsets.ModelViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"
    serializer_class = StudentSerializer

    def get_queryset(self):
        flt = ListFilter.from_request(self.request)
        return flt.apply(
            Student.objects.all(),
            search=("last_name", "first_name", "email", "cin", "program", "level"),
            code_field="code_apogee",
        )

    def get_object(self):
        return people_services.get_student(self.kwargs["pk"])

    def perform_destroy(self, instance):
        people_services.delete_student(instance)

    @action(detail=True, methods=["get"])
    def notes(self, request, pk=None):
        student = people_services.get_student(pk)
        return Response(GradeSerializer(student.grades.all(), many=True).data)


class AdminRequestViewSet(viewsets.ViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"

    def list(self, request):
        qs = ListFilter.from_request(request).apply(
            DocumentRequest.objects.select_related("student", "processed_by"),
            search=("student__last_name", "student__first_name", "document_type"),
            code_field="student__code_apogee", status_field="status", kind_field="document_type",
        )
        return Response(DocumentRequestSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(DocumentRequestSerializer(registrar_services.get_request(pk)).data)

    def create(self, request):
        serializer = AdminRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        req = registrar_services.create_request(serializer.resolve_student(), serializer.validated_data["typeDocument"])
        return Response(DocumentRequestSerializer(req).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"])
    def approve(self, request, pk=None):
        req = registrar_services.approve_request(registrar_services.get_request(pk), request.user)
        return Response(DocumentRequestSerializer(req).data)

    @action(detail=True, methods=["put"])
    def reject(self, request, pk=None):
        req = registrar_services.reject_request(registrar_services.get_request(pk), request.user)
        return Response(DocumentRequestSerializer(req).data)

    @action(detail=True, methods=["get"])
    def pdf(self, request, pk=None):
        req = registrar_services.get_request(pk)
        return _pdf(request_document_pdf(req), request_filename(req))


class AdminPaymentViewSet(viewsets.ViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"

    def list(self, request):
        qs = ListFilter.from_request(request).apply(
            Payment.objects.select_related("student"),
            search=("student__last_name", "student__first_name", "payment_type"),
            code_field="student__code_apogee", status_field="status", kind_field="payment_type",
        )
        return Response(PaymentSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(PaymentSerializer(finance_services.get_payment(pk)).data)

    def create(self, request):
        serializer = AdminPaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        payment = finance_services.create_payment(serializer.resolve_student(), d["typePaiement"], d["montant"])
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"])
    def pay(self, request, pk=None):
        payment = finance_services.pay_payment(finance_services.get_payment(pk))
        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):
        payment = finance_services.cancel_payment(finance_services.get_payment(pk))
        return Response(PaymentSerializer(payment).data)

    @action(detail=True, methods=["get"])
    def recu(self, request, pk=None):
        payment = finance_services.get_payment(pk)
        return _pdf(payment_receipt_pdf(payment), receipt_filename(payment))


class AdminEnrollmentViewSet(viewsets.ViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"

    def list(self, request):
        qs = ListFilter.from_request(request).apply(
            Enrollment.objects.select_related("student", "processed_by"),
            search=("student__last_name", "student__first_name", "academic_year", "enrollment_type"),
            code_field="student__code_apogee", status_field="status", kind_field="enrollment_type",
        )
        return Response(EnrollmentSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(EnrollmentSerializer(academics_services.get_enrollment(pk)).data)

    def create(self, request):
        serializer = AdminEnrollmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        student = people_services.get_student(d["etudiantId"])
        enrollment = academics_services.create_enrollment(student, d["typeInscription"], d["anneeUniversitaire"])
        return Response(EnrollmentSerializer(enrollment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"])
    def confirm(self, request, pk=None):
        enrollment = academics_services.confirm_enrollment(academics_services.get_enrollment(pk), request.user)
        return Response(EnrollmentSerializer(enrollment).data)

    @action(detail=True, methods=["put"])
    def cancel(self, request, pk=None):
        enrollment = academics_services.cancel_enrollment(academics_services.get_enrollment(pk), request.user)
        return Response(EnrollmentSerializer(enrollment).data)


class AdminGradeViewSet(viewsets.ViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"

    def list(self, request):
        qs = Grade.objects.all()
        student_id = (request.query_params.get("etudiantId") or "").strip()
        if student_id.isdigit():
            qs = qs.filter(student_id=int(student_id))
        qs = ListFilter.from_request(request).apply(qs, search=("module",))
        return Response(GradeSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(GradeSerializer(academics_services.get_grade(pk)).data)

    def create(self, request):
        serializer = GradeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        if "etudiantId" not in d:
            raise NotFound("Étudiant non trouvé.")
        grade = academics_services.add_grade(people_services.get_student(d["etudiantId"]), d["module"], d["valeur"])
        return Response(GradeSerializer(grade).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        grade = academics_services.get_grade(pk)
        serializer = GradeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        grade = academics_services.update_grade(grade, d["module"], d["valeur"])
        return Response(GradeSerializer(grade).data)

    def destroy(self, request, pk=None):
        academics_services.delete_grade(academics_services.get_grade(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminComplaintViewSet(viewsets.ViewSet):
    permission_classes = [IsSchoolAdmin]
    lookup_value_regex = r"\d+"

    def list(self, request):
        qs = ListFilter.from_request(request).apply(
            Complaint.objects.select_related("student"),
            search=("student__last_name", "student__first_name", "subject", "message"),
            code_field="student__code_apogee", status_field="status",
        )
        return Response(ComplaintSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(ComplaintSerializer(comms_services.get_complaint(pk)).data)

    def create(self, request):
        serializer = AdminComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        complaint = comms_services.create_complaint(serializer.resolve_student(), d["sujet"], d["message"])
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        complaint = comms_services.get_complaint(pk)
        serializer = StudentComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        complaint = comms_services.edit_complaint(complaint, d["sujet"], d["message"])
        return Response(ComplaintSerializer(complaint).data)

    @action(detail=True, methods=["put"])
    def treat(self, request, pk=None):
        complaint = comms_services.get_complaint(pk)
        serializer = ComplaintTreatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = comms_services.treat_complaint(complaint, serializer.validated_data["reponse"])
        return Response(ComplaintSerializer(complaint).data)


# ==================== STUDENT ====================

class StudentScopedViewSet(viewsets.ViewSet):
    """Base for /api/etudiant/*: everything is scoped to the caller's own record."""

    permission_classes = [IsStudent]
    lookup_value_regex = r"\d+"

    def current_student(self):
        return people_services.student_for_user(self.request.user)


class StudentProfileView(APIView):
    permission_classes = [IsStudent]

    def get(self, request):
        student = people_services.student_for_user(request.user)
        data = StudentSerializer(student).data
        avg = grading.average(student.grades.values_list("value", flat=True))
        data["moyenne"] = grading.format_value(avg) if avg is not None else None
        data["mention"] = grading.overall_mention(avg) if avg is not None else None
        return Response(data)


class StudentGradeViewSet(StudentScopedViewSet):
    def list(self, request):
        return Response(GradeSerializer(self.current_student().grades.all(), many=True).data)


class StudentRequestViewSet(StudentScopedViewSet):
    def list(self, request):
        qs = DocumentRequest.objects.filter(student=self.current_student()).select_related("student", "processed_by")
        return Response(DocumentRequestSerializer(qs, many=True).data)

    def create(self, request):
        serializer = StudentRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        req = registrar_services.create_request(self.current_student(), serializer.validated_data["typeDocument"])
        return Response(DocumentRequestSerializer(req).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def pdf(self, request, pk=None):
        req = registrar_services.get_request(pk)
        if req.student_id != self.current_student().pk:
            raise NotFound(f"Demande non trouvée avec l'ID: {pk}")
        if req.status != "APPROVEE":
            raise DocumentNotReady()
        return _pdf(request_document_pdf(req), request_filename(req))


class StudentPaymentViewSet(StudentScopedViewSet):
    def list(self, request):
        qs = Payment.objects.filter(student=self.current_student()).select_related("student")
        return Response(PaymentSerializer(qs, many=True).data)

    def create(self, request):
        serializer = StudentPaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        payment = finance_services.create_payment(self.current_student(), d["typePaiement"], d["montant"])
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"])
    def recu(self, request, pk=None):
        payment = finance_services.get_payment(pk)
        if payment.student_id != self.current_student().pk:
            raise NotFound(f"Paiement non trouvé avec l'ID: {pk}")
        return _pdf(payment_receipt_pdf(payment), receipt_filename(payment))


class StudentEnrollmentViewSet(StudentScopedViewSet):
    def list(self, request):
        qs = Enrollment.objects.filter(student=self.current_student()).select_related("student", "processed_by")
        return Response(EnrollmentSerializer(qs, many=True).data)

    def create(self, request):
        serializer = StudentEnrollmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        enrollment = academics_services.create_enrollment(self.current_student(), d["typeInscription"], d["anneeUniversitaire"])
        return Response(EnrollmentSerializer(enrollment).data, status=status.HTTP_201_CREATED)


class StudentComplaintViewSet(StudentScopedViewSet):
    def list(self, request):
        qs = Complaint.objects.filter(student=self.current_student()).select_related("student")
        return Response(ComplaintSerializer(qs, many=True).data)

    def create(self, request):
        serializer = StudentComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        d = serializer.validated_data
        complaint = comms_services.create_complaint(self.current_student(), d["sujet"], d["message"])
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)
