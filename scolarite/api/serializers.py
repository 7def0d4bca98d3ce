from django.contrib.auth import authenticate
from rest_framework import serializers

from academics.models import Enrollment, Grade
from academics import services as academics_services
from comms.models import Complaint
from core.dates import to_wire
from core.exceptions import InvalidInput
from finance.models import Payment
from people.models import Student
from people import services as people_services
from registrar.models import DocumentRequest


class WireDateField(serializers.Field):
    def __init__(self, **kwargs):
        kwargs.setdefault("read_only", True)
        super().__init__(**kwargs)

    def to_representation(self, value):
        return to_wire(value)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, data):
        username = data["email"].strip()
        request = self.context.get("request")
        user = authenticate(request, username=username, password=data["password"])
        if user is None and "@" in username:
            user = authenticate(request, username=username.lower(), password=data["password"])
        if user is None or user.api_role() is None:
            raise serializers.ValidationError("Email ou mot de passe incorrect.")
        data["user"] = user
        return data


# ---------- students ----------

class StudentSerializer(serializers.ModelSerializer):
    nom = serializers.CharField(source="last_name", max_length=60)
    prenom = serializers.CharField(source="first_name", max_length=60)
    codeApogee = serializers.IntegerField(source="code_apogee")
    filiere = serializers.CharField(source="program", max_length=120)
    niveau = serializers.CharField(source="level", max_length=40)
    anneeUniversitaire = serializers.CharField(source="academic_year", max_length=9)

    class Meta:
        model = Student
        fields = ["id", "nom", "prenom", "email", "codeApogee", "cin", "filiere", "niveau", "anneeUniversitaire"]
        extra_kwargs = {"email": {"validators": []}}

    def validate_codeApogee(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le code Apogée doit être un nombre positif.")
        return value

    def create(self, validated_data):
        return people_services.create_student(validated_data)

    def update(self, instance, validated_data):
        data = {f: getattr(instance, f) for f in people_services.STUDENT_FIELDS}
        data.update(validated_data)
        return people_services.update_student(instance, data)


class StudentBasicSerializer(serializers.ModelSerializer):
    nom = serializers.CharField(source="last_name")
    prenom = serializers.CharField(source="first_name")
    codeApogee = serializers.IntegerField(source="code_apogee")
    filiere = serializers.CharField(source="program")

    class Meta:
        model = Student
        fields = ["id", "nom", "prenom", "email", "codeApogee", "cin", "filiere"]
        read_only_fields = fields


class StudentIdentitySerializer(serializers.Serializer):
    email = serializers.EmailField()
    codeApogee = serializers.IntegerField()
    cin = serializers.CharField(max_length=20)

    def validate_codeApogee(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le code Apogée doit être un nombre positif.")
        return value

    def resolve_student(self):
        d = self.validated_data
        return people_services.resolve_student(d["email"], d["codeApogee"], d["cin"])


# ---------- document requests ----------

class DocumentRequestSerializer(serializers.ModelSerializer):
    typeDocument = serializers.CharField(source="document_type")
    dateCreation = WireDateField(source="created_at")
    dateTraitement = WireDateField(source="processed_at")
    etudiant = StudentBasicSerializer(source="student")
    admin = serializers.CharField(source="processed_by.username", default=None)

    class Meta:
        model = DocumentRequest
        fields = ["id", "typeDocument", "status", "dateCreation", "dateTraitement", "etudiant", "admin"]
        read_only_fields = fields


class StudentRequestCreateSerializer(serializers.Serializer):
    typeDocument = serializers.ChoiceField(choices=DocumentRequest.TYPE_CHOICES)


class AdminRequestCreateSerializer(StudentIdentitySerializer, StudentRequestCreateSerializer):
    pass


# ---------- payments ----------

class PaymentSerializer(serializers.ModelSerializer):
    typePaiement = serializers.CharField(source="payment_type")
    montant = serializers.DecimalField(source="amount", max_digits=12, decimal_places=2, coerce_to_string=False)
    dateCreation = WireDateField(source="created_at")
    datePaiement = WireDateField(source="paid_at")
    etudiant = StudentBasicSerializer(source="student")

    class Meta:
        model = Payment
        fields = ["id", "typePaiement", "montant", "status", "dateCreation", "datePaiement", "etudiant"]
        read_only_fields = fields


class StudentPaymentCreateSerializer(serializers.Serializer):
    typePaiement = serializers.ChoiceField(choices=Payment.TYPE_CHOICES)
    montant = serializers.DecimalField(max_digits=12, decimal_places=2)

    def validate_montant(self, value):
        if value <= 0:
            raise serializers.ValidationError("Le montant doit être un nombre positif.")
        return value


class AdminPaymentCreateSerializer(StudentIdentitySerializer, StudentPaymentCreateSerializer):
    pass


# ---------- enrollments ----------

class EnrollmentSerializer(serializers.ModelSerializer):
    typeInscription = serializers.CharField(source="enrollment_type")
    anneeUniversitaire = serializers.CharField(source="academic_year")
    dateCreation = WireDateField(source="created_at")
    dateConfirmation = WireDateField(source="decided_at")
    etudiant = StudentBasicSerializer(source="student")
    admin = serializers.CharField(source="processed_by.username", default=None)

    class Meta:
        model = Enrollment
        fields = ["id", "typeInscription", "anneeUniversitaire", "status", "dateCreation", "dateConfirmation", "etudiant", "admin"]
        read_only_fields = fields


class StudentEnrollmentCreateSerializer(serializers.Serializer):
    typeInscription = serializers.ChoiceField(choices=Enrollment.TYPE_CHOICES)
    anneeUniversitaire = serializers.CharField(max_length=9, allow_blank=True)

    def validate_anneeUniversitaire(self, value):
        try:
            return academics_services.validate_academic_year(value)
        except InvalidInput as e:
            raise serializers.ValidationError(e.message)


class AdminEnrollmentCreateSerializer(StudentEnrollmentCreateSerializer):
    etudiantId = serializers.IntegerField()


# ---------- grades ----------

class GradeSerializer(serializers.ModelSerializer):
    valeur = serializers.DecimalField(source="value", max_digits=4, decimal_places=2, coerce_to_string=False)
    etudiantId = serializers.IntegerField(source="student_id", read_only=True)

    class Meta:
        model = Grade
        fields = ["id", "module", "valeur", "etudiantId"]
        read_only_fields = fields


class GradeWriteSerializer(serializers.Serializer):
    etudiantId = serializers.IntegerField(required=False)
    module = serializers.CharField(max_length=120)
    valeur = serializers.DecimalField(max_digits=5, decimal_places=2)

    def validate_valeur(self, value):
        try:
            return academics_services.validate_grade_value(value)
        except InvalidInput as e:
            raise serializers.ValidationError(e.message)


# ---------- complaints ----------

class ComplaintSerializer(serializers.ModelSerializer):
    sujet = serializers.CharField(source="subject")
    reponse = serializers.CharField(source="response")
    dateCreation = WireDateField(source="created_at")
    dateTraitement = WireDateField(source="processed_at")
    etudiant = StudentBasicSerializer(source="student")

    class Meta:
        model = Complaint
        fields = ["id", "sujet", "message", "status", "dateCreation", "dateTraitement", "reponse", "etudiant"]
        read_only_fields = fields


class StudentComplaintCreateSerializer(serializers.Serializer):
    sujet = serializers.CharField(max_length=200)
    message = serializers.CharField()


class AdminComplaintCreateSerializer(StudentIdentitySerializer, StudentComplaintCreateSerializer):
    pass


class ComplaintTreatSerializer(serializers.Serializer):
    reponse = serializers.CharField(error_messages={"blank": "Veuillez saisir une réponse.", "required": "Veuillez saisir une réponse."})
