from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "api"

admin_router = DefaultRouter(trailing_slash=False)
admin_router.include_root_view = False
admin_router.register(r"etudiants", views.AdminStudentViewSet, basename="admin-etudiants")
admin_router.register(r"demandes", views.AdminRequestViewSet, basename="admin-demandes")
admin_router.register(r"paiements", views.AdminPaymentViewSet, basename="admin-paiements")
admin_router.register(r"inscriptions", views.AdminEnrollmentViewSet, basename="admin-inscriptions")
admin_router.register(r"notes", views.AdminGradeViewSet, basename="admin-notes")
admin_router.register(r"reclamations", views.AdminComplaintViewSet, basename="admin-reclamations")

student_router = DefaultRouter(trailing_slash=False)
student_router.include_root_view = False
student_router.register(r"notes", views.StudentGradeViewSet, basename="etudiant-notes")
student_router.register(r"demandes", views.StudentRequestViewSet, basename="etudiant-demandes")
student_router.register(r"paiements", views.StudentPaymentViewSet, basename="etudiant-paiements")
student_router.register(r"inscriptions", views.StudentEnrollmentViewSet, basename="etudiant-inscriptions")
student_router.register(r"reclamations", views.StudentComplaintViewSet, basename="etudiant-reclamations")

urlpatterns = [
    path("auth/login", views.LoginView.as_view(), name="login"),
    path("etudiant/profile", views.StudentProfileView.as_view(), name="etudiant-profile"),
    path("admin/", include(admin_router.urls)),
    path("etudiant/", include(student_router.urls)),
]
