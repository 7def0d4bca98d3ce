from django.urls import path
from . import views

app_name = "academics"

urlpatterns = [
    path("enrollments/", views.enrollment_list, name="enrollment_list"),
    path("enrollments/new/", views.enrollment_create, name="enrollment_create"),
    path("enrollments/<int:enrollment_id>/confirm/", views.enrollment_confirm, name="enrollment_confirm"),
    path("enrollments/<int:enrollment_id>/cancel/", views.enrollment_cancel, name="enrollment_cancel"),
    path("my/enrollments/", views.my_enrollments, name="my_enrollments"),
    path("my/enrollments/new/", views.my_enrollment_create, name="my_enrollment_create"),
    path("grades/", views.grade_list, name="grade_list"),
    path("grades/new/", views.grade_create, name="grade_create"),
    path("grades/<int:grade_id>/edit/", views.grade_edit, name="grade_edit"),
    path("grades/<int:grade_id>/delete/", views.grade_delete, name="grade_delete"),
    path("my/grades/", views.my_grades, name="my_grades"),
]
