from django.contrib import admin
from .models import Enrollment, Grade

@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "enrollment_type", "academic_year", "status", "created_at", "decided_at", "processed_by")
    list_filter = ("status", "enrollment_type", "academic_year")
    search_fields = ("student__last_name", "student__first_name", "academic_year")

@admin.register(Grade)
class GradeAdmin(admin.ModelAdmin):
    list_display = ("student", "module", "value")
    list_filter = ("module",)
    search_fields = ("student__last_name", "student__first_name", "module")
