from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from .models import User

@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    fieldsets = (
        *DjangoUserAdmin.fieldsets,
        ("Rôles", {"fields": ("is_school_admin", "is_student")}),
    )
    list_display = ("username", "email", "is_school_admin", "is_student", "apogee", "is_staff")
    list_filter = ("is_school_admin", "is_student", "is_staff", "is_superuser")
    search_fields = ("username", "email", "first_name", "last_name", "student__code_apogee", "student__cin")

    @admin.display(description="Code Apogée")
    def apogee(self, obj):
        student = getattr(obj, "student", None)
        return student.code_apogee if student else "-"
