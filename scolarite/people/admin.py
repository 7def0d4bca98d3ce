from django.contrib import admin
from .models import Student

@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("code_apogee", "last_name", "first_name", "email", "cin", "program", "level", "academic_year")
    list_filter = ("program", "level", "academic_year")
    search_fields = ("code_apogee", "last_name", "first_name", "email", "cin")
