from django.contrib import admin
from .models import Complaint

@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "subject", "status", "created_at", "processed_at")
    list_filter = ("status",)
    search_fields = ("student__last_name", "student__first_name", "subject", "message")
    readonly_fields = ("processed_at",)
