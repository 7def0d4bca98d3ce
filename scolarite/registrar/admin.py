from django.contrib import admin

from core.exceptions import IllegalTransition
from .models import DocumentRequest
from . import services

@admin.register(DocumentRequest)
class DocumentRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "document_type", "status", "created_at", "processed_at", "processed_by")
    list_filter = ("status", "document_type")
    search_fields = ("student__last_name", "student__first_name", "student__email")
    readonly_fields = ("processed_at", "processed_by")

    actions = ["approve_selected", "reject_selected"]

    def _decide(self, request, queryset, fn):
        done = 0
        for req in queryset:
            try:
                fn(req, request.user)
                done += 1
            except IllegalTransition:
                continue
        self.message_user(request, f"{done} demande(s) traitée(s).")

    def approve_selected(self, request, queryset):
        self._decide(request, queryset, services.approve_request)
    approve_selected.short_description = "Approuver les demandes en attente sélectionnées"

    def reject_selected(self, request, queryset):
        self._decide(request, queryset, services.reject_request)
    reject_selected.short_description = "Rejeter les demandes en attente sélectionnées"
