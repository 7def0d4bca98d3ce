from django.contrib import admin

from core.exceptions import IllegalTransition
from .models import Payment
from . import services

@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "payment_type", "amount", "status", "created_at", "paid_at")
    list_filter = ("status", "payment_type")
    search_fields = ("student__last_name", "student__first_name", "student__email")

    actions = ["mark_paid"]

    def mark_paid(self, request, queryset):
        done = 0
        for payment in queryset:
            try:
                services.pay_payment(payment)
                done += 1
            except IllegalTransition:
                continue
        self.message_user(request, f"{done} paiement(s) marqué(s) comme payé(s).")
    mark_paid.short_description = "Marquer les paiements sélectionnés comme payés"
