from django.urls import path
from . import views

app_name = "finance"

urlpatterns = [
    path("payments/", views.payment_list, name="payment_list"),
    path("payments/new/", views.payment_create, name="payment_create"),
    path("payments/<int:payment_id>/pay/", views.payment_pay, name="payment_pay"),
    path("payments/<int:payment_id>/cancel/", views.payment_cancel, name="payment_cancel"),
    path("payments/<int:payment_id>/receipt/", views.payment_receipt, name="payment_receipt"),
    path("my/", views.my_payments, name="my_payments"),
    path("my/new/", views.my_payment_create, name="my_payment_create"),
    path("my/<int:payment_id>/receipt/", views.my_payment_receipt, name="my_payment_receipt"),
]
