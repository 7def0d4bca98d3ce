from django.urls import path
from . import views

app_name = "registrar"

urlpatterns = [
    path("requests/", views.request_list, name="request_list"),
    path("requests/new/", views.request_create, name="request_create"),
    path("requests/<int:request_id>/approve/", views.request_approve, name="request_approve"),
    path("requests/<int:request_id>/reject/", views.request_reject, name="request_reject"),
    path("requests/<int:request_id>/pdf/", views.request_pdf, name="request_pdf"),
    path("my/", views.my_requests, name="my_requests"),
    path("my/new/", views.my_request_create, name="my_request_create"),
    path("my/<int:request_id>/pdf/", views.my_request_pdf, name="my_request_pdf"),
]
