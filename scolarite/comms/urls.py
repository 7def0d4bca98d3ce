from django.urls import path
from . import views

app_name = "comms"

urlpatterns = [
    path("complaints/", views.complaint_list, name="complaint_list"),
    path("complaints/new/", views.complaint_create, name="complaint_create"),
    path("complaints/<int:complaint_id>/edit/", views.complaint_edit, name="complaint_edit"),
    path("complaints/<int:complaint_id>/treat/", views.complaint_treat, name="complaint_treat"),
    path("my/", views.my_complaints, name="my_complaints"),
    path("my/new/", views.my_complaint_create, name="my_complaint_create"),
]
