from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include(("accounts.urls", "accounts"), namespace="accounts")),
    path("people/", include(("people.urls", "people"), namespace="people")),
    path("registrar/", include(("registrar.urls", "registrar"), namespace="registrar")),
    path("finance/", include(("finance.urls", "finance"), namespace="finance")),
    path("academics/", include(("academics.urls", "academics"), namespace="academics")),
    path("comms/", include(("comms.urls", "comms"), namespace="comms")),
    path("api/", include(("api.urls", "api"), namespace="api")),
]
