"""URL configuration for the restaurant_ops project."""

from django.contrib import admin
from django.urls import include, path

from pos.views import health_check

urlpatterns = [
    path("admin/", admin.site.urls),
    path("healthz", health_check, name="health-check"),
    path("api/", include("pos.urls")),  # DRF API
]
