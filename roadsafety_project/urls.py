from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView


def healthcheck(_request):
    """Simple readiness/liveness probe used by deployment."""
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("admin/", admin.site.urls),
    # Raw accident records (storage collaborator)
    path("api/accidents/", include("accidents.urls")),
    # Risk classification / dashboard analytics
    path("api/risk/", include("risk.urls")),
    # OpenAPI schema
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    # Healthcheck
    path("health/", healthcheck, name="healthcheck"),
]
