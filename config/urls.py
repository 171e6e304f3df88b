from django.conf import settings
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView


# ---------- Health / Readiness probes -----------------------------------------

def health_check(request):
    """Liveness probe: returns 200 if the process is running."""
    return JsonResponse({"success": True, "status": "ok"})


def readiness_check(request):
    """Readiness probe: checks database and cache connectivity."""
    from django.db import DatabaseError, connection
    from django.core.cache import cache
    checks = {"db": "ok", "cache": "ok"}
    status_code = 200

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
    except DatabaseError as exc:
        checks["db"] = str(exc)
        status_code = 503

    cache.set("_readiness_probe", "1", timeout=5)
    if cache.get("_readiness_probe") != "1":
        checks["cache"] = "read-back failed"
        status_code = 503

    return JsonResponse({"success": status_code == 200, **checks}, status=status_code)


urlpatterns = [
    path("admin/", admin.site.urls),

    path("api/health", health_check, name="health-check"),
    path("api/readiness", readiness_check, name="readiness-check"),

    path("api/", include("apps.employees.urls")),
]

if getattr(settings, "ENABLE_API_DOCS", False):
    urlpatterns += [
        path("api/schema", SpectacularAPIView.as_view(), name="schema"),
        path("api/docs", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
        path("api/redoc", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    ]
