"""
URL configuration for pinemarketBackend project.

Every API route lives under ``/api/``.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from marketplace.api.views.prometheus_metrics import prometheus_metrics

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Prometheus metrics endpoint
    path("api/metrics/", prometheus_metrics, name="prometheus-metrics"),
    # API endpoints
    path("api/auth/", include("authentication.api.urls.auth_urls")),
    path("api/addresses/", include("authentication.api.urls.address_urls")),
    path("api/", include("marketplace.urls")),
]
