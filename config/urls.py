"""
Root URL configuration.

    - /password-reset/...  → password reset API (accounts.urls)
    - /schema/             → OpenAPI schema (drf-spectacular)
    - /schema/docs/        → Swagger UI
    - /admin/              → Django admin
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("accounts.urls")),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "schema/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
