from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

API_MODULES = ["invites", "customers", "products", "orders"]

urlpatterns = [
    path("", include("modules.core.urls")),
    path("admin/", admin.site.urls),
    *[path("api/v1/", include(f"modules.{module}.urls")) for module in API_MODULES],
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
