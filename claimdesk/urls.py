"""Root URLconf for claimdesk."""

from django.contrib import admin
from django.urls import include, path, re_path
from rest_framework import routers

from apps.brands.urls import router as brands_router
from apps.claims.urls import router as claims_router
from apps.utils.views import spa_shell


router = routers.DefaultRouter(trailing_slash=False)
router.registry.extend(brands_router.registry)
router.registry.extend(claims_router.registry)

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path("api/", include("apps.users.urls")),
    path("api/", include(router.urls)),
    # Everything else belongs to the dashboard's client-side router.
    re_path(r"^(?!api/|django-admin/|static/)(?P<path>.*)$", spa_shell, name="spa-shell"),
]
