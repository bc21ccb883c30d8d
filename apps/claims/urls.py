"""Router for claim API."""

from rest_framework import routers

from .views import ClaimViewSet


router = routers.DefaultRouter(trailing_slash=False)
router.register(r"claims", ClaimViewSet, basename="claim")
