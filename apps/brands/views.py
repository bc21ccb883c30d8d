"""Read-only brand endpoint."""

from rest_framework import mixins, viewsets

from .models import Brand
from .serializers import BrandSerializer


class BrandViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """List every brand a claim can reference, ordered by name."""

    queryset = Brand.objects.all()
    serializer_class = BrandSerializer
    pagination_class = None
