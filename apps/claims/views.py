"""ViewSets for warranty claims."""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from rest_framework import status, viewsets
from rest_framework.decorators import action

from apps.utils import api_error, api_success

from .dashboard import DashboardState, load_claims, set_sort_order, set_status_filter, visible_claims
from .filters import ClaimFilter
from .models import Claim, ClaimStatus
from .notifications import NotificationError, send_claim_status_update_email, send_claim_submission_email
from .serializers import ClaimSerializer, is_acknowledged, missing_claim_fields


logger = logging.getLogger(__name__)


class ClaimViewSet(viewsets.GenericViewSet):
    """Claim submission, lookup and status changes."""

    queryset = Claim.objects.select_related("brand")
    serializer_class = ClaimSerializer
    filterset_class = ClaimFilter
    pagination_class = None

    def list(self, request):
        """List claims; customers track theirs with ``orderNumber`` and ``email`` together."""
        tracking = [request.query_params.get(key) for key in ("orderNumber", "email")]
        if any(tracking) and not all(tracking):
            return api_error("orderNumber and email must be given together")

        claims = self.filter_queryset(self.get_queryset())
        return api_success(ClaimSerializer(claims, many=True).data)

    def retrieve(self, request, pk=None):
        claim = self._get_claim(pk)
        if claim is None:
            return api_error("Claim not found", status_code=status.HTTP_404_NOT_FOUND)
        return api_success(ClaimSerializer(claim).data)

    def create(self, request):
        """Submit a new claim. Its status always starts as Pending."""
        data = request.data
        if not hasattr(data, "get"):
            return api_error("Request body must be a JSON object")

        missing = missing_claim_fields(data)
        if missing:
            return api_error("Missing required fields", {"missingFields": missing})
        if not is_acknowledged(data.get("notificationAcknowledged")):
            return api_error("You must acknowledge the notification before submitting a claim")

        serializer = ClaimSerializer(data=data)
        serializer.is_valid(raise_exception=True)

        try:
            with transaction.atomic():
                claim = serializer.save(status=ClaimStatus.PENDING)
        except IntegrityError as exc:
            if "order_number" in str(exc):
                logger.info("Rejected duplicate claim for order %s", serializer.validated_data["order_number"])
                return api_error("A claim with this order number already exists")
            return self._failure("Failed to submit claim", exc)
        except DatabaseError as exc:
            return self._failure("Failed to submit claim", exc)

        logger.info("Claim %s created for order %s", claim.id, claim.order_number)

        try:
            send_claim_submission_email(claim)
        except NotificationError as exc:
            return self._failure("Failed to submit claim", exc)

        return api_success(ClaimSerializer(claim).data, status_code=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        """Move a claim to another status and email the customer."""
        new_status = request.data.get("status") if hasattr(request.data, "get") else None
        if new_status not in ClaimStatus.values:
            return api_error("Invalid status", {"allowed": list(ClaimStatus.values)})

        claim = self._get_claim(pk)
        if claim is None:
            return api_error("Claim not found", status_code=status.HTTP_404_NOT_FOUND)

        previous_status = claim.status
        claim.status = new_status
        try:
            claim.save(update_fields=["status", "updated_at"])
        except DatabaseError as exc:
            return self._failure("Failed to update claim", exc)

        logger.info("Claim %s status changed: %s -> %s", claim.id, previous_status, new_status)

        try:
            send_claim_status_update_email(claim)
        except NotificationError as exc:
            return self._failure("Failed to update claim", exc)

        return api_success(ClaimSerializer(claim).data)

    @action(detail=False, methods=["get"], url_path="dashboard")
    def dashboard(self, request):
        """Claims as the admin dashboard shows them: filtered by status, sorted by date."""
        state = load_claims(DashboardState(), ClaimSerializer(self.get_queryset(), many=True).data)
        try:
            state = set_status_filter(state, request.query_params.get("status", state.status_filter))
            state = set_sort_order(state, request.query_params.get("sort", state.sort_order))
        except ValueError as exc:
            return api_error(str(exc))

        return api_success(
            {
                "statusFilter": state.status_filter,
                "sortOrder": state.sort_order,
                "claims": visible_claims(state),
            }
        )

    def _get_claim(self, pk):
        try:
            return self.get_queryset().get(pk=pk)
        except (Claim.DoesNotExist, DjangoValidationError):
            return None

    def _failure(self, message, exc):
        logger.exception("%s: %s", message, exc)
        return api_error(
            message,
            {"details": str(exc)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
