"""Serializers for warranty claims.

The API speaks the camelCase field names the dashboard uses; each one is
mapped onto the snake_case model field through ``source``.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Claim


# Required on submission, in the order they are reported when missing.
REQUIRED_CLAIM_FIELDS = (
    "orderNumber",
    "email",
    "name",
    "address",
    "phoneNumber",
    "brand",
    "problemDescription",
    "notificationAcknowledged",
)


class ClaimSerializer(serializers.ModelSerializer):
    orderNumber = serializers.CharField(source="order_number", max_length=100)
    phoneNumber = serializers.CharField(source="phone_number", max_length=50)
    problemDescription = serializers.CharField(source="problem_description")
    notificationAcknowledged = serializers.BooleanField(source="notification_acknowledged")
    brandName = serializers.CharField(source="brand.name", read_only=True)
    submissionDate = serializers.DateTimeField(source="submission_date", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Claim
        fields = [
            "id",
            "orderNumber",
            "email",
            "name",
            "address",
            "phoneNumber",
            "brand",
            "brandName",
            "problemDescription",
            "notificationAcknowledged",
            "status",
            "submissionDate",
            "updatedAt",
        ]
        read_only_fields = ["id", "status"]

    def validate_notificationAcknowledged(self, value):
        if not value:
            raise serializers.ValidationError("The brand notification must be acknowledged.")
        return value


def missing_claim_fields(data) -> list[str]:
    """Names from ``REQUIRED_CLAIM_FIELDS`` that are absent, null or blank."""
    missing = []
    for field in REQUIRED_CLAIM_FIELDS:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing


def is_acknowledged(value) -> bool:
    """Truthiness of ``notificationAcknowledged`` as the boolean field reads it."""
    if isinstance(value, (str, int, bool)):
        return value in serializers.BooleanField.TRUE_VALUES
    return False
