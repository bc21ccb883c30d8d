"""Warranty claims submitted by customers."""

from __future__ import annotations

import uuid

from django.db import models


class ClaimStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    IN_PROGRESS = "In Progress", "In Progress"
    RESOLVED = "Resolved", "Resolved"
    REJECTED = "Rejected", "Rejected"


class Claim(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.CharField(max_length=100, unique=True)
    email = models.EmailField()
    name = models.CharField(max_length=255)
    address = models.TextField()
    phone_number = models.CharField(max_length=50)
    brand = models.ForeignKey("brands.Brand", on_delete=models.PROTECT, related_name="claims")
    problem_description = models.TextField()
    notification_acknowledged = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=ClaimStatus.choices, default=ClaimStatus.PENDING, db_index=True)
    submission_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "claims"
        ordering = ["-submission_date"]
        indexes = [models.Index(fields=["order_number", "email"], name="claims_order_email_idx")]

    def __str__(self) -> str:
        return f"Claim {self.order_number} ({self.status})"
