"""Brands that claims can be filed against."""

from __future__ import annotations

from django.db import models


class Brand(models.Model):
    """Read-only through the API; managed in the admin or with ``seed_brands``."""

    name = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "brands"
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
