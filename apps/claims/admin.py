"""Admin registration for claims."""

from django.contrib import admin

from .models import Claim


@admin.register(Claim)
class ClaimAdmin(admin.ModelAdmin):
    list_display = ("order_number", "name", "email", "brand", "status", "submission_date")
    list_filter = ("status", "brand")
    search_fields = ("order_number", "email", "name")
    readonly_fields = ("id", "submission_date", "updated_at")
    ordering = ("-submission_date",)
