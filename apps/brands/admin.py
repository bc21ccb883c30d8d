"""Admin registration for brands."""

from django.contrib import admin

from .models import Brand


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ("name", "claim_count", "created_at")
    search_fields = ("name",)

    @admin.display(description="Claims")
    def claim_count(self, obj):
        return obj.claims.count()
