"""Admin registration for users."""

from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "is_admin", "first_admin", "created_at")
    search_fields = ("email",)
    exclude = ("password",)
