"""Serializers for admin bootstrap and login."""

from __future__ import annotations

from rest_framework import serializers

from .models import MAX_PASSWORD_BYTES, User


class CredentialsSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False, write_only=True)

    def validate_email(self, value):
        return value.strip().lower()


class AdminCredentialsSerializer(CredentialsSerializer):
    def validate_password(self, value):
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise serializers.ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
            )
        return value


class UserSummarySerializer(serializers.ModelSerializer):
    isAdmin = serializers.BooleanField(source="is_admin", read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "isAdmin"]
        read_only_fields = fields
