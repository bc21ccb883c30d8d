"""Admin bootstrap and login views.

Login only verifies credentials and describes the user; no token or session
is issued.
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction
from rest_framework import status
from rest_framework.views import APIView

from apps.utils import api_error, api_success

from .models import User, burn_password_check
from .serializers import AdminCredentialsSerializer, CredentialsSerializer, UserSummarySerializer


logger = logging.getLogger(__name__)

ADMIN_EXISTS = "Admin user already exists"
INVALID_CREDENTIALS = "Invalid credentials"


class UserCheckView(APIView):
    """Tell the front-end whether the admin bootstrap form should be shown."""

    def get(self, request):
        return api_success({"exists": User.objects.exists()})


class AdminBootstrapView(APIView):
    """Create the first user, as admin. Refuses once any user exists."""

    def post(self, request):
        if User.objects.exists():
            logger.warning("Admin bootstrap refused: a user already exists")
            return api_error(ADMIN_EXISTS)

        serializer = AdminCredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User(email=serializer.validated_data["email"], is_admin=True, first_admin=True)
        user.set_password(serializer.validated_data["password"])
        try:
            with transaction.atomic():
                user.save()
        except IntegrityError:
            logger.warning("Admin bootstrap lost a race with a concurrent request")
            return api_error(ADMIN_EXISTS)

        logger.info("Admin user %s created", user.email)
        return api_success(
            {"user": UserSummarySerializer(user).data},
            message="Admin user created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    def post(self, request):
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        password = serializer.validated_data["password"]

        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            burn_password_check(password)
        if user is None or not user.check_password(password):
            logger.info("Failed login attempt for %s", email)
            return api_error(INVALID_CREDENTIALS)

        return api_success(UserSummarySerializer(user).data)
