"""Email notifications sent to customers about their claims."""

from __future__ import annotations

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import BadHeaderError, send_mail
from django.template.loader import render_to_string

from .models import Claim


logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a claim email could not be delivered."""


def send_claim_submission_email(claim: Claim) -> None:
    _send(
        claim,
        subject=f"We received your warranty claim for order {claim.order_number}",
        template="claims/emails/submission.txt",
    )


def send_claim_status_update_email(claim: Claim) -> None:
    _send(
        claim,
        subject=f"Your warranty claim for order {claim.order_number} is now {claim.status}",
        template="claims/emails/status_update.txt",
    )


def _send(claim: Claim, subject: str, template: str) -> None:
    body = render_to_string(
        template,
        {
            "claim": claim,
            "brand_name": claim.brand.name,
            "sender_name": settings.DEFAULT_FROM_NAME,
        },
    )
    try:
        send_mail(
            subject,
            body,
            settings.DEFAULT_FROM_EMAIL,
            [claim.email],
            fail_silently=False,
        )
    except (SMTPException, BadHeaderError, OSError) as exc:
        raise NotificationError(f"Could not send email to {claim.email}: {exc}") from exc
    logger.info("Sent '%s' to %s for claim %s", template, claim.email, claim.id)
