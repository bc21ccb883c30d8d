"""Query-string filters for the claim list."""

import django_filters

from .models import Claim, ClaimStatus


class ClaimFilter(django_filters.FilterSet):
    orderNumber = django_filters.CharFilter(field_name="order_number")
    email = django_filters.CharFilter(field_name="email")
    status = django_filters.ChoiceFilter(choices=ClaimStatus.choices)
    ordering = django_filters.OrderingFilter(fields=(("submission_date", "submissionDate"),))

    class Meta:
        model = Claim
        fields = ["email", "status"]
