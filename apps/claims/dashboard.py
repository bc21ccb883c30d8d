"""State of the admin claims dashboard.

The dashboard keeps the loaded claim list, a status filter and a sort order
over the submission date. Every change goes through a pure function that
takes the current ``DashboardState`` and returns a new one, so the list view
can be rebuilt (and tested) without a browser. ``reduce`` applies the same
transitions from ``(action, payload)`` pairs.

Claims are mappings in the API's JSON shape (``id``, ``status``,
``submissionDate`` ...). Changing a claim's status here only patches the
local row: the notification email is sent by the server when the status
update request succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from django.utils.dateparse import parse_datetime

from .models import ClaimStatus


STATUS_FILTER_ALL = "All"
SORT_ASC = "asc"
SORT_DESC = "desc"

LOAD_CLAIMS = "load_claims"
SET_STATUS_FILTER = "set_status_filter"
TOGGLE_SORT_ORDER = "toggle_sort_order"
STATUS_UPDATED = "status_updated"


@dataclass(frozen=True)
class DashboardState:
    claims: tuple[Mapping[str, Any], ...] = ()
    status_filter: str = STATUS_FILTER_ALL
    sort_order: str = SORT_DESC


def load_claims(state: DashboardState, claims: Iterable[Mapping[str, Any]]) -> DashboardState:
    return replace(state, claims=tuple(claims))


def set_status_filter(state: DashboardState, status_filter: str) -> DashboardState:
    if status_filter != STATUS_FILTER_ALL and status_filter not in ClaimStatus.values:
        raise ValueError(f"Unknown status filter: {status_filter!r}")
    return replace(state, status_filter=status_filter)


def set_sort_order(state: DashboardState, sort_order: str) -> DashboardState:
    if sort_order not in (SORT_ASC, SORT_DESC):
        raise ValueError(f"Unknown sort order: {sort_order!r}")
    return replace(state, sort_order=sort_order)


def toggle_sort_order(state: DashboardState) -> DashboardState:
    return replace(state, sort_order=SORT_DESC if state.sort_order == SORT_ASC else SORT_ASC)


def apply_status_update(state: DashboardState, claim_id: Any, new_status: str) -> DashboardState:
    """Patch the status of one row after the server accepted the update."""
    if new_status not in ClaimStatus.values:
        raise ValueError(f"Unknown claim status: {new_status!r}")
    claim_id = str(claim_id)
    claims = tuple(
        {**claim, "status": new_status} if str(claim.get("id")) == claim_id else claim
        for claim in state.claims
    )
    return replace(state, claims=claims)


def visible_claims(state: DashboardState) -> list[Mapping[str, Any]]:
    """Claims matching the status filter, ordered by submission date."""
    rows = list(state.claims)
    if state.status_filter != STATUS_FILTER_ALL:
        rows = [claim for claim in rows if claim.get("status") == state.status_filter]
    rows.sort(key=_submission_timestamp, reverse=state.sort_order == SORT_DESC)
    return rows


def reduce(state: DashboardState, action: tuple[str, Any]) -> DashboardState:
    kind, payload = action
    if kind == LOAD_CLAIMS:
        return load_claims(state, payload)
    if kind == SET_STATUS_FILTER:
        return set_status_filter(state, payload)
    if kind == TOGGLE_SORT_ORDER:
        return toggle_sort_order(state)
    if kind == STATUS_UPDATED:
        claim_id, new_status = payload
        return apply_status_update(state, claim_id, new_status)
    raise ValueError(f"Unknown dashboard action: {kind!r}")


def _submission_timestamp(claim: Mapping[str, Any]) -> float:
    value = claim.get("submissionDate")
    if isinstance(value, str):
        value = parse_datetime(value)
    if not isinstance(value, datetime):
        raise ValueError(f"Claim {claim.get('id')} has no valid submissionDate")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()
