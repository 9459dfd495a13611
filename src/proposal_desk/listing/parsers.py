"""Parsing utilities for opportunity records from the marketplace API."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from proposal_desk.models.opportunity import Opportunity
from proposal_desk.timeline import timeline_in_days


def parse_budget(value: Any) -> Optional[Decimal]:
    """Budget bound from JSON number or numeric string; None when absent or unparseable."""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def proposal_count(data: dict[str, Any]) -> int:
    """Proposal count from _count.proposals, falling back to proposalCount."""
    counts = data.get("_count") or {}
    value = counts.get("proposals") if isinstance(counts, dict) else None
    if not value:
        value = data.get("proposalCount")
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def opportunity_from_api(data: dict[str, Any]) -> Opportunity:
    """
    Convert a backend opportunity record to Opportunity.
    The client's timeline string ('6 weeks') also yields the day ceiling used by validation.
    """
    timeline = data.get("timeline")
    timeline = str(timeline).strip() if timeline else None
    return Opportunity(
        id=str(data.get("id") or ""),
        title=str(data.get("title") or ""),
        budget_min=parse_budget(data.get("budgetMin")),
        budget_max=parse_budget(data.get("budgetMax")),
        original_timeline=timeline,
        original_timeline_in_days=timeline_in_days(timeline),
        proposals=proposal_count(data),
        has_submitted=bool(data.get("hasProposed")),
    )
