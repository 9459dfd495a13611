"""Validation rules: each returns None when satisfied, or a Violation."""

from datetime import date
from decimal import Decimal
from typing import NamedTuple, Optional

from proposal_desk.amounts import format_grouped, format_plain, parse_amount
from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import DraftProposal, Milestone
from proposal_desk.timeline import format_timeline, parse_unit, timeline_to_days

MIN_COVER_LETTER_CHARS = 20


class Violation(NamedTuple):
    """Inline reason shown next to the field, and the line used in the summary list."""

    reason: str
    summary: str


def _same(message: str) -> Violation:
    return Violation(message, message)


def valid_bid(draft: DraftProposal) -> Optional[Decimal]:
    """Bid as Decimal when present, numeric and > 0; else None."""
    bid = parse_amount(draft.bid_amount)
    if bid is None or bid <= 0:
        return None
    return bid


def check_bid_amount(draft: DraftProposal, opp: Optional[Opportunity]) -> Optional[Violation]:
    """Bid: required, positive, and within the opportunity's budget bounds (inclusive) when known."""
    if not draft.bid_amount.strip():
        return _same("Bid amount is required.")

    bid = valid_bid(draft)
    if bid is None:
        return _same("Bid amount must be a positive number.")

    if opp is None or not opp.budget_known:
        return None
    if opp.budget_min <= bid <= opp.budget_max:
        return None

    low = f"RM {format_grouped(opp.budget_min)}"
    high = f"RM {format_grouped(opp.budget_max)}"
    return Violation(
        f"Bid amount must be between {low} and {high}.",
        f"Bid amount must be within the budget range ({low} - {high}).",
    )


def check_timeline_amount(draft: DraftProposal) -> Optional[Violation]:
    """Timeline amount: required and > 0."""
    if not draft.timeline_amount.strip():
        return _same("Timeline amount is required.")
    amount = parse_amount(draft.timeline_amount)
    if amount is None or amount <= 0:
        return _same("Timeline amount must be greater than 0.")
    return None


def check_timeline_unit(draft: DraftProposal) -> Optional[Violation]:
    """Timeline unit: required, one of day/week/month."""
    if not draft.timeline_unit.strip():
        return _same("Timeline unit is required.")
    if parse_unit(draft.timeline_unit) is None:
        return _same("Timeline unit must be one of: day, week, month.")
    return None


def check_timeline_ceiling(draft: DraftProposal, opp: Optional[Opportunity]) -> Optional[Violation]:
    """
    Proposed timeline in days must not exceed the client's timeline.
    Skipped when the ceiling is 0 (unconstrained) or the amount/unit are themselves invalid.
    """
    if opp is None or opp.original_timeline_in_days <= 0:
        return None
    unit = parse_unit(draft.timeline_unit)
    if unit is None:
        return None
    days = timeline_to_days(draft.timeline_amount, unit)
    if days <= opp.original_timeline_in_days:
        return None
    display = (
        format_timeline(opp.original_timeline)
        if opp.original_timeline
        else f"{format_plain(opp.original_timeline_in_days)} days"
    )
    return _same(f"Your timeline must be equal to or less than the company's timeline ({display}).")


def check_cover_letter(draft: DraftProposal, min_chars: int = MIN_COVER_LETTER_CHARS) -> Optional[Violation]:
    """Cover letter: at least min_chars after trimming."""
    if len(draft.cover_letter.strip()) < min_chars:
        return _same(f"Cover letter must be at least {min_chars} characters.")
    return None


def check_milestones_present(draft: DraftProposal) -> Optional[Violation]:
    """At least one milestone."""
    if not draft.milestones:
        return _same("At least one milestone is required.")
    return None


def check_milestone(milestone: Milestone, position: int, today: date) -> dict[str, Violation]:
    """
    Per-milestone field rules. position is 1-based, used in summary lines.
    Returns {field: Violation} for every failing field.
    """
    issues: dict[str, Violation] = {}
    label = f"Milestone #{position}"

    if not milestone.title.strip():
        issues["title"] = Violation("Title is required.", f"{label}: title is required.")
    if not milestone.description.strip():
        issues["description"] = Violation(
            "Description is required.", f"{label}: description is required."
        )

    amount = parse_amount(milestone.amount)
    if amount is None or amount <= 0:
        issues["amount"] = Violation("Amount must be greater than 0.", f"{label}: amount must be > 0.")

    if milestone.due_date is None:
        issues["due_date"] = Violation("Due date is required.", f"{label}: due date is required.")
    elif milestone.due_date < today:
        issues["due_date"] = Violation(
            "Due date cannot be in the past.", f"{label}: due date cannot be in the past."
        )
    return issues


def milestone_total(draft: DraftProposal) -> Decimal:
    """Sum of numeric milestone amounts; non-numeric amounts are skipped."""
    total = Decimal(0)
    for m in draft.milestones:
        amount = parse_amount(m.amount)
        if amount is not None:
            total += amount
    return total


def check_milestone_total(draft: DraftProposal) -> Optional[Violation]:
    """
    Milestone amounts must sum exactly to the bid (Decimal equality, no tolerance).
    Only checked when the bid itself is valid.
    """
    bid = valid_bid(draft)
    if bid is None:
        return None
    total = milestone_total(draft)
    if total == bid:
        return None
    return _same(
        f"Total of milestones (RM {format_plain(total)}) must equal "
        f"your bid amount (RM {format_plain(bid)})."
    )
