"""Proposal validator: runs every rule and collects all violations (never fail-fast)."""

from datetime import date
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import DraftProposal

from .rules import (
    MIN_COVER_LETTER_CHARS,
    Violation,
    check_bid_amount,
    check_cover_letter,
    check_milestone,
    check_milestone_total,
    check_milestones_present,
    check_timeline_amount,
    check_timeline_ceiling,
    check_timeline_unit,
)

VALIDATED_FIELDS = ("bid_amount", "timeline_amount", "timeline_unit", "timeline", "cover_letter", "milestones")


class FieldOk(BaseModel):
    """Field passed every rule."""

    status: Literal["ok"] = "ok"


class FieldError(BaseModel):
    """Field failed a rule; reason is the inline message."""

    status: Literal["error"] = "error"
    reason: str


FieldCheck = Annotated[Union[FieldOk, FieldError], Field(discriminator="status")]


class MilestoneErrors(BaseModel):
    """Errors for one milestone, keyed by its stable id rather than its position."""

    milestone_id: str
    index: int = Field(..., description="Position at validation time (0-based)")
    errors: dict[str, str] = Field(default_factory=dict, description="field -> inline message")


class ValidationResult(BaseModel):
    """Field-level checks, per-milestone error bags, and the flat summary list."""

    field_errors: dict[str, FieldCheck] = Field(default_factory=dict)
    milestone_errors: dict[str, MilestoneErrors] = Field(default_factory=dict)
    messages: list[str] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.messages

    def error_for(self, field: str) -> Optional[str]:
        """Inline message for a form field, or None when it passed."""
        check = self.field_errors.get(field)
        if isinstance(check, FieldError):
            return check.reason
        return None

    def errors_by_index(self) -> dict[int, dict[str, str]]:
        """Milestone errors keyed by list position, for rendering next to each row."""
        return {e.index: dict(e.errors) for e in self.milestone_errors.values()}


class ProposalValidator:
    """
    Validates a draft against an opportunity's budget and timeline constraints.
    Pure: the draft is never mutated and repeated calls give identical results.
    """

    def __init__(
        self,
        opportunity: Optional[Opportunity] = None,
        *,
        min_cover_letter_chars: int = MIN_COVER_LETTER_CHARS,
    ):
        self.opportunity = opportunity
        self.min_cover_letter_chars = min_cover_letter_chars

    def validate(self, draft: DraftProposal, *, today: Optional[date] = None) -> ValidationResult:
        """Apply all rules and return the collected result."""
        today = today or date.today()
        opp = self.opportunity
        fields: dict[str, Optional[Violation]] = {
            "bid_amount": check_bid_amount(draft, opp),
            "timeline_amount": check_timeline_amount(draft),
            "timeline_unit": check_timeline_unit(draft),
            "timeline": check_timeline_ceiling(draft, opp),
            "cover_letter": check_cover_letter(draft, self.min_cover_letter_chars),
            "milestones": check_milestones_present(draft),
        }
        messages = [v.summary for v in fields.values() if v is not None]

        milestone_errors: dict[str, MilestoneErrors] = {}
        for index, milestone in enumerate(draft.milestones):
            issues = check_milestone(milestone, index + 1, today)
            if not issues:
                continue
            milestone_errors[milestone.id] = MilestoneErrors(
                milestone_id=milestone.id,
                index=index,
                errors={name: v.reason for name, v in issues.items()},
            )
            messages.extend(v.summary for v in issues.values())

        total = check_milestone_total(draft)
        if total is not None:
            messages.append(total.summary)
            if fields["milestones"] is None:
                fields["milestones"] = total

        return ValidationResult(
            field_errors={
                name: FieldOk() if v is None else FieldError(reason=v.reason)
                for name, v in fields.items()
            },
            milestone_errors=milestone_errors,
            messages=messages,
        )


def validate(
    draft: DraftProposal,
    opportunity: Optional[Opportunity] = None,
    *,
    today: Optional[date] = None,
    min_cover_letter_chars: int = MIN_COVER_LETTER_CHARS,
) -> ValidationResult:
    """Validate a draft against an opportunity; see ProposalValidator."""
    validator = ProposalValidator(opportunity, min_cover_letter_chars=min_cover_letter_chars)
    return validator.validate(draft, today=today)
