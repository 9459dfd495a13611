"""Top-level draft field edits."""

from typing import Any

from proposal_desk.models.proposal import DraftProposal

FORM_FIELDS = frozenset({"bid_amount", "timeline_amount", "timeline_unit", "cover_letter"})


def edit_draft(draft: DraftProposal, **fields: Any) -> DraftProposal:
    """
    Return a new draft with the given form fields replaced.
    Milestones and attachments have their own transitions and are rejected here.
    """
    unknown = set(fields) - FORM_FIELDS
    if unknown:
        raise ValueError(f"Not a form field: {sorted(unknown)}")
    return DraftProposal(**{**dict(draft), **fields})


def empty_draft() -> DraftProposal:
    """Fresh draft for a newly opened submission dialog."""
    return DraftProposal()
