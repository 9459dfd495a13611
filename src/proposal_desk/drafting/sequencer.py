"""Milestone sequencer: structural edits that keep sequence numbers dense (1..N)."""

from datetime import date
from typing import Any, Optional

from proposal_desk.models.proposal import DraftProposal, Milestone

# Fields a caller may patch; sequence and id are derived/stable
EDITABLE_FIELDS = frozenset({"title", "description", "amount", "due_date"})


def resequence(milestones: list[Milestone]) -> list[Milestone]:
    """Return milestones renumbered 1..N by list position."""
    return [
        m if m.sequence == i + 1 else m.model_copy(update={"sequence": i + 1})
        for i, m in enumerate(milestones)
    ]


def _with_milestones(draft: DraftProposal, milestones: list[Milestone]) -> DraftProposal:
    return draft.model_copy(update={"milestones": resequence(milestones)})


def _check_index(draft: DraftProposal, index: int) -> None:
    if not 0 <= index < len(draft.milestones):
        raise IndexError(f"Milestone index {index} out of range (have {len(draft.milestones)})")


def add_milestone(
    draft: DraftProposal,
    milestone: Optional[Milestone] = None,
    *,
    today: Optional[date] = None,
) -> DraftProposal:
    """
    Append a milestone and renumber.
    Without an explicit milestone, appends a blank one due today.
    """
    if milestone is None:
        milestone = Milestone(due_date=today or date.today())
    return _with_milestones(draft, [*draft.milestones, milestone])


def update_milestone(draft: DraftProposal, index: int, **patch: Any) -> DraftProposal:
    """Apply a field patch to the milestone at index, then renumber."""
    _check_index(draft, index)
    locked = set(patch) - EDITABLE_FIELDS
    if locked:
        raise ValueError(f"Cannot edit milestone field(s): {sorted(locked)}")
    milestones = list(draft.milestones)
    current = milestones[index]
    milestones[index] = Milestone(**{**dict(current), **patch})
    return _with_milestones(draft, milestones)


def remove_milestone(draft: DraftProposal, index: int) -> DraftProposal:
    """Delete the milestone at index and close the sequence gap."""
    _check_index(draft, index)
    milestones = [m for i, m in enumerate(draft.milestones) if i != index]
    return _with_milestones(draft, milestones)


def move_milestone(draft: DraftProposal, from_index: int, to_index: int) -> DraftProposal:
    """Reorder: move one milestone to a new position, then renumber."""
    _check_index(draft, from_index)
    _check_index(draft, to_index)
    milestones = list(draft.milestones)
    milestones.insert(to_index, milestones.pop(from_index))
    return _with_milestones(draft, milestones)
