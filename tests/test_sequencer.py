"""Tests for the milestone sequencer and draft form edits."""

import random
from datetime import date

import pytest

from proposal_desk.drafting import (
    add_milestone,
    edit_draft,
    move_milestone,
    remove_milestone,
    resequence,
    update_milestone,
)
from proposal_desk.models.proposal import DraftProposal, Milestone

from conftest import TODAY, make_milestone


def _sequences(draft: DraftProposal) -> list[int]:
    return [m.sequence for m in draft.milestones]


def _titles(draft: DraftProposal) -> list[str]:
    return [m.title for m in draft.milestones]


def _draft_with(*titles: str) -> DraftProposal:
    draft = DraftProposal()
    for title in titles:
        draft = add_milestone(draft, make_milestone(title=title))
    return draft


class TestResequence:
    """Tests for resequence."""

    def test_renumbers_by_position(self) -> None:
        """Sequence follows list position, not the old value."""
        items = [Milestone(sequence=7), Milestone(sequence=3), Milestone(sequence=3)]
        assert [m.sequence for m in resequence(items)] == [1, 2, 3]

    def test_keeps_identity(self) -> None:
        """Ids survive renumbering."""
        items = [Milestone(title="a"), Milestone(title="b")]
        out = resequence(items)
        assert [m.id for m in out] == [m.id for m in items]

    def test_empty(self) -> None:
        assert resequence([]) == []


class TestAddMilestone:
    """Tests for adding milestones."""

    def test_appends_and_numbers(self) -> None:
        """New milestones go to the end and are numbered from 1."""
        draft = _draft_with("Design", "Build", "Launch")
        assert _titles(draft) == ["Design", "Build", "Launch"]
        assert _sequences(draft) == [1, 2, 3]

    def test_blank_milestone_due_today(self) -> None:
        """With no milestone given, a blank one due today is added."""
        draft = add_milestone(DraftProposal(), today=TODAY)
        assert len(draft.milestones) == 1
        m = draft.milestones[0]
        assert m.sequence == 1
        assert m.title == ""
        assert m.due_date == TODAY

    def test_blank_milestone_defaults_to_real_today(self) -> None:
        draft = add_milestone(DraftProposal())
        assert draft.milestones[0].due_date == date.today()

    def test_does_not_mutate_input(self) -> None:
        """The original draft is left untouched."""
        original = _draft_with("Design")
        add_milestone(original, make_milestone(title="Build"))
        assert _titles(original) == ["Design"]


class TestUpdateMilestone:
    """Tests for patching a milestone in place."""

    def test_patches_fields(self) -> None:
        """Only the named fields change; id and order are kept."""
        draft = _draft_with("Design", "Build")
        updated = update_milestone(draft, 1, title="Build v2", amount=750)
        assert _titles(updated) == ["Design", "Build v2"]
        assert updated.milestones[1].amount == "750"
        assert updated.milestones[1].id == draft.milestones[1].id
        assert _sequences(updated) == [1, 2]

    def test_sequence_not_editable(self) -> None:
        """Sequence is managed by the sequencer."""
        draft = _draft_with("Design")
        with pytest.raises(ValueError, match="sequence"):
            update_milestone(draft, 0, sequence=5)

    def test_id_not_editable(self) -> None:
        draft = _draft_with("Design")
        with pytest.raises(ValueError):
            update_milestone(draft, 0, id="other")

    def test_bad_index(self) -> None:
        with pytest.raises(IndexError):
            update_milestone(_draft_with("Design"), 3, title="x")


class TestRemoveMilestone:
    """Tests for removing milestones."""

    def test_closes_gap(self) -> None:
        """Later milestones move up one number."""
        draft = remove_milestone(_draft_with("Design", "Build", "Launch"), 1)
        assert _titles(draft) == ["Design", "Launch"]
        assert _sequences(draft) == [1, 2]

    def test_remove_last_leaves_empty(self) -> None:
        assert remove_milestone(_draft_with("Design"), 0).milestones == []

    def test_bad_index(self) -> None:
        with pytest.raises(IndexError):
            remove_milestone(DraftProposal(), 0)


class TestMoveMilestone:
    """Tests for reordering milestones."""

    def test_reorders_and_renumbers(self) -> None:
        """Moving the last to the front renumbers all three."""
        draft = move_milestone(_draft_with("Design", "Build", "Launch"), 2, 0)
        assert _titles(draft) == ["Launch", "Design", "Build"]
        assert _sequences(draft) == [1, 2, 3]

    def test_bad_index(self) -> None:
        with pytest.raises(IndexError):
            move_milestone(_draft_with("Design"), 0, 1)


class TestSequencingInvariant:
    """Sequence numbers stay dense under edits."""

    def test_random_operations_keep_sequences_dense(self) -> None:
        """After any mix of add/update/remove/move, sequence == position + 1."""
        rng = random.Random(20260301)
        draft = DraftProposal()
        for step in range(300):
            n = len(draft.milestones)
            op = rng.choice(["add", "add", "update", "remove", "move"])
            if op == "add" or n == 0:
                draft = add_milestone(draft, make_milestone(title=f"m{step}"))
            elif op == "update":
                draft = update_milestone(draft, rng.randrange(n), title=f"u{step}")
            elif op == "remove":
                draft = remove_milestone(draft, rng.randrange(n))
            else:
                draft = move_milestone(draft, rng.randrange(n), rng.randrange(n))
            assert _sequences(draft) == list(range(1, len(draft.milestones) + 1))


class TestEditDraft:
    """Tests for edit_draft."""

    def test_replaces_form_fields(self) -> None:
        """Scalar form fields are replaced, numbers stored as text."""
        draft = edit_draft(DraftProposal(), bid_amount=1500, timeline_unit="week", cover_letter="Hi")
        assert draft.bid_amount == "1500"
        assert draft.timeline_unit == "week"
        assert draft.cover_letter == "Hi"

    def test_keeps_milestones(self) -> None:
        draft = edit_draft(_draft_with("Design"), bid_amount="10")
        assert _titles(draft) == ["Design"]

    def test_rejects_structural_fields(self) -> None:
        """Milestones and attachments have their own operations."""
        with pytest.raises(ValueError):
            edit_draft(DraftProposal(), milestones=[])
