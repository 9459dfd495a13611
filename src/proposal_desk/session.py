"""Proposal session: the form state of one open submission dialog."""

import logging
from datetime import date
from typing import Any, Iterable, Optional

from proposal_desk import drafting
from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import AttachmentFile, DraftProposal, Milestone
from proposal_desk.settings import SubmissionSettings
from proposal_desk.submission import ProposalSubmitter, SubmissionOutcome, SubmissionStatus
from proposal_desk.validation import ProposalValidator, ValidationResult

logger = logging.getLogger(__name__)


class ProposalSession:
    """
    Owns one DraftProposal for the lifetime of a dialog, plus the busy flag that
    keeps a second submit from starting while one is in flight.
    Every edit replaces the draft with the result of a pure transition.
    """

    def __init__(
        self,
        opportunity: Optional[Opportunity],
        submitter: ProposalSubmitter,
        *,
        settings: Optional[SubmissionSettings] = None,
    ):
        self.opportunity = opportunity
        self.draft: DraftProposal = drafting.empty_draft()
        self.validation: Optional[ValidationResult] = None
        self.last_outcome: Optional[SubmissionOutcome] = None
        self.is_open = True
        self.busy = False
        self._submitter = submitter
        self._settings = settings or SubmissionSettings()
        self._today: Optional[date] = None

    @property
    def can_submit(self) -> bool:
        """Whether the submit control should be enabled."""
        already = self.opportunity is not None and self.opportunity.has_submitted
        return self.is_open and not self.busy and not already

    # Form fields

    def edit(self, **fields: Any) -> DraftProposal:
        self.draft = drafting.edit_draft(self.draft, **fields)
        return self.draft

    # Milestones: structural changes re-run validation so errors never point at stale indices

    def add_milestone(self, milestone: Optional[Milestone] = None, *, today: Optional[date] = None) -> DraftProposal:
        return self._restructure(drafting.add_milestone(self.draft, milestone, today=today))

    def update_milestone(self, index: int, **patch: Any) -> DraftProposal:
        return self._restructure(drafting.update_milestone(self.draft, index, **patch))

    def remove_milestone(self, index: int) -> DraftProposal:
        return self._restructure(drafting.remove_milestone(self.draft, index))

    def move_milestone(self, from_index: int, to_index: int) -> DraftProposal:
        return self._restructure(drafting.move_milestone(self.draft, from_index, to_index))

    def _restructure(self, draft: DraftProposal) -> DraftProposal:
        self.draft = draft
        if self.validation is not None:
            self.validate(today=self._today)
        return self.draft

    # Attachments

    def add_attachments(self, files: Iterable[AttachmentFile]) -> DraftProposal:
        """Raises AttachmentLimitError and leaves the draft unchanged when a limit is hit."""
        self.draft = drafting.add_attachments(self.draft, files, settings=self._settings)
        return self.draft

    def remove_attachment(self, index: int) -> DraftProposal:
        self.draft = drafting.remove_attachment(self.draft, index)
        return self.draft

    # Validation and submission

    def validate(self, *, today: Optional[date] = None) -> ValidationResult:
        """Validate the current draft; the day given here is reused when edits re-validate."""
        self._today = today
        self.validation = ProposalValidator(self.opportunity).validate(self.draft, today=today)
        return self.validation

    async def submit(self, *, today: Optional[date] = None) -> SubmissionOutcome:
        """
        Submit the current draft. Refused while busy, after close, or when the
        provider already proposed on this opportunity. Busy is always cleared.
        """
        refusal = self._refusal()
        if refusal is not None:
            return refusal

        submitted_draft = self.draft
        self.busy = True
        try:
            outcome = await self._submitter.submit(submitted_draft, self.opportunity, today=today)
        finally:
            self.busy = False

        self.last_outcome = outcome
        if outcome.ok:
            if self.opportunity is not None:
                self.opportunity = self.opportunity.model_copy(
                    update={"has_submitted": True, "proposals": self.opportunity.proposals + 1}
                )
            self._clear()
            self.is_open = False
        elif self.is_open:
            self.draft = outcome.draft
            if outcome.validation is not None:
                self.validation = outcome.validation
                self._today = today
        else:
            logger.info("Submission finished after dialog closed: %s", outcome.status.value)
        return outcome

    def _refusal(self) -> Optional[SubmissionOutcome]:
        if self.busy:
            message, status = "A submission is already in progress.", SubmissionStatus.BUSY
        elif not self.is_open:
            message, status = "The proposal dialog is closed.", SubmissionStatus.REJECTED
        elif self.opportunity is not None and self.opportunity.has_submitted:
            message = "You have already submitted a proposal for this opportunity."
            status = SubmissionStatus.REJECTED
        else:
            return None
        return SubmissionOutcome(status=status, messages=[message], draft=self.draft)

    # Lifecycle

    def cancel(self) -> None:
        """Discard the draft and close the dialog."""
        self.close()

    def close(self) -> None:
        """Close the dialog; an in-flight submission still completes."""
        self._clear()
        self.is_open = False

    def _clear(self) -> None:
        self.draft = drafting.empty_draft()
        self.validation = None
