"""Submitter: validate, check preconditions, package, and send a draft proposal.

Protocol, in order:
1. Validate the draft; any message aborts before the network is touched.
2. Require the opportunity being proposed against.
3. Check attachment count and sizes.
4. Normalize milestones and timeline, build the payload.
5. Call the submission endpoint once (no automatic retry).
6. On success publish ProposalSubmitted and hand back an empty draft;
   on failure hand back the original draft so the user can retry.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from proposal_desk.drafting.attachments import check_attachments
from proposal_desk.drafting.form import empty_draft
from proposal_desk.errors import SubmissionError
from proposal_desk.events import EventBus, ProposalSubmitted
from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import DraftProposal
from proposal_desk.settings import SubmissionSettings
from proposal_desk.validation import ProposalValidator, ValidationResult

from .client import ProposalClient, SubmissionResponse
from .payload import build_payload

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to submit proposal"
MISSING_OPPORTUNITY_MESSAGE = "Invalid project data"


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    INVALID = "invalid"  # validation failed; nothing sent
    REJECTED = "rejected"  # precondition failed; nothing sent
    FAILED = "failed"  # endpoint error or unexpected exception
    BUSY = "busy"  # another submission is in flight


class SubmissionOutcome(BaseModel):
    """Result of one submit attempt, plus the draft the session should keep."""

    status: SubmissionStatus
    messages: list[str] = Field(default_factory=list)
    draft: DraftProposal
    validation: Optional[ValidationResult] = None
    response: Optional[SubmissionResponse] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.SUBMITTED

    def summary(self) -> str:
        """Messages as one bulleted block, suitable for a toast."""
        if len(self.messages) == 1:
            return self.messages[0]
        return "\n".join(f"• {m}" for m in self.messages)


class ProposalSubmitter:
    """Orchestrates submission of one draft; holds no per-draft state."""

    def __init__(
        self,
        client: ProposalClient,
        *,
        settings: Optional[SubmissionSettings] = None,
        events: Optional[EventBus] = None,
    ):
        self._client = client
        self._settings = settings or SubmissionSettings()
        self._events = events

    async def submit(
        self,
        draft: DraftProposal,
        opportunity: Optional[Opportunity],
        *,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> SubmissionOutcome:
        validation = ProposalValidator(opportunity).validate(draft, today=today)
        if not validation.is_clean:
            logger.info("Proposal not sent: %d validation problem(s)", len(validation.messages))
            return SubmissionOutcome(
                status=SubmissionStatus.INVALID,
                messages=list(validation.messages),
                draft=draft,
                validation=validation,
            )

        if opportunity is None:
            logger.warning("Proposal not sent: no opportunity selected")
            return self._rejected(draft, MISSING_OPPORTUNITY_MESSAGE, validation)

        attachment_problem = check_attachments(draft.attachments, settings=self._settings)
        if attachment_problem:
            logger.warning("Proposal for %s not sent: %s", opportunity.id, attachment_problem)
            return self._rejected(draft, attachment_problem, validation)

        try:
            payload = build_payload(draft, opportunity, now=now)
            response = await self._client.submit_proposal(payload)
        except SubmissionError as e:
            logger.warning("Proposal submission for %s failed: %s", opportunity.id, e.message)
            return self._failed(draft, e.message or DEFAULT_FAILURE_MESSAGE, validation)
        except httpx.HTTPError as e:
            logger.warning("Proposal submission for %s failed: %s", opportunity.id, e)
            return self._failed(draft, str(e) or DEFAULT_FAILURE_MESSAGE, validation)
        except Exception as e:
            logger.exception("Unexpected error submitting proposal for %s", opportunity.id)
            return self._failed(draft, str(e) or DEFAULT_FAILURE_MESSAGE, validation)

        if not response.success:
            message = response.message or DEFAULT_FAILURE_MESSAGE
            logger.warning("Proposal for %s rejected by server: %s", opportunity.id, message)
            return SubmissionOutcome(
                status=SubmissionStatus.FAILED,
                messages=[message],
                draft=draft,
                validation=validation,
                response=response,
            )

        logger.info("Proposal submitted for %s (bid %s)", opportunity.id, payload.bid_amount)
        if self._events is not None:
            self._events.publish(
                ProposalSubmitted(opportunity_id=opportunity.id, bid_amount=payload.bid_amount)
            )
        return SubmissionOutcome(
            status=SubmissionStatus.SUBMITTED,
            messages=[response.message or "Proposal submitted successfully!"],
            draft=empty_draft(),
            validation=validation,
            response=response,
        )

    @staticmethod
    def _rejected(draft: DraftProposal, message: str, validation: ValidationResult) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=SubmissionStatus.REJECTED,
            messages=[message],
            draft=draft,
            validation=validation,
        )

    @staticmethod
    def _failed(draft: DraftProposal, message: str, validation: ValidationResult) -> SubmissionOutcome:
        return SubmissionOutcome(
            status=SubmissionStatus.FAILED,
            messages=[message],
            draft=draft,
            validation=validation,
        )
