"""Proposal submission and milestone reconciliation for a freelance marketplace."""

from proposal_desk.events import EventBus, ProposalSubmitted
from proposal_desk.models import AttachmentFile, DraftProposal, Milestone, Opportunity, TimelineUnit
from proposal_desk.session import ProposalSession
from proposal_desk.settings import SubmissionSettings
from proposal_desk.submission import ProposalClient, ProposalSubmitter, SubmissionOutcome, SubmissionStatus
from proposal_desk.validation import ValidationResult, validate

__all__ = [
    "AttachmentFile",
    "DraftProposal",
    "EventBus",
    "Milestone",
    "Opportunity",
    "ProposalClient",
    "ProposalSession",
    "ProposalSubmitted",
    "ProposalSubmitter",
    "SubmissionOutcome",
    "SubmissionSettings",
    "SubmissionStatus",
    "TimelineUnit",
    "ValidationResult",
    "validate",
]
