"""Proposal submission: payload packaging, HTTP client and orchestration."""

from .client import ProposalClient, SubmissionResponse
from .payload import PayloadMilestone, ProposalPayload, build_payload, normalize_milestones
from .submitter import ProposalSubmitter, SubmissionOutcome, SubmissionStatus

__all__ = [
    "PayloadMilestone",
    "ProposalClient",
    "ProposalPayload",
    "ProposalSubmitter",
    "SubmissionOutcome",
    "SubmissionResponse",
    "SubmissionStatus",
    "build_payload",
    "normalize_milestones",
]
