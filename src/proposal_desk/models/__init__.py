"""Data models for opportunities and draft proposals."""

from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import AttachmentFile, DraftProposal, Milestone, TimelineUnit

__all__ = [
    "AttachmentFile",
    "DraftProposal",
    "Milestone",
    "Opportunity",
    "TimelineUnit",
]
