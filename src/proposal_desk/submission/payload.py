"""Normalization of a clean draft into the payload sent to the submission endpoint."""

from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from proposal_desk.amounts import format_plain, parse_amount
from proposal_desk.drafting.sequencer import resequence
from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import AttachmentFile, DraftProposal, Milestone
from proposal_desk.timeline import build_timeline_data

MILESTONE_FIELDS = ("sequence", "title", "description", "amount", "dueDate")


def iso_timestamp(moment: datetime) -> str:
    """UTC timestamp with millisecond precision and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def due_date_timestamp(due: Optional[date], now: Optional[datetime] = None) -> str:
    """Due date as a full timestamp at UTC midnight; falls back to now when missing."""
    if due is None:
        return iso_timestamp(now or datetime.now(timezone.utc))
    return iso_timestamp(datetime.combine(due, time.min, tzinfo=timezone.utc))


class PayloadMilestone(BaseModel):
    """Milestone as the backend expects it."""

    sequence: int
    title: str
    description: str
    amount: Decimal
    due_date: str = Field(..., description="ISO timestamp")


class ProposalPayload(BaseModel):
    """Everything the submission endpoint receives for one proposal."""

    reference_id: str
    bid_amount: Decimal
    timeline: str
    timeline_in_days: Decimal
    cover_letter: str
    milestones: list[PayloadMilestone] = Field(default_factory=list)
    attachments: list[AttachmentFile] = Field(default_factory=list)

    def form_fields(self) -> list[tuple[str, str]]:
        """Multipart text fields in wire order."""
        days = format_plain(self.timeline_in_days)
        fields = [
            ("serviceRequestId", self.reference_id),
            ("bidAmount", format_plain(self.bid_amount)),
            ("deliveryTime", days),
            ("timeline", self.timeline),
            ("timelineInDays", days),
            ("coverLetter", self.cover_letter),
        ]
        for idx, m in enumerate(self.milestones):
            values = (str(m.sequence), m.title, m.description, format_plain(m.amount), m.due_date)
            fields.extend(
                (f"milestones[{idx}][{name}]", value) for name, value in zip(MILESTONE_FIELDS, values)
            )
        return fields

    def files(self) -> list[tuple[str, tuple[str, bytes, str]]]:
        """Repeated 'attachments' file parts."""
        return [("attachments", (f.name, f.content, f.content_type)) for f in self.attachments]

    def multipart(self) -> list[tuple[str, tuple[Any, ...]]]:
        """All parts of the multipart body: text fields (no filename), then attachments."""
        return [(name, (None, value)) for name, value in self.form_fields()] + self.files()


def normalize_milestones(
    milestones: list[Milestone],
    *,
    now: Optional[datetime] = None,
) -> list[PayloadMilestone]:
    """Dense 1..N sequences, numeric amounts, ISO due dates, trimmed titles."""
    return [
        PayloadMilestone(
            sequence=m.sequence,
            title=m.title.strip(),
            description=m.description,
            amount=parse_amount(m.amount) or Decimal(0),
            due_date=due_date_timestamp(m.due_date, now),
        )
        for m in resequence(milestones)
    ]


def build_payload(
    draft: DraftProposal,
    opportunity: Opportunity,
    *,
    now: Optional[datetime] = None,
) -> ProposalPayload:
    """Package a validated draft for submission against opportunity."""
    timeline, timeline_in_days = build_timeline_data(draft.timeline_amount, draft.timeline_unit)
    return ProposalPayload(
        reference_id=opportunity.id,
        bid_amount=parse_amount(draft.bid_amount) or Decimal(0),
        timeline=timeline,
        timeline_in_days=timeline_in_days,
        cover_letter=draft.cover_letter,
        milestones=normalize_milestones(draft.milestones, now=now),
        attachments=list(draft.attachments),
    )
