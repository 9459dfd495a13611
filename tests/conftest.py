"""Pytest fixtures for proposal-desk tests."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from proposal_desk.errors import SubmissionError
from proposal_desk.models.opportunity import Opportunity
from proposal_desk.models.proposal import AttachmentFile, DraftProposal, Milestone
from proposal_desk.settings import SubmissionSettings
from proposal_desk.submission.client import SubmissionResponse
from proposal_desk.submission.payload import ProposalPayload

TODAY = date(2026, 3, 1)


def make_milestone(**kwargs) -> Milestone:
    """Complete milestone due next week."""
    defaults = {
        "title": "Design",
        "description": "Wireframes and visual design",
        "amount": "3000",
        "due_date": TODAY + timedelta(days=7),
    }
    defaults.update(kwargs)
    return Milestone(**defaults)


def make_draft(**kwargs) -> DraftProposal:
    """Draft that passes every rule against the sample opportunity."""
    defaults = {
        "bid_amount": "6000",
        "timeline_amount": "6",
        "timeline_unit": "week",
        "cover_letter": "I have built three similar apps and can start Monday.",
        "milestones": [
            make_milestone(sequence=1),
            make_milestone(
                sequence=2,
                title="Build",
                description="Implementation and QA",
                due_date=TODAY + timedelta(days=30),
            ),
        ],
    }
    defaults.update(kwargs)
    return DraftProposal(**defaults)


def make_file(name: str = "portfolio.pdf", size: int = 1024) -> AttachmentFile:
    return AttachmentFile(name=name, size_bytes=size, content=b"%PDF-1.4", content_type="application/pdf")


class FakeClient:
    """Stands in for ProposalClient; records payloads and replays a canned result."""

    def __init__(
        self,
        response: Optional[SubmissionResponse] = None,
        error: Optional[Exception] = None,
    ):
        self.response = response or SubmissionResponse(success=True)
        self.error = error
        self.payloads: list[ProposalPayload] = []

    @property
    def calls(self) -> int:
        return len(self.payloads)

    async def submit_proposal(self, payload: ProposalPayload) -> SubmissionResponse:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def opportunity() -> Opportunity:
    """Opportunity with a 5,000-10,000 budget and a two-month timeline."""
    return Opportunity(
        id="req-42",
        title="Mobile banking app",
        budget_min=Decimal("5000"),
        budget_max=Decimal("10000"),
        original_timeline="2 months",
        original_timeline_in_days=Decimal(60),
        proposals=3,
    )


@pytest.fixture
def clean_draft() -> DraftProposal:
    return make_draft()


@pytest.fixture
def settings() -> SubmissionSettings:
    return SubmissionSettings(api_url="https://api.example.test", token="secret-token")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def failing_client() -> FakeClient:
    return FakeClient(error=SubmissionError("Service unavailable", status_code=503))
