"""Opportunity reference model consumed by validation and submission."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class Opportunity(BaseModel):
    """Client-posted request a provider bids on. Read-only to the proposal workflow."""

    id: str = Field(..., description="Backend service request ID")
    title: str = ""

    budget_min: Optional[Decimal] = None
    budget_max: Optional[Decimal] = None

    original_timeline: Optional[str] = Field(
        default=None,
        description="Timeline as posted by the client, e.g. '6 weeks'",
    )
    original_timeline_in_days: Decimal = Field(
        default=Decimal(0),
        description="Ceiling for the provider's timeline; 0 = unconstrained",
    )

    proposals: int = 0
    has_submitted: bool = False

    @property
    def budget_known(self) -> bool:
        """Both bounds present; the bid range is only enforced then."""
        return self.budget_min is not None and self.budget_max is not None
