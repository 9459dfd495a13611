"""In-memory listing of opportunities shown to a provider."""

import logging
from typing import Callable, Iterable, Optional

from proposal_desk.events import EventBus, ProposalSubmitted
from proposal_desk.models.opportunity import Opportunity

logger = logging.getLogger(__name__)


class OpportunityListing:
    """
    Locally cached opportunity list, in load order.
    Subscribes to ProposalSubmitted to apply the optimistic update
    (has_submitted -> True, proposals + 1) without another fetch.
    """

    def __init__(self, opportunities: Optional[Iterable[Opportunity]] = None):
        self._items: dict[str, Opportunity] = {}
        self._unsubscribe: Optional[Callable[[], None]] = None
        if opportunities:
            self.load(opportunities)

    def load(self, opportunities: Iterable[Opportunity]) -> None:
        """Replace the cached list."""
        self._items = {o.id: o for o in opportunities}

    def upsert(self, opportunity: Opportunity) -> None:
        self._items[opportunity.id] = opportunity

    def get(self, opportunity_id: str) -> Optional[Opportunity]:
        return self._items.get(opportunity_id)

    def get_all(self) -> list[Opportunity]:
        return list(self._items.values())

    def get_by_status(self, submitted: bool) -> list[Opportunity]:
        """Opportunities the provider has (or has not) proposed on."""
        return [o for o in self._items.values() if o.has_submitted == submitted]

    def count(self) -> int:
        return len(self._items)

    def mark_submitted(self, opportunity_id: str) -> Optional[Opportunity]:
        """
        Flag an opportunity as proposed and bump its proposal count.
        Returns the updated record, or None when it is not in the listing.
        """
        current = self._items.get(opportunity_id)
        if current is None:
            logger.debug("Opportunity %s not in listing; skipping optimistic update", opportunity_id)
            return None
        updated = current.model_copy(
            update={"has_submitted": True, "proposals": current.proposals + 1}
        )
        self._items[opportunity_id] = updated
        return updated

    def attach(self, bus: EventBus) -> None:
        """Start applying ProposalSubmitted events from bus."""
        self.detach()
        self._unsubscribe = bus.subscribe(ProposalSubmitted, self._on_submitted)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_submitted(self, event: ProposalSubmitted) -> None:
        self.mark_submitted(event.opportunity_id)
