"""Domain events emitted by the submission workflow, and a small in-process bus."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class ProposalSubmitted:
    """A proposal was accepted by the backend for the given opportunity."""

    opportunity_id: str
    bid_amount: Decimal
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventBus:
    """
    Synchronous publish/subscribe keyed by event type.
    A failing handler is logged and does not stop the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> Callable[[], None]:
        """Register handler for event_type. Returns a callable that unsubscribes it."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def publish(self, event: Any) -> None:
        """Deliver event to every handler subscribed to its type."""
        for handler in list(self._handlers.get(type(event), [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, type(event).__name__)
