"""Draft proposal, milestone and attachment models."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TimelineUnit(str, Enum):
    """Units a provider can express a delivery timeline in."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def _as_text(value: Any) -> Any:
    """Form inputs are kept as text; numbers are accepted and stringified."""
    if value is None:
        return ""
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return str(value)
    return value


class Milestone(BaseModel):
    """Priced, dated sub-deliverable of a proposal."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    sequence: int = Field(default=0, description="Derived: position + 1")
    title: str = ""
    description: str = ""
    amount: str = ""
    due_date: Optional[date] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("due_date", mode="before")
    @classmethod
    def _truncate_due_date(cls, value: Any) -> Any:
        """Due dates compare by calendar day; drop any time-of-day part."""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            return date.fromisoformat(value.strip()[:10])
        return value


class AttachmentFile(BaseModel):
    """A file picked for upload alongside the proposal."""

    model_config = ConfigDict(frozen=True)

    name: str
    size_bytes: int
    content: bytes = b""
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path, content_type: Optional[str] = None) -> "AttachmentFile":
        """Read a file from disk."""
        path = Path(path)
        data = path.read_bytes()
        return cls(
            name=path.name,
            size_bytes=len(data),
            content=data,
            content_type=content_type or "application/octet-stream",
        )


class DraftProposal(BaseModel):
    """
    In-progress, unsaved proposal owned by one submission session.
    Frozen: edits go through the drafting transitions, which return a new draft.
    """

    model_config = ConfigDict(frozen=True)

    bid_amount: str = ""
    timeline_amount: str = ""
    timeline_unit: str = ""
    cover_letter: str = ""
    milestones: list[Milestone] = Field(default_factory=list)
    attachments: list[AttachmentFile] = Field(default_factory=list)

    @field_validator("bid_amount", "timeline_amount", mode="before")
    @classmethod
    def _number_as_text(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator("timeline_unit", mode="before")
    @classmethod
    def _unit_as_text(cls, value: Any) -> Any:
        if isinstance(value, TimelineUnit):
            return value.value
        return "" if value is None else value

    @property
    def is_empty(self) -> bool:
        return self == DraftProposal()
