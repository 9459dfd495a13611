"""Proposal validation: field rules, milestone rules and the sum invariant."""

from .engine import (
    VALIDATED_FIELDS,
    FieldError,
    FieldOk,
    MilestoneErrors,
    ProposalValidator,
    ValidationResult,
    validate,
)
from .rules import MIN_COVER_LETTER_CHARS, milestone_total

__all__ = [
    "VALIDATED_FIELDS",
    "FieldError",
    "FieldOk",
    "MIN_COVER_LETTER_CHARS",
    "MilestoneErrors",
    "ProposalValidator",
    "ValidationResult",
    "milestone_total",
    "validate",
]
