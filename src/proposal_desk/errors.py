"""Exceptions raised by proposal-desk."""

from typing import Optional


class ProposalDeskError(Exception):
    """Base class for proposal-desk errors."""


class AttachmentLimitError(ProposalDeskError, ValueError):
    """An attachment would exceed the per-proposal count or per-file size limit."""

    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.filename = filename


class SubmissionError(ProposalDeskError):
    """The submission endpoint failed or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotAuthenticatedError(SubmissionError):
    """No bearer token is available for the submission call."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)


class SettingsError(ProposalDeskError):
    """Submission settings could not be loaded."""
