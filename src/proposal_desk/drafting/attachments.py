"""Attachment list edits and the count/size limits applied to them."""

from typing import Iterable, Optional

from proposal_desk.errors import AttachmentLimitError
from proposal_desk.models.proposal import AttachmentFile, DraftProposal
from proposal_desk.settings import SubmissionSettings


def _settings(settings: Optional[SubmissionSettings]) -> SubmissionSettings:
    return settings or SubmissionSettings()


def add_attachments(
    draft: DraftProposal,
    files: Iterable[AttachmentFile],
    *,
    settings: Optional[SubmissionSettings] = None,
) -> DraftProposal:
    """
    Add picked files to the draft.
    Raises AttachmentLimitError (draft unchanged) if any incoming file is over the
    size limit or the combined list would exceed the file count limit.
    """
    cfg = _settings(settings)
    incoming = list(files)
    if not incoming:
        return draft

    for f in incoming:
        if f.size_bytes > cfg.max_attachment_bytes:
            raise AttachmentLimitError(
                f'"{f.name}" exceeds {cfg.max_attachment_mb} MB.',
                filename=f.name,
            )

    combined = [*draft.attachments, *incoming]
    if len(combined) > cfg.max_attachments:
        raise AttachmentLimitError(
            f"You can upload a maximum of {cfg.max_attachments} files only. "
            "Remove some before adding new ones."
        )
    return draft.model_copy(update={"attachments": combined})


def remove_attachment(draft: DraftProposal, index: int) -> DraftProposal:
    """Drop the attachment at index."""
    if not 0 <= index < len(draft.attachments):
        raise IndexError(f"Attachment index {index} out of range (have {len(draft.attachments)})")
    return draft.model_copy(
        update={"attachments": [f for i, f in enumerate(draft.attachments) if i != index]}
    )


def check_attachments(
    files: list[AttachmentFile],
    *,
    settings: Optional[SubmissionSettings] = None,
) -> Optional[str]:
    """
    Submit-time precondition: count first, then each file's size.
    Returns the first violation message, or None when the attachments are acceptable.
    """
    cfg = _settings(settings)
    if len(files) > cfg.max_attachments:
        return f"You can upload a maximum of {cfg.max_attachments} attachments."
    for f in files:
        if f.size_bytes > cfg.max_attachment_bytes:
            return f'"{f.name}" is larger than {cfg.max_attachment_mb} MB'
    return None
