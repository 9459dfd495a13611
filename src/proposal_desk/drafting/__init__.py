"""Pure transitions on a draft proposal: form fields, milestones, attachments."""

from .attachments import add_attachments, check_attachments, remove_attachment
from .form import edit_draft, empty_draft
from .sequencer import add_milestone, move_milestone, remove_milestone, resequence, update_milestone

__all__ = [
    "add_attachments",
    "add_milestone",
    "check_attachments",
    "edit_draft",
    "empty_draft",
    "move_milestone",
    "remove_attachment",
    "remove_milestone",
    "resequence",
    "update_milestone",
]
