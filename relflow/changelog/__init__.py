"""Pending changelog fragments: reading, classifying and rendering."""

from relflow.changelog.classifier import classify
from relflow.changelog.collate import CollatedChanges, collate_fragments
from relflow.changelog.model import ChangeCategory, ChangeClassification, PendingChange

__all__ = [
    "ChangeCategory",
    "ChangeClassification",
    "CollatedChanges",
    "PendingChange",
    "classify",
    "collate_fragments",
]
