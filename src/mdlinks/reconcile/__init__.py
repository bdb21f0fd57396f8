"""Rename reconciliation and link patching."""

from .engine import (
    ReconcileOutcome,
    fix_documents,
    plan_replacements,
    reconcile,
    reconcile_document,
)
from .patcher import Replacement, apply_replacements, escape_destination, patch_file

__all__ = [
    "ReconcileOutcome",
    "Replacement",
    "apply_replacements",
    "escape_destination",
    "fix_documents",
    "patch_file",
    "plan_replacements",
    "reconcile",
    "reconcile_document",
]
