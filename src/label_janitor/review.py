"""
Label Janitor
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from label_janitor.config import Settings
from label_janitor.deletion import DeletionResult
from label_janitor.labels import Label

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "\n🚨 WARNING: this will delete the above labels. Proceed? (y/N) "

Confirm = Callable[[str], bool]
Deleter = Callable[[Sequence[Label]], List[DeletionResult]]


class ReviewOutcome(Enum):
    NOTHING_TO_DO = "nothing-to-do"
    DRY_RUN = "dry-run"
    ABORTED = "aborted"
    CONFIRMED = "confirmed"
    DELETED = "deleted"


def prompt_confirm(question: str) -> bool:
    """Ask on stdin; only ``y`` (any case, surrounding whitespace ignored) confirms."""
    try:
        answer = input(question)
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() == "y"


def review_unused_labels(
    unused: Sequence[Label],
    settings: Settings,
    *,
    confirm: Confirm = prompt_confirm,
    deleter: Optional[Deleter] = None,
    out: Callable[[str], None] = print,
) -> tuple[ReviewOutcome, List[DeletionResult]]:
    """
    Report the unused labels and walk the dry-run / confirmation gate.

    Nothing is deleted unless dry-run is off, the operator answers ``y`` and
    deletion is enabled in ``settings`` with a ``deleter`` supplied.
    """
    if not unused:
        out("✅ No empty labels to delete.")
        return ReviewOutcome.NOTHING_TO_DO, []

    out(f"🔍 Found {len(unused)} unused labels:")
    for label in unused:
        out(f"- {label.name}")

    if settings.dry_run:
        out("\n💡 Dry run enabled - no labels will be deleted.")
        return ReviewOutcome.DRY_RUN, []

    if not confirm(CONFIRM_PROMPT):
        out("❌ Deletion aborted by user.")
        return ReviewOutcome.ABORTED, []

    if not settings.deletion_enabled or deleter is None:
        logger.info("Deletion confirmed but disabled; %d labels left in place", len(unused))
        out("🚀 Deletion confirmed, but deletion is disabled (pass --enable-deletion to apply).")
        return ReviewOutcome.CONFIRMED, []

    out("🚀 Proceeding with deletion.")
    return ReviewOutcome.DELETED, deleter(unused)
