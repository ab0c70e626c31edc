"""Local-vs-upstream classification."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class SyncState(str, Enum):
    UP_TO_DATE = "up_to_date"
    BEHIND = "behind"
    AHEAD = "ahead"
    DIVERGED = "diverged"
    UNSTAGED_CHANGES = "unstaged_changes"
    UNRECOGNIZED = "unrecognized"


# Checked in order; "up to date" wins over everything else.
_TEXT_MARKERS: Tuple[Tuple[str, SyncState], ...] = (
    ("up to date", SyncState.UP_TO_DATE),
    ("behind", SyncState.BEHIND),
    ("ahead", SyncState.AHEAD),
    ("diverged", SyncState.DIVERGED),
    ("Changes not staged for commit", SyncState.UNSTAGED_CHANGES),
)


def classify_status_text(text: str) -> SyncState:
    """Classify `git status -uno` output by keyword."""
    s = text or ""
    for marker, state in _TEXT_MARKERS:
        if marker in s:
            return state
    return SyncState.UNRECOGNIZED


def classify_counts(ahead: int, behind: int) -> SyncState:
    if ahead > 0 and behind > 0:
        return SyncState.DIVERGED
    if behind > 0:
        return SyncState.BEHIND
    if ahead > 0:
        return SyncState.AHEAD
    return SyncState.UP_TO_DATE
