"""Parsing of the ref list git writes to a pre-push hook's stdin."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, TextIO

ZERO_SHA_CHARS = {"0"}


@dataclass
class PushRef:
    local_ref: str
    local_sha: str
    remote_ref: str
    remote_sha: str

    @property
    def is_delete(self) -> bool:
        return set(self.local_sha) <= ZERO_SHA_CHARS

    @property
    def is_new_branch(self) -> bool:
        return set(self.remote_sha) <= ZERO_SHA_CHARS


def parse_push_refs(text: str) -> List[PushRef]:
    """One `<local ref> <local sha> <remote ref> <remote sha>` per line."""
    out: List[PushRef] = []
    for raw in (text or "").splitlines():
        parts = raw.split()
        if len(parts) != 4:
            continue
        out.append(PushRef(*parts))
    return out


def read_push_refs(stream: Optional[TextIO]) -> List[PushRef]:
    """Read git's ref list; a terminal (manual run) yields nothing."""
    if stream is None:
        return []
    isatty = getattr(stream, "isatty", None)
    if isatty and isatty():
        return []
    return parse_push_refs(stream.read())
