"""Error taxonomy for the pre-push gates.

Every fatal condition is a PushGateError. Gates raise; the runner is the only
place that catches, prints the message and turns it into exit code 1.
"""

from __future__ import annotations

from typing import List, Optional, Sequence


class PushGateError(Exception):
    gate = ""
    exit_code = 1

    def __init__(self, message: str, *, details: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.message = message
        self.details: List[str] = list(details or [])


class BuildError(PushGateError):
    gate = "build"


class LintError(PushGateError):
    gate = "lint"


class UntrackedFilesError(PushGateError):
    gate = "untracked"


class UncommittedChangesError(PushGateError):
    gate = "uncommitted"


class BehindRemoteError(PushGateError):
    gate = "remote-sync"

    def __init__(self, message: str, *, behind: int, branch: str, **kwargs):
        super().__init__(message, **kwargs)
        self.behind = behind
        self.branch = branch


class RemoteStateError(PushGateError):
    """Fetch failed or the remote's default branch could not be resolved."""

    gate = "remote-sync"


class DivergenceError(PushGateError):
    gate = "divergence"


class NeedsPullError(DivergenceError):
    pass


class AheadError(DivergenceError):
    pass


class DivergedError(DivergenceError):
    pass


class GitCommandError(PushGateError):
    gate = "git"

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = ""):
        cmd = " ".join(args)
        msg = f"git command failed ({returncode}): {cmd}"
        err = (stderr or "").strip()
        super().__init__(msg, details=err.splitlines() if err else None)
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr


class UnrecognizedStatusWarning(UserWarning):
    """Status text matched none of the known states. Reported, never raised."""
