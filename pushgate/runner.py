# runner.py
"""Pre-push check runner: applies the gates in order, first failure wins."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .commands import CommandRunner, run_command
from .config import HookSettings
from .console import Console
from .errors import PushGateError
from .gates import (
    branch_exists_check,
    build_gate,
    divergence_gate,
    lint_gate,
    remote_sync_gate,
    uncommitted_changes_gate,
    untracked_files_gate,
)
from .git_ops import Git


# A gate returns False (or records a warning) when it passed with a caveat.
Gate = Callable[[Any], Optional[bool]]

GATES: Tuple[Tuple[str, Gate], ...] = (
    ("build", build_gate),
    ("lint", lint_gate),
    ("untracked", untracked_files_gate),
    ("uncommitted", uncommitted_changes_gate),
    ("remote-sync", remote_sync_gate),
    ("branch-exists", branch_exists_check),
    ("divergence", divergence_gate),
)

PASSED = "passed"
FAILED = "failed"
WARNED = "warned"


@dataclass
class CheckContext:
    root: str
    settings: HookSettings = field(default_factory=HookSettings)
    run: CommandRunner = run_command
    console: Console = field(default_factory=Console)

    # Transient values gates hand to later gates (branch names, counts).
    facts: Dict[str, Any] = field(default_factory=dict)
    warnings: List[Warning] = field(default_factory=list)
    outcomes: List[Tuple[str, str]] = field(default_factory=list)
    error: Optional[PushGateError] = None

    git: Git = field(init=False)

    def __post_init__(self) -> None:
        self.git = Git(self.root, self.run)


def run_checks(ctx: CheckContext, gates: Tuple[Tuple[str, Gate], ...] = GATES) -> int:
    """Run every gate; return 0 if all pass, else the failing error's exit code."""
    for name, gate in gates:
        warnings_before = len(ctx.warnings)
        try:
            result = gate(ctx)
        except PushGateError as e:
            ctx.outcomes.append((name, FAILED))
            ctx.error = e
            ctx.console.fail(e.message)
            for line in e.details:
                ctx.console.detail(line)
            return e.exit_code
        warned = result is False or len(ctx.warnings) > warnings_before
        ctx.outcomes.append((name, WARNED if warned else PASSED))

    ctx.console.ok("Pre-checks succeeded. Proceeding with push.")
    return 0
