# gates.py
"""The pre-push gates, in the order the runner applies them.

Each gate takes the CheckContext and either returns normally (pass) or raises
a PushGateError subclass (fail). Non-fatal findings are printed as warnings.
"""

from __future__ import annotations

from typing import Any

from .build_tool import run_build, run_lint
from .errors import (
    AheadError,
    BehindRemoteError,
    DivergedError,
    NeedsPullError,
    RemoteStateError,
    UncommittedChangesError,
    UnrecognizedStatusWarning,
    UntrackedFilesError,
)
from .sync_status import SyncState, classify_counts, classify_status_text


# Listing stops after this many paths.
MAX_LISTED_PATHS = 20


def _clip(paths):
    shown = list(paths[:MAX_LISTED_PATHS])
    if len(paths) > MAX_LISTED_PATHS:
        shown.append(f"... and {len(paths) - MAX_LISTED_PATHS} more")
    return shown


def build_gate(ctx: Any) -> None:
    run_build(ctx)


def lint_gate(ctx: Any) -> bool:
    """False when the lint task is not configured and was skipped."""
    return run_lint(ctx)


def untracked_files_gate(ctx: Any) -> None:
    paths = ctx.git.untracked_files()
    if paths:
        raise UntrackedFilesError("Check failed: Untracked files found.", details=_clip(paths))


def uncommitted_changes_gate(ctx: Any) -> None:
    entries = ctx.git.porcelain_status()
    if entries:
        raise UncommittedChangesError("Check failed: Uncommitted changes found.", details=_clip(entries))


def remote_sync_gate(ctx: Any) -> None:
    """Fetch, then require HEAD to contain everything on the remote default branch."""
    remote = ctx.settings.remote
    git = ctx.git

    if ctx.settings.fetch:
        res = git.fetch(remote)
        if not res.ok:
            err = res.stderr.strip()
            raise RemoteStateError(
                f"Check failed: could not fetch from '{remote}'.",
                details=err.splitlines() if err else None,
            )

    default_branch = git.default_branch(remote)
    if not default_branch:
        raise RemoteStateError(f"Check failed: could not determine the default branch of '{remote}'.")

    current = git.current_branch()
    behind = git.behind_count(remote, default_branch)

    ctx.facts["current_branch"] = current
    ctx.facts["default_branch"] = default_branch
    ctx.facts["behind_count"] = behind

    if behind > 0:
        raise BehindRemoteError(
            f"Check failed: {current} is behind {remote}/{default_branch} by {behind} commits.",
            behind=behind,
            branch=current,
        )
    ctx.console.ok(f"Pass: {current} is up-to-date with {remote}/{default_branch}.")


def branch_exists_check(ctx: Any) -> None:
    """Informational only; never fails."""
    remote = ctx.settings.remote
    current = ctx.facts.get("current_branch") or ctx.git.current_branch()
    if current == "HEAD":
        ctx.console.info("HEAD is detached; skipping remote branch lookup.")
        return
    if ctx.git.remote_branch_exists(remote, current):
        ctx.console.info(f"Local branch '{current}' already exists on the remote '{remote}'.")
    else:
        ctx.console.info(f"Local branch '{current}' does not exist on the remote '{remote}' (or is not tracked).")


def _sync_state(ctx: Any) -> SyncState:
    if ctx.settings.status_mode == "structured":
        counts = ctx.git.ahead_behind_upstream()
        if counts is not None:
            ahead, behind = counts
            ctx.facts["upstream_ahead"] = ahead
            ctx.facts["upstream_behind"] = behind
            return classify_counts(ahead, behind)
    text = ctx.git.status_summary()
    ctx.facts["status_summary"] = text
    return classify_status_text(text)


def divergence_gate(ctx: Any) -> None:
    state = _sync_state(ctx)

    if state is SyncState.UP_TO_DATE:
        ctx.console.info("Branch is up to date with the remote.")
    elif state is SyncState.BEHIND:
        raise NeedsPullError("Branch is behind the remote (needs pull).")
    elif state is SyncState.AHEAD:
        raise AheadError("Branch is ahead of the remote (needs push).")
    elif state is SyncState.DIVERGED:
        raise DivergedError("Branch has diverged (needs merge/rebase).")
    elif state is SyncState.UNSTAGED_CHANGES:
        # Already rejected by the uncommitted-changes gate.
        pass
    else:
        summary = " ".join((ctx.facts.get("status_summary") or "").split())
        warning = UnrecognizedStatusWarning(f"Branch has an unhandled case: {summary}")
        ctx.warnings.append(warning)
        ctx.console.warn(str(warning))
