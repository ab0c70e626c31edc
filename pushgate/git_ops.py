# git_ops.py
"""Read-only git queries used by the gates (plus `git fetch`)."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .commands import CommandResult, CommandRunner, run_command
from .errors import GitCommandError


# Prose output is matched on English keywords.
C_LOCALE = {"LC_ALL": "C", "LANG": "C"}

_HEAD_BRANCH_RE = re.compile(r"^\s*HEAD branch:\s*(\S+)\s*$", re.MULTILINE)


def _lines(text: str) -> List[str]:
    return [ln for ln in (text or "").splitlines() if ln.strip()]


def project_root(cwd: str, run: CommandRunner = run_command) -> str:
    """Top of the working tree containing `cwd`."""
    res = run(["git", "rev-parse", "--show-toplevel"], cwd=cwd, capture=True)
    if not res.ok:
        raise GitCommandError(res.args, res.returncode, res.stderr)
    return res.stdout.strip()


class Git:
    """git invoked in one working tree through an injectable runner."""

    def __init__(self, root: str, run: CommandRunner = run_command):
        self.root = root
        self.run = run

    def _git(self, *args: str, locale: bool = False) -> CommandResult:
        return self.run(
            ["git", *args],
            cwd=self.root,
            capture=True,
            env=C_LOCALE if locale else None,
        )

    def _checked(self, *args: str, locale: bool = False) -> str:
        res = self._git(*args, locale=locale)
        if not res.ok:
            raise GitCommandError(res.args, res.returncode, res.stderr)
        return res.stdout

    # -- working tree -------------------------------------------------------

    def untracked_files(self) -> List[str]:
        """Untracked paths not excluded by .gitignore and friends."""
        return _lines(self._checked("ls-files", "--others", "--exclude-standard"))

    def porcelain_status(self) -> List[str]:
        return _lines(self._checked("status", "--porcelain"))

    def status_summary(self) -> str:
        """`git status -uno` prose, used by the text classifier."""
        return self._checked("status", "-uno", locale=True)

    # -- refs -----------------------------------------------------------------

    def current_branch(self) -> str:
        """Short branch name, or "HEAD" when detached."""
        return self._checked("rev-parse", "--abbrev-ref", "HEAD").strip()

    def fetch(self, remote: str) -> CommandResult:
        return self._git("fetch", remote)

    def default_branch(self, remote: str) -> Optional[str]:
        """Resolve <remote>'s HEAD branch.

        `git remote show` asks the remote itself; the symbolic ref is the
        local record from clone time and serves as fallback.
        """
        res = self._git("remote", "show", remote, locale=True)
        if res.ok:
            m = _HEAD_BRANCH_RE.search(res.stdout)
            if m and m.group(1) != "(unknown)":
                return m.group(1)

        res = self._git("symbolic-ref", "--short", f"refs/remotes/{remote}/HEAD")
        if res.ok:
            ref = res.stdout.strip()
            prefix = f"{remote}/"
            if ref.startswith(prefix):
                ref = ref[len(prefix):]
            return ref or None
        return None

    def count_commits(self, rev_range: str) -> int:
        out = self._checked("rev-list", "--count", rev_range).strip()
        try:
            return int(out)
        except ValueError:
            raise GitCommandError(["git", "rev-list", "--count", rev_range], 0, f"unexpected output: {out!r}")

    def behind_count(self, remote: str, branch: str) -> int:
        """Commits on <remote>/<branch> that HEAD does not contain."""
        return self.count_commits(f"HEAD..{remote}/{branch}")

    def remote_names(self) -> List[str]:
        """Configured remotes; empty if git cannot list them."""
        res = self._git("remote")
        if not res.ok:
            return []
        return [ln.strip() for ln in _lines(res.stdout)]

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        res = self._git("rev-parse", "--verify", "--quiet", f"refs/remotes/{remote}/{branch}")
        return res.ok

    def upstream_ref(self) -> Optional[str]:
        """Upstream of the current branch (e.g. origin/feature), if configured."""
        res = self._git("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}")
        if not res.ok:
            return None
        return res.stdout.strip() or None

    def ahead_behind_upstream(self) -> Optional[Tuple[int, int]]:
        """(ahead, behind) of HEAD relative to its upstream; None without one."""
        if self.upstream_ref() is None:
            return None
        out = self._checked("rev-list", "--left-right", "--count", "HEAD...@{upstream}").split()
        if len(out) != 2:
            raise GitCommandError(["git", "rev-list", "--left-right", "--count", "HEAD...@{upstream}"], 0, f"unexpected output: {out!r}")
        return int(out[0]), int(out[1])
