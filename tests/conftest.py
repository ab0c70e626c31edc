from __future__ import annotations

import io
from typing import Dict, List, Optional, Tuple

import pytest

from pushgate.commands import CommandResult
from pushgate.config import HookSettings
from pushgate.console import Console
from pushgate.runner import CheckContext


BUILD = ("./gradlew", "clean", "build")
TASKS = ("./gradlew", "tasks", "--all")
LINT = ("./gradlew", "detekt", "--continue")
UNTRACKED = ("git", "ls-files", "--others", "--exclude-standard")
PORCELAIN = ("git", "status", "--porcelain")
FETCH = ("git", "fetch", "origin")
REMOTE_SHOW = ("git", "remote", "show", "origin")
SYMREF = ("git", "symbolic-ref", "--short", "refs/remotes/origin/HEAD")
CURRENT_BRANCH = ("git", "rev-parse", "--abbrev-ref", "HEAD")
BEHIND = ("git", "rev-list", "--count", "HEAD..origin/main")
BRANCH_EXISTS = ("git", "rev-parse", "--verify", "--quiet", "refs/remotes/origin/feature/login")
UPSTREAM = ("git", "rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}")
AHEAD_BEHIND = ("git", "rev-list", "--left-right", "--count", "HEAD...@{upstream}")
STATUS_UNO = ("git", "status", "-uno")

TASKS_WITH_DETEKT = """\
Verification tasks
------------------
check - Runs all checks.
detekt - Analyze Kotlin code with detekt.
detektMain - Run detekt analysis for main source set
"""

REMOTE_SHOW_MAIN = """\
* remote origin
  Fetch URL: git@example.com:team/app.git
  Push  URL: git@example.com:team/app.git
  HEAD branch: main
  Remote branches:
    main tracked
"""

STATUS_UP_TO_DATE = """\
On branch feature/login
Your branch is up to date with 'origin/feature/login'.

nothing to commit (use -u to show untracked files)
"""


def clean_responses() -> Dict[Tuple[str, ...], Tuple[int, str, str]]:
    """Command results for a clean, buildable, up-to-date feature branch."""
    return {
        BUILD: (0, "", ""),
        TASKS: (0, TASKS_WITH_DETEKT, ""),
        LINT: (0, "", ""),
        UNTRACKED: (0, "", ""),
        PORCELAIN: (0, "", ""),
        FETCH: (0, "", ""),
        REMOTE_SHOW: (0, REMOTE_SHOW_MAIN, ""),
        CURRENT_BRANCH: (0, "feature/login\n", ""),
        BEHIND: (0, "0\n", ""),
        BRANCH_EXISTS: (0, "4b825dc642cb6eb9a060e54bf8d69288fbee4904\n", ""),
        UPSTREAM: (0, "origin/feature/login\n", ""),
        AHEAD_BEHIND: (0, "0\t0\n", ""),
        STATUS_UNO: (0, STATUS_UP_TO_DATE, ""),
    }


class FakeRunner:
    """Scripted stand-in for run_command that records every invocation."""

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Tuple[int, str, str]]] = None):
        self.responses = dict(responses or {})
        self.calls: List[Tuple[str, ...]] = []
        self.kwargs: List[dict] = []

    def __call__(self, args, *, cwd, capture=True, timeout=None, env=None) -> CommandResult:
        argv = tuple(str(a) for a in args)
        self.calls.append(argv)
        self.kwargs.append({"cwd": cwd, "capture": capture, "timeout": timeout, "env": env})
        rc, out, err = self.responses.get(argv, (1, "", f"unexpected command: {' '.join(argv)}"))
        return CommandResult(argv, rc, out, err)

    def ran(self, argv: Tuple[str, ...]) -> bool:
        return argv in self.calls


@pytest.fixture
def responses():
    return clean_responses()


@pytest.fixture
def make_ctx(tmp_path):
    def _make(responses, **overrides):
        out = io.StringIO()
        settings = HookSettings(**overrides)
        ctx = CheckContext(
            root=str(tmp_path),
            settings=settings,
            run=FakeRunner(responses),
            console=Console(stream=out, color="never"),
        )
        ctx.out = out
        return ctx

    return _make
