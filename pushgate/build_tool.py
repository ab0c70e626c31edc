"""Build tool integration: clean build, task discovery, lint run."""

from __future__ import annotations

import re
from typing import Any

from .commands import NOT_FOUND, TIMED_OUT, CommandResult
from .errors import BuildError, LintError


def task_listed(tasks_output: str, task: str) -> bool:
    """True if some line of a task listing starts with `task` as a whole word.

    `detekt - Analyze...` and `detekt-cli` match; `detektMain` does not.
    """
    if not task:
        return False
    pattern = re.compile(rf"^{re.escape(task)}(?![\w])", re.MULTILINE)
    return bool(pattern.search(tasks_output or ""))


def _describe_failure(res: CommandResult) -> str:
    # Streamed commands capture no stderr, so a message here came from run_command.
    if res.returncode in (NOT_FOUND, TIMED_OUT) and res.stderr.startswith(("command not", "timed out")):
        return res.stderr
    return f"exit code {res.returncode}"


def run_build(ctx: Any) -> CommandResult:
    """Clean full build. Output streams to the terminal."""
    s = ctx.settings
    ctx.console.info("Building project...")
    res = ctx.run(s.build_command, cwd=ctx.root, capture=False, timeout=s.build_timeout)
    if not res.ok:
        raise BuildError(f"Build failed ({_describe_failure(res)}). Aborting push.")
    return res


def list_tasks(ctx: Any) -> CommandResult:
    s = ctx.settings
    return ctx.run(s.lint_list_command, cwd=ctx.root, capture=True, timeout=s.lint_timeout)


def lint_task_configured(ctx: Any) -> bool:
    """Whether the build exposes the lint task.

    A failing task listing counts as "not configured", same as an empty one.
    """
    res = list_tasks(ctx)
    if not res.ok:
        return False
    return task_listed(res.stdout, ctx.settings.lint_task)


def run_lint(ctx: Any) -> bool:
    """Run the lint task if present. Returns False when it was skipped."""
    s = ctx.settings
    if not lint_task_configured(ctx):
        ctx.console.warn(f"{s.lint_task} not configured for this project.")
        return False

    ctx.console.info(f"Running {s.lint_task}...")
    res = ctx.run(s.lint_command, cwd=ctx.root, capture=False, timeout=s.lint_timeout)
    if not res.ok:
        name = s.lint_task[:1].upper() + s.lint_task[1:]
        raise LintError(f"{name} failed ({_describe_failure(res)}). Aborting push.")
    return True
