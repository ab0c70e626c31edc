"""Install the pre-push hook into a clone."""

from __future__ import annotations

import os
import stat
import sys
from pathlib import Path

from .commands import CommandRunner, run_command
from .errors import GitCommandError


MARKER = "# installed by pushgate"

HOOK_TEMPLATE = """#!/bin/sh
{marker}
# Bypass with: git push --no-verify
exec "{python}" -m pushgate run "$@"
"""


class HookInstallError(Exception):
    pass


def hooks_dir(root: str, run: CommandRunner = run_command) -> Path:
    """The clone's hooks directory (respects core.hooksPath)."""
    res = run(["git", "rev-parse", "--git-path", "hooks"], cwd=root, capture=True)
    if not res.ok:
        raise GitCommandError(res.args, res.returncode, res.stderr)
    path = Path(res.stdout.strip())
    if not path.is_absolute():
        path = Path(root) / path
    return path


def render_hook(python: str = sys.executable) -> str:
    return HOOK_TEMPLATE.format(marker=MARKER, python=python)


def is_our_hook(path: Path) -> bool:
    try:
        return MARKER in path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False


def install_hook(root: str, *, force: bool = False, run: CommandRunner = run_command) -> Path:
    hook = hooks_dir(root, run) / "pre-push"
    if hook.exists() and not is_our_hook(hook) and not force:
        raise HookInstallError(f"{hook} already exists and was not installed by pushgate (use --force)")
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text(render_hook(), encoding="utf-8")
    mode = hook.stat().st_mode
    os.chmod(hook, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook


def uninstall_hook(root: str, *, run: CommandRunner = run_command) -> bool:
    """Remove our hook. Returns False if there was nothing of ours to remove."""
    hook = hooks_dir(root, run) / "pre-push"
    if not hook.exists():
        return False
    if not is_our_hook(hook):
        raise HookInstallError(f"{hook} was not installed by pushgate; leaving it alone")
    hook.unlink()
    return True
