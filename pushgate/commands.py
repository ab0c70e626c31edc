"""Subprocess execution. Everything the hook runs goes through run_command."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Tuple


# Exit codes used when the process could not be run at all (shell convention).
NOT_FOUND = 127
TIMED_OUT = 124


@dataclass
class CommandResult:
    args: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# (args, cwd, capture, timeout, env) -> CommandResult
CommandRunner = Callable[..., CommandResult]


def run_command(
    args: Sequence[str],
    *,
    cwd: str,
    capture: bool = True,
    timeout: Optional[float] = None,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """Run a command and wait for it.

    With capture=False the child inherits stdout/stderr so build and lint
    output streams straight to the terminal running `git push`.
    """
    full_env = None
    if env:
        full_env = dict(os.environ)
        full_env.update(env)
    argv = tuple(str(a) for a in args)
    try:
        proc = subprocess.run(
            list(argv),
            cwd=cwd,
            env=full_env,
            stdin=subprocess.DEVNULL,
            capture_output=capture,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        return CommandResult(argv, NOT_FOUND, "", f"command not found: {e.filename or argv[0]}")
    except PermissionError as e:
        return CommandResult(argv, NOT_FOUND, "", f"command not executable: {e.filename or argv[0]}")
    except subprocess.TimeoutExpired:
        return CommandResult(argv, TIMED_OUT, "", f"timed out after {timeout:g}s")
    return CommandResult(argv, proc.returncode, proc.stdout or "", proc.stderr or "")
