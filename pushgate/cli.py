#!/usr/bin/env python3
"""
pushgate CLI
Entry point for the pre-push hook and its installer
"""
import os
import sys

from .__about__ import __version__


COMMANDS = ("run", "install", "uninstall", "tasks")


def _resolve_root(root):
    from .errors import GitCommandError
    from .git_ops import project_root

    if root:
        return os.path.abspath(root)
    try:
        return project_root(os.getcwd())
    except GitCommandError as e:
        print(f"[pre-push] ERROR: not inside a git working tree ({e})")
        return None


def run(args):
    """Run the gates as git's pre-push hook would."""
    from .config import load_settings
    from .console import Console
    from .git_ops import Git
    from .push_refs import read_push_refs
    from .runner import CheckContext, run_checks

    root = _resolve_root(args.root)
    if root is None:
        return 1

    settings = load_settings(root, args.config)
    if args.no_color:
        settings.color = "never"
    console = Console(color=settings.color)

    # Git passes a URL here when pushing to one directly; only named remotes
    # have refs/remotes/<name>/* to compare against.
    destination = args.remote or settings.remote
    if args.remote and args.remote != settings.remote:
        if args.remote in Git(root).remote_names():
            settings.remote = args.remote
        else:
            console.info(f"'{args.remote}' is not a configured remote; checking against '{settings.remote}'.")

    refs = read_push_refs(sys.stdin)
    if refs:
        console.info(f"Pushing {len(refs)} ref(s) to '{destination}':")
        for ref in refs:
            target = "(delete)" if ref.is_delete else ref.local_ref
            console.detail(f"{target} -> {ref.remote_ref}")

    ctx = CheckContext(root=root, settings=settings, console=console)
    return run_checks(ctx)


def install(args):
    from .hook_install import HookInstallError, install_hook

    root = _resolve_root(args.root)
    if root is None:
        return 1
    try:
        hook = install_hook(root, force=args.force)
    except HookInstallError as e:
        print(f"[pre-push] ERROR: {e}")
        return 1
    print(f"[pre-push] Installed pre-push hook: {hook}")
    return 0


def uninstall(args):
    from .hook_install import HookInstallError, uninstall_hook

    root = _resolve_root(args.root)
    if root is None:
        return 1
    try:
        removed = uninstall_hook(root)
    except HookInstallError as e:
        print(f"[pre-push] ERROR: {e}")
        return 1
    print("[pre-push] Removed pre-push hook." if removed else "[pre-push] No pre-push hook installed.")
    return 0


def tasks(args):
    """Print the gate order and the commands they will run."""
    from .config import load_settings
    from .runner import GATES

    root = _resolve_root(args.root)
    if root is None:
        return 1
    s = load_settings(root, args.config)
    print(f"[pre-push] root: {root}")
    for i, (name, _gate) in enumerate(GATES, start=1):
        print(f"{i}) {name}")
    print(f"build:  {' '.join(s.build_command)}")
    print(f"lint:   {' '.join(s.lint_command)} (if '{s.lint_task}' is listed by {' '.join(s.lint_list_command)})")
    print(f"remote: {s.remote} (fetch={'yes' if s.fetch else 'no'}, status mode={s.status_mode})")
    return 0


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="pushgate",
        description="pushgate: pre-push PR-readiness checks",
        epilog="Example: pushgate install   (then just `git push`)"
    )
    parser.add_argument("--version", action="version", version=f"pushgate {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run the gates (default; what the hook calls)")
    run_parser.add_argument("remote", nargs="?", default=None, help="Remote name (passed by git)")
    run_parser.add_argument("url", nargs="?", default=None, help="Remote URL (passed by git, unused)")
    run_parser.add_argument("--no-color", action="store_true", help="Disable colored output")

    install_parser = subparsers.add_parser("install", help="Install the pre-push hook into this clone")
    install_parser.add_argument("--force", action="store_true", help="Overwrite an existing foreign hook")

    subparsers.add_parser("uninstall", help="Remove the pre-push hook installed by pushgate")
    subparsers.add_parser("tasks", help="Show the gate order and configured commands")

    for name, sub in subparsers.choices.items():
        sub.add_argument("--root", default=None, help="Project root (default: git top-level of cwd)")
        if name in ("run", "tasks"):
            sub.add_argument("--config", default=None, help="Extra YAML config merged over .pushgate.yaml")

    return parser


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)
    # Git calls the hook as `pre-push <remote> <url>`; no subcommand means run.
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version")):
        argv = ["run"] + argv

    parser = build_parser()
    args = parser.parse_args(argv)

    handlers = {"run": run, "install": install, "uninstall": uninstall, "tasks": tasks}
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
