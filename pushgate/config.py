# config.py
"""Configuration management for the pre-push gates."""

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml


# ---------------------------------------------------------------------------
# Config Loading
# ---------------------------------------------------------------------------

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(HERE, "pushgate_config.yaml")
REPO_CONFIG_NAME = ".pushgate.yaml"

STATUS_MODES = ("structured", "text")
COLOR_MODES = ("auto", "always", "never")


def _load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"top-level YAML value must be a mapping, got {type(data).__name__}")
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


CFG: Dict[str, Any] = {}


def load_config(path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    global CFG
    try:
        CFG = _load_yaml(path)
    except Exception as e:
        CFG = {}
        print(f"[pre-push] failed to load config '{path}': {e}")
    return CFG


def merge_config(path: str) -> Dict[str, Any]:
    """Overlay a repo-local YAML file on top of the loaded defaults.

    A missing file is not an error. A broken one is reported and the
    previously loaded values stay in effect.
    """
    global CFG
    if not os.path.isfile(path):
        return CFG
    try:
        CFG = _deep_merge(CFG, _load_yaml(path))
    except Exception as e:
        print(f"[pre-push] failed to load config '{path}': {e}")
    return CFG


def cfg_get(path: str, default: Any) -> Any:
    """Get config value by dot-separated path (e.g., 'remote.name')."""
    cur: Any = CFG
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


# Load config on import
load_config(DEFAULT_CONFIG_PATH)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def _as_command(value: Any, default: List[str]) -> List[str]:
    if isinstance(value, str):
        parts = value.split()
        return parts or list(default)
    if isinstance(value, (list, tuple)) and value:
        return [str(v) for v in value]
    return list(default)


_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _as_bool(value: Any, default: bool) -> bool:
    """YAML booleans pass through; quoted words are read; anything else is the default."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    return default


def _as_timeout(value: Any) -> Optional[float]:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds > 0 else None


@dataclass
class HookSettings:
    build_command: List[str] = field(default_factory=lambda: ["./gradlew", "clean", "build"])
    build_timeout: Optional[float] = None

    lint_task: str = "detekt"
    lint_list_command: List[str] = field(default_factory=lambda: ["./gradlew", "tasks", "--all"])
    lint_command: List[str] = field(default_factory=lambda: ["./gradlew", "detekt", "--continue"])
    lint_timeout: Optional[float] = None

    remote: str = "origin"
    fetch: bool = True

    # "structured" asks git for ahead/behind counts; "text" parses `git status -uno`.
    status_mode: str = "structured"

    color: str = "auto"

    @classmethod
    def from_config(cls) -> "HookSettings":
        """Build settings from the currently loaded CFG."""
        d = cls()
        status_mode = str(cfg_get("sync.status_mode", d.status_mode)).strip().lower()
        color = str(cfg_get("output.color", d.color)).strip().lower()
        return cls(
            build_command=_as_command(cfg_get("build.command", None), d.build_command),
            build_timeout=_as_timeout(cfg_get("build.timeout_seconds", 0)),
            lint_task=str(cfg_get("lint.task", d.lint_task)).strip() or d.lint_task,
            lint_list_command=_as_command(cfg_get("lint.list_command", None), d.lint_list_command),
            lint_command=_as_command(cfg_get("lint.command", None), d.lint_command),
            lint_timeout=_as_timeout(cfg_get("lint.timeout_seconds", 0)),
            remote=str(cfg_get("remote.name", d.remote)).strip() or d.remote,
            fetch=_as_bool(cfg_get("remote.fetch", d.fetch), d.fetch),
            status_mode=status_mode if status_mode in STATUS_MODES else d.status_mode,
            color=color if color in COLOR_MODES else d.color,
        )


def load_settings(root: str, config_path: Optional[str] = None) -> HookSettings:
    """Defaults, then <root>/.pushgate.yaml, then an explicit --config file."""
    load_config(DEFAULT_CONFIG_PATH)
    merge_config(os.path.join(root, REPO_CONFIG_NAME))
    if config_path:
        if not os.path.isfile(config_path):
            print(f"[pre-push] config file not found: {config_path}")
        else:
            merge_config(config_path)
    return HookSettings.from_config()
