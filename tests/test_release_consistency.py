from __future__ import annotations

import importlib.util
from pathlib import Path


def _load_module():
    script_path = Path(__file__).resolve().parent / "pre_release_consistency_check.py"
    spec = importlib.util.spec_from_file_location("pre_release_consistency_check", script_path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_repo_is_release_consistent(capsys):
    module = _load_module()

    assert module.main() == 0
    assert "[pre-release] PASS" in capsys.readouterr().out


def test_version_mismatch_is_reported(monkeypatch, tmp_path, capsys):
    module = _load_module()
    about = tmp_path / "__about__.py"
    about.write_text('__version__ = "9.9.9"\n', encoding="utf-8")
    monkeypatch.setattr(module, "ABOUT", about)

    assert module.main() == 1
    assert "Version mismatch" in capsys.readouterr().out
