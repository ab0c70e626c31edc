from __future__ import annotations

import pytest

from pushgate.build_tool import lint_task_configured, run_build, run_lint, task_listed
from pushgate.commands import NOT_FOUND, TIMED_OUT
from pushgate.errors import BuildError, LintError

from conftest import BUILD, LINT, TASKS


@pytest.mark.parametrize(
    "output, expected",
    [
        ("detekt - Analyze Kotlin code\n", True),
        ("Verification tasks\ncheck\ndetekt\n", True),
        ("detekt-cli - wrapper\n", True),
        ("detektMain - Run detekt analysis for main source set\n", False),
        ("  detekt - indented is not a task line\n", False),
        ("runDetekt\n", False),
        ("", False),
    ],
)
def test_task_listed(output, expected):
    assert task_listed(output, "detekt") is expected


def test_task_name_is_literal():
    assert task_listed("lint.all - dotted\n", "lint.all")
    assert not task_listed("lintXall\n", "lint.all")


def test_empty_task_name_never_matches():
    assert not task_listed("detekt\n", "")


def test_run_build_reports_missing_build_tool(make_ctx):
    ctx = make_ctx({BUILD: (NOT_FOUND, "", "command not found: ./gradlew")})

    with pytest.raises(BuildError) as exc:
        run_build(ctx)
    assert "command not found: ./gradlew" in exc.value.message


def test_run_build_reports_timeout(make_ctx):
    ctx = make_ctx({BUILD: (TIMED_OUT, "", "timed out after 5s")}, build_timeout=5.0)

    with pytest.raises(BuildError) as exc:
        run_build(ctx)
    assert "timed out after 5s" in exc.value.message


def test_build_exit_code_127_from_the_tool_itself(make_ctx):
    ctx = make_ctx({BUILD: (NOT_FOUND, "", "")})

    with pytest.raises(BuildError) as exc:
        run_build(ctx)
    assert "exit code 127" in exc.value.message


def test_run_build_uses_configured_command(make_ctx):
    cmd = ("make", "clean", "all")
    ctx = make_ctx({cmd: (0, "", "")}, build_command=list(cmd))

    run_build(ctx)
    assert ctx.run.calls == [cmd]


def test_lint_task_configured_with_custom_task(make_ctx):
    ctx = make_ctx({TASKS: (0, "ktlintCheck - Runs ktlint on all kotlin sources\n", "")}, lint_task="ktlintCheck")
    assert lint_task_configured(ctx)


def test_run_lint_skips_and_warns_when_absent(make_ctx):
    ctx = make_ctx({TASKS: (0, "build\n", "")})

    assert run_lint(ctx) is False
    assert ctx.run.calls == [TASKS]
    assert "Warning: detekt not configured for this project." in ctx.out.getvalue()


def test_run_lint_runs_with_continue_and_streams(make_ctx):
    ctx = make_ctx({TASKS: (0, "detekt\n", ""), LINT: (0, "", "")})

    assert run_lint(ctx) is True
    assert ctx.run.calls == [TASKS, LINT]
    assert ctx.run.kwargs[1]["capture"] is False


def test_run_lint_failure_raises(make_ctx):
    ctx = make_ctx({TASKS: (0, "detekt\n", ""), LINT: (1, "", "")})

    with pytest.raises(LintError, match="Detekt failed"):
        run_lint(ctx)
