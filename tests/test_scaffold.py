"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The error taxonomy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from taskwright import __version__
from taskwright.cli import exit_codes
from taskwright.cli.app import cli, main
from taskwright.exceptions import ErrorKind, TaskwrightError, missing_dependency


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

class TestExceptions:
    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(TaskwrightError, Exception)

    def test_message_from_template(self) -> None:
        err = TaskwrightError(ErrorKind.UNRECOGNIZED_TASK, task="compile")
        assert str(err) == "Unrecognized task compile"
        assert err.kind is ErrorKind.UNRECOGNIZED_TASK
        assert err.context == {"task": "compile"}

    def test_hint_is_stored(self) -> None:
        err = TaskwrightError(ErrorKind.UNEXPECTED, reason="boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = TaskwrightError(ErrorKind.UNEXPECTED, reason="boom")
        assert err.hint is None

    def test_context_is_read_only(self) -> None:
        err = TaskwrightError(ErrorKind.UNRECOGNIZED_TASK, task="compile")
        with pytest.raises(TypeError):
            err.context["task"] = "other"  # type: ignore[index]

    def test_missing_context_key_is_a_bug(self) -> None:
        with pytest.raises(KeyError):
            TaskwrightError(ErrorKind.UNRECOGNIZED_TASK)

    def test_missing_dependency_message(self) -> None:
        err = missing_dependency("rich")
        assert err.kind is ErrorKind.MISSING_DEPENDENCY
        assert str(err) == "rich is not installed. Install with: pip install rich"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    @pytest.mark.parametrize("kind", [k for k in ErrorKind if k is not ErrorKind.UNEXPECTED])
    def test_domain_kinds_map_to_general_error(self, kind: ErrorKind) -> None:
        assert exit_codes.for_error_kind(kind) == exit_codes.GENERAL_ERROR

    def test_unexpected_maps_to_unexpected_error(self) -> None:
        assert exit_codes.for_error_kind(ErrorKind.UNEXPECTED) == exit_codes.UNEXPECTED_ERROR


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_prints_help(
        self, project_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main([], environ={}, cwd=project_dir, interactive=False)
        assert code == exit_codes.SUCCESS
        assert "AVAILABLE TASKS" in capsys.readouterr().out

    def test_version_flag(
        self, project_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(["--version"], environ={}, cwd=project_dir, interactive=False)
        assert code == exit_codes.SUCCESS
        assert capsys.readouterr().out.strip() == __version__

    def test_cli_exits_with_main_code(self) -> None:
        with patch("taskwright.cli.app.main", return_value=exit_codes.GENERAL_ERROR):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
