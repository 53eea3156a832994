"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* The error boundary maps exceptions to exit codes.
"""

from __future__ import annotations

import runpy
import sys

import pytest

from cloud_kv import __version__
from cloud_kv.cli import app as app_module
from cloud_kv.cli import exit_codes
from cloud_kv.cli.app import cli, main
from cloud_kv.exceptions import (
    AlreadyExistsError,
    AmbiguousTargetError,
    CloudKvError,
    ConfigurationError,
    EnvironmentError,
    NotFoundByLabelError,
    NotFoundError,
    RemoteError,
)


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
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            NotFoundError,
            NotFoundByLabelError,
            AlreadyExistsError,
            RemoteError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CloudKvError]
    ) -> None:
        assert issubclass(exc_class, CloudKvError)

    def test_label_not_found_is_not_found(self) -> None:
        assert issubclass(NotFoundByLabelError, NotFoundError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(CloudKvError, Exception)

    def test_hint_is_stored(self) -> None:
        err = CloudKvError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = CloudKvError("boom")
        assert err.hint is None

    def test_ambiguous_keeps_candidates(self) -> None:
        err = AmbiguousTargetError("many", ("a", "b"), hint="pick one")
        assert isinstance(err, CloudKvError)
        assert err.candidates == ("a", "b")
        assert err.hint == "pick one"


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


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "create" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_command_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2

    def test_create_routes_to_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[str] = []

        def _handler(args: object) -> int:
            seen.append(getattr(args, "name"))
            return exit_codes.SUCCESS

        monkeypatch.setattr(app_module, "_handle_create", _handler)
        assert main(["create", "kv1"]) == exit_codes.SUCCESS
        assert seen == ["kv1"]

    def test_python_m_runs_cli(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["cloud-kv"])
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("cloud_kv", run_name="__main__")
        assert exc_info.value.code == exit_codes.SUCCESS
        assert "rename" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        def _raise(argv: object = None) -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", _raise)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "main", lambda: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS

    def test_known_error_prints_message_and_hint(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(
            monkeypatch,
            NotFoundError('No key value store found with name "kv1"', hint="check it"),
        )
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert 'No key value store found with name "kv1"' in err
        assert "check it" in err

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run_cli(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, RuntimeError("kaboom"))
        assert code == exit_codes.UNEXPECTED_ERROR
        assert "RuntimeError: kaboom" in capsys.readouterr().err

    def test_bracketed_names_printed_literally(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(
            monkeypatch,
            NotFoundError(
                'No key value store found with name "kv[/x]"',
                hint='Check the app "[bold]web"',
            ),
        )
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert 'No key value store found with name "kv[/x]"' in err
        assert 'Check the app "[bold]web"' in err

    def test_unexpected_error_with_brackets(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, KeyError("[/red]"))
        assert code == exit_codes.UNEXPECTED_ERROR
        assert "KeyError: '[/red]'" in capsys.readouterr().err
